"""Tests for SqlAlchemyContactRepository against a SQLite file per test."""

import pytest
from sqlalchemy import func, select

from phonebook.application import MAX_PAGE, MAX_PAGE_SIZE
from phonebook.domain import Contact, Phone
from phonebook.infrastructure import (
    SqlAlchemyContactRepository,
    create_db_engine,
    create_session_factory,
    init_database,
    seed_contacts,
)
from phonebook.infrastructure.persistence.models import PhoneRecord


@pytest.fixture
def session_factory(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'phonebook.db'}")
    init_database(engine, max_retries=1)
    try:
        yield create_session_factory(engine)
    finally:
        engine.dispose()


@pytest.fixture
def repo(session_factory):
    return SqlAlchemyContactRepository(session_factory)


def _contact(name: str, age: int = 30, *numbers: str) -> Contact:
    return Contact(
        name=name,
        age=age,
        phones=[Phone(phone_number=n) for n in (numbers or ("555-0000",))],
    )


def _phone_count(session_factory) -> int:
    with session_factory() as session:
        return session.scalar(select(func.count()).select_from(PhoneRecord))


def test_create_assigns_ids_and_timestamps(repo):
    created = repo.create(_contact("Alice", 25, "123-456-7890"))

    assert created.id == 1
    assert created.name == "Alice"
    assert created.age == 25
    assert created.created_at is not None
    assert created.created_at == created.updated_at
    assert len(created.phones) == 1
    phone = created.phones[0]
    assert phone.id is not None
    assert phone.contact_id == created.id
    assert phone.phone_number == "123-456-7890"
    assert phone.created_at == created.created_at


def test_get_by_id_round_trip(repo):
    created = repo.create(_contact("Bob", 40, "111", "222"))

    found = repo.get_by_id(created.id)
    assert found is not None
    assert found.name == "Bob"
    assert found.age == 40
    assert sorted(p.phone_number for p in found.phones) == ["111", "222"]
    assert found.created_at == found.updated_at
    assert found.created_at.tzinfo is not None

    assert repo.get_by_id(999) is None


def test_list_page_orders_by_name_and_counts_all(repo):
    for name in ["Carol", "Alice", "Bob"]:
        repo.create(_contact(name))

    items, total = repo.list_page(1, 2)
    assert [c.name for c in items] == ["Alice", "Bob"]
    assert total == 3

    items, total = repo.list_page(2, 2)
    assert [c.name for c in items] == ["Carol"]
    assert total == 3

    items, total = repo.list_page(5, 2)
    assert items == []
    assert total == 3


def test_list_page_loads_phones(repo):
    repo.create(_contact("Alice", 25, "1", "2", "3"))
    items, _ = repo.list_page(1, 10)
    assert [p.phone_number for p in items[0].phones] == ["1", "2", "3"]


def test_search_blank_term_same_as_list_page(repo):
    for name in ["Carol", "Alice", "Bob"]:
        repo.create(_contact(name))

    expected = repo.list_page(1, 2)
    assert repo.search("", 1, 2) == expected
    assert repo.search("  \t ", 1, 2) == expected


def test_search_by_name_case_insensitive(repo):
    repo.create(_contact("Alice"))
    repo.create(_contact("Malice"))
    repo.create(_contact("Bob"))

    upper_items, upper_total = repo.search("ALICE", 1, 10)
    lower_items, lower_total = repo.search("alice", 1, 10)
    assert [c.name for c in upper_items] == ["Alice", "Malice"]
    assert upper_total == lower_total == 2
    assert upper_items == lower_items


def test_search_by_phone_number(repo):
    repo.create(_contact("John Smith", 32, "+1-555-0101", "+1-555-0102"))
    repo.create(_contact("Jane Doe", 28, "+1-555-0201"))

    items, total = repo.search("0101", 1, 10)
    assert [c.name for c in items] == ["John Smith"]
    assert total == 1
    # Contact with two matching phones is returned once, with all phones loaded.
    items, total = repo.search("555-01", 1, 10)
    assert total == 1
    assert len(items[0].phones) == 2


def test_search_treats_wildcards_literally(repo):
    repo.create(_contact("Alice"))
    repo.create(_contact("100% Bob"))

    items, total = repo.search("%", 1, 10)
    assert [c.name for c in items] == ["100% Bob"]
    assert total == 1
    assert repo.search("_", 1, 10) == ([], 0)


def test_search_paginates_matches(repo):
    for name in ["Ann", "Anna", "Annie", "Bob"]:
        repo.create(_contact(name))

    items, total = repo.search("ann", 2, 2)
    assert [c.name for c in items] == ["Annie"]
    assert total == 3


def test_update_replaces_fields_and_phones(repo, session_factory):
    created = repo.create(_contact("Alice", 25, "A", "B"))
    old_phone_ids = {p.id for p in created.phones}

    updated = repo.update(created.id, _contact("Alicia", 26, "C"))
    assert updated is not None
    assert updated.id == created.id
    assert updated.name == "Alicia"
    assert updated.age == 26
    assert [p.phone_number for p in updated.phones] == ["C"]
    assert updated.phones[0].id not in old_phone_ids
    assert updated.created_at == created.created_at
    assert updated.updated_at >= updated.created_at
    assert _phone_count(session_factory) == 1

    with session_factory() as session:
        for phone_id in old_phone_ids:
            assert session.get(PhoneRecord, phone_id) is None


def test_update_not_found(repo):
    assert repo.update(123, _contact("Ghost")) is None


def test_delete_returns_snapshot_and_cascades(repo, session_factory):
    keep = repo.create(_contact("Bob", 40, "999"))
    created = repo.create(_contact("Alice", 25, "111", "222"))

    deleted = repo.delete(created.id)
    assert deleted is not None
    assert deleted.id == created.id
    assert sorted(p.phone_number for p in deleted.phones) == ["111", "222"]
    assert repo.get_by_id(created.id) is None
    assert repo.get_by_id(keep.id) is not None
    assert _phone_count(session_factory) == 1


def test_delete_not_found(repo):
    assert repo.delete(123) is None


def test_seed_contacts_only_into_empty_store(session_factory, repo):
    assert seed_contacts(session_factory) == 12
    assert seed_contacts(session_factory) == 0

    _, total = repo.list_page(1, 10)
    assert total == 12
    items, _ = repo.search("0101", 1, 10)
    assert [c.name for c in items] == ["John Smith"]


def test_search_case_insensitive_non_ascii(repo):
    repo.create(_contact("José"))
    repo.create(_contact("Zoë Ångström"))
    repo.create(_contact("Bob"))

    for term in ["José", "josé", "JOSÉ"]:
        items, total = repo.search(term, 1, 10)
        assert [c.name for c in items] == ["José"], term
        assert total == 1
    items, _ = repo.search("ångström", 1, 10)
    assert [c.name for c in items] == ["Zoë Ångström"]


def test_largest_clamped_page_is_empty(repo):
    repo.create(_contact("Alice"))

    assert repo.list_page(MAX_PAGE, MAX_PAGE_SIZE) == ([], 1)
    assert repo.search("alice", MAX_PAGE, MAX_PAGE_SIZE) == ([], 1)
