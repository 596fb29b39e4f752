"""In-memory implementation of ContactRepository (no DB)."""

import itertools
from dataclasses import replace
from datetime import datetime, timezone

from phonebook.domain import Contact, Phone


def _matches(contact: Contact, needle: str) -> bool:
    if needle in contact.name.upper():
        return True
    return any(needle in phone.phone_number.upper() for phone in contact.phones)


class InMemoryContactRepository:
    """Stores contacts in memory. Ids are assigned from counters starting at 1,
    mirroring identity columns; phone ids are never reused.
    """

    def __init__(self) -> None:
        self._by_id: dict[int, Contact] = {}
        self._contact_ids = itertools.count(1)
        self._phone_ids = itertools.count(1)

    def _new_phones(
        self, contact_id: int, phones: tuple[Phone, ...], now: datetime
    ) -> tuple[Phone, ...]:
        return tuple(
            Phone(
                id=next(self._phone_ids),
                phone_number=phone.phone_number,
                contact_id=contact_id,
                created_at=now,
            )
            for phone in phones
        )

    def _page(
        self, contacts: list[Contact], page: int, page_size: int
    ) -> tuple[list[Contact], int]:
        ordered = sorted(contacts, key=lambda c: (c.name, c.id))
        skip = (page - 1) * page_size
        return ordered[skip : skip + page_size], len(ordered)

    def list_page(self, page: int, page_size: int) -> tuple[list[Contact], int]:
        return self._page(list(self._by_id.values()), page, page_size)

    def search(
        self, term: str, page: int, page_size: int
    ) -> tuple[list[Contact], int]:
        if not term or not term.strip():
            return self.list_page(page, page_size)
        needle = term.upper()
        matched = [c for c in self._by_id.values() if _matches(c, needle)]
        return self._page(matched, page, page_size)

    def get_by_id(self, contact_id: int) -> Contact | None:
        return self._by_id.get(contact_id)

    def create(self, contact: Contact) -> Contact:
        now = datetime.now(timezone.utc)
        contact_id = next(self._contact_ids)
        stored = replace(
            contact,
            id=contact_id,
            created_at=now,
            updated_at=now,
            phones=self._new_phones(contact_id, contact.phones, now),
        )
        self._by_id[contact_id] = stored
        return stored

    def update(self, contact_id: int, contact: Contact) -> Contact | None:
        existing = self._by_id.get(contact_id)
        if existing is None:
            return None
        now = datetime.now(timezone.utc)
        stored = replace(
            existing,
            name=contact.name,
            age=contact.age,
            updated_at=now,
            phones=self._new_phones(contact_id, contact.phones, now),
        )
        self._by_id[contact_id] = stored
        return stored

    def delete(self, contact_id: int) -> Contact | None:
        return self._by_id.pop(contact_id, None)
