"""SQLAlchemy implementation of ContactRepository.
Tables: contact (1) -> (n) phone. Every call runs in its own session; writes are
one transaction each. Store errors propagate unchanged, nothing is retried.
"""

from datetime import datetime, timezone

from sqlalchemy import Select, String, func, or_, select
from sqlalchemy.orm import Session, selectinload, sessionmaker

from phonebook.domain import Contact, Phone
from phonebook.infrastructure.persistence.models import ContactRecord, PhoneRecord


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(dt: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone=True columns.
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


class SqlAlchemyContactRepository:
    """Stores contacts in a relational database through the ORM schema in models.py."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def _fetch_page(
        self, query: Select, page: int, page_size: int
    ) -> tuple[list[Contact], int]:
        count_query = select(func.count()).select_from(query.subquery())
        page_query = (
            query.options(selectinload(ContactRecord.phones))
            .order_by(ContactRecord.name, ContactRecord.id)
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        with self._session_factory() as session:
            total_count = session.scalar(count_query)
            records = session.scalars(page_query).all()
            return [_record_to_contact(r) for r in records], total_count

    def list_page(self, page: int, page_size: int) -> tuple[list[Contact], int]:
        return self._fetch_page(select(ContactRecord), page, page_size)

    def search(
        self, term: str, page: int, page_size: int
    ) -> tuple[list[Contact], int]:
        if not term or not term.strip():
            return self.list_page(page, page_size)
        needle = term.upper()
        query = select(ContactRecord).where(
            or_(
                func.upper(ContactRecord.name, type_=String).contains(
                    needle, autoescape=True
                ),
                ContactRecord.phones.any(
                    func.upper(PhoneRecord.phone_number, type_=String).contains(
                        needle, autoescape=True
                    )
                ),
            )
        )
        return self._fetch_page(query, page, page_size)

    def get_by_id(self, contact_id: int) -> Contact | None:
        with self._session_factory() as session:
            record = _load(session, contact_id)
            if record is None:
                return None
            return _record_to_contact(record)

    def create(self, contact: Contact) -> Contact:
        now = _utcnow()
        record = ContactRecord(
            name=contact.name,
            age=contact.age,
            created_at=now,
            updated_at=now,
            phones=[
                PhoneRecord(phone_number=phone.phone_number, created_at=now)
                for phone in contact.phones
            ],
        )
        with self._session_factory.begin() as session:
            session.add(record)
            session.flush()
            return _record_to_contact(record)

    def update(self, contact_id: int, contact: Contact) -> Contact | None:
        now = _utcnow()
        with self._session_factory.begin() as session:
            record = _load(session, contact_id)
            if record is None:
                return None
            record.name = contact.name
            record.age = contact.age
            record.updated_at = now
            # Full replacement: delete-orphan removes every old phone row.
            record.phones.clear()
            session.flush()
            record.phones.extend(
                PhoneRecord(phone_number=phone.phone_number, created_at=now)
                for phone in contact.phones
            )
        return self.get_by_id(contact_id)

    def delete(self, contact_id: int) -> Contact | None:
        with self._session_factory.begin() as session:
            record = _load(session, contact_id)
            if record is None:
                return None
            snapshot = _record_to_contact(record)
            session.delete(record)
        return snapshot


def _load(session: Session, contact_id: int) -> ContactRecord | None:
    return session.scalars(
        select(ContactRecord)
        .where(ContactRecord.id == contact_id)
        .options(selectinload(ContactRecord.phones))
    ).one_or_none()


def _record_to_contact(record: ContactRecord) -> Contact:
    return Contact(
        id=record.id,
        name=record.name,
        age=record.age,
        created_at=_as_utc(record.created_at),
        updated_at=_as_utc(record.updated_at),
        phones=tuple(
            Phone(
                id=p.id,
                phone_number=p.phone_number,
                contact_id=p.contact_id,
                created_at=_as_utc(p.created_at),
            )
            for p in record.phones
        ),
    )
