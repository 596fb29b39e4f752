"""Seed an empty store with demo contacts.
Run: python -m phonebook.infrastructure.persistence.seed (uses DATABASE_URL).
"""

import logging
import os
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.orm import Session, sessionmaker

from phonebook.infrastructure.persistence.database import (
    DEFAULT_DATABASE_URL,
    create_db_engine,
    create_session_factory,
    init_database,
)
from phonebook.infrastructure.persistence.models import ContactRecord, PhoneRecord

logger = logging.getLogger(__name__)

DEMO_CONTACTS: list[tuple[str, int, list[str]]] = [
    ("John Smith", 32, ["+1-555-0101", "+1-555-0102"]),
    ("Jane Doe", 28, ["+1-555-0201"]),
    ("Robert Johnson", 45, ["+1-555-0301", "+1-555-0302", "+1-555-0303"]),
    ("Emily Davis", 24, ["+1-555-0401"]),
    ("Michael Brown", 38, ["+1-555-0501", "+1-555-0502"]),
    ("Sarah Wilson", 31, ["+1-555-0601"]),
    ("David Martinez", 42, ["+1-555-0701", "+1-555-0702"]),
    ("Lisa Anderson", 29, ["+1-555-0801"]),
    ("James Taylor", 55, ["+1-555-0901", "+1-555-0902"]),
    ("Jennifer Thomas", 33, ["+1-555-1001"]),
    ("William Garcia", 48, ["+1-555-1101", "+1-555-1102"]),
    ("Amanda Rodriguez", 26, ["+1-555-1201"]),
]


def seed_contacts(session_factory: sessionmaker[Session]) -> int:
    """Insert DEMO_CONTACTS if the contact table is empty. Returns the number inserted."""
    with session_factory.begin() as session:
        count = session.scalar(select(func.count()).select_from(ContactRecord))
        if count:
            logger.info("Database already seeded, skipping")
            return 0
        logger.info("Seeding database with initial contacts")
        now = datetime.now(timezone.utc)
        session.add_all(
            ContactRecord(
                name=name,
                age=age,
                created_at=now,
                updated_at=now,
                phones=[PhoneRecord(phone_number=n, created_at=now) for n in numbers],
            )
            for name, age, numbers in DEMO_CONTACTS
        )
    logger.info("Seeded %s contacts", len(DEMO_CONTACTS))
    return len(DEMO_CONTACTS)


def run() -> None:
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.INFO,
    )
    engine = create_db_engine(os.environ.get("DATABASE_URL", DEFAULT_DATABASE_URL))
    init_database(engine, max_retries=1)
    seed_contacts(create_session_factory(engine))
    engine.dispose()


if __name__ == "__main__":
    run()
