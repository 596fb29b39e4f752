"""Infrastructure layer: concrete implementations of application ports."""

from phonebook.infrastructure.deletion_log import (
    DEFAULT_DELETION_LOG_PATH,
    FileDeletionLog,
)
from phonebook.infrastructure.memory_repository import InMemoryContactRepository
from phonebook.infrastructure.persistence.database import (
    DEFAULT_DATABASE_URL,
    create_db_engine,
    create_session_factory,
    init_database,
    is_database_ready,
)
from phonebook.infrastructure.persistence.seed import seed_contacts
from phonebook.infrastructure.persistence.sqlalchemy_repository import (
    SqlAlchemyContactRepository,
)

__all__ = [
    "DEFAULT_DATABASE_URL",
    "DEFAULT_DELETION_LOG_PATH",
    "FileDeletionLog",
    "InMemoryContactRepository",
    "SqlAlchemyContactRepository",
    "create_db_engine",
    "create_session_factory",
    "init_database",
    "is_database_ready",
    "seed_contacts",
]
