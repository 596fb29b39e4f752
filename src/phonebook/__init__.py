"""
Phonebook core: clean-architecture layout.

- domain: entities (Contact, Phone). No outer dependencies.
- application: use cases (ContactService), ports (ContactRepository, DeletionLog), DTOs.
- infrastructure: adapters (SqlAlchemyContactRepository, InMemoryContactRepository,
  FileDeletionLog).
"""

from phonebook.application import (
    ContactDto,
    ContactInput,
    ContactNotFound,
    ContactRepository,
    ContactService,
    DeletionLog,
    PagedResult,
    PhoneDto,
)
from phonebook.domain import Contact, Phone
from phonebook.infrastructure import (
    FileDeletionLog,
    InMemoryContactRepository,
    SqlAlchemyContactRepository,
)

__all__ = [
    "Contact",
    "ContactDto",
    "ContactInput",
    "ContactNotFound",
    "ContactRepository",
    "ContactService",
    "DeletionLog",
    "FileDeletionLog",
    "InMemoryContactRepository",
    "PagedResult",
    "Phone",
    "PhoneDto",
    "SqlAlchemyContactRepository",
]
