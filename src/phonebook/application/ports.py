"""Application ports (interfaces). Implemented by infrastructure adapters."""

from typing import Protocol

from phonebook.application.dto import ContactDto
from phonebook.domain import Contact


class ContactRepository(Protocol):
    """Persists and queries Contact aggregates (Contact + its Phones)."""

    def list_page(self, page: int, page_size: int) -> tuple[list[Contact], int]:
        """Return one page of contacts ordered by name, and the unfiltered total count."""
        ...

    def search(
        self, term: str, page: int, page_size: int
    ) -> tuple[list[Contact], int]:
        """Return one page of contacts whose name or any phone contains term (case-insensitive),
        and the number of matches. A blank term behaves like list_page.
        """
        ...

    def get_by_id(self, contact_id: int) -> Contact | None:
        """Return the contact with its phones, or None."""
        ...

    def create(self, contact: Contact) -> Contact:
        """Store a new contact and its phones in one transaction. Returns the stored contact."""
        ...

    def update(self, contact_id: int, contact: Contact) -> Contact | None:
        """Replace name, age and the whole phone set. Returns the reloaded contact, or None."""
        ...

    def delete(self, contact_id: int) -> Contact | None:
        """Delete the contact and its phones. Returns the pre-deletion snapshot, or None."""
        ...


class DeletionLog(Protocol):
    """Append-only audit sink for deleted contacts."""

    def log_deletion(self, contact: ContactDto) -> None:
        """Record one deleted contact. Failures propagate to the caller."""
        ...
