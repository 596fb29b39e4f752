"""Contact list, search, create, update and delete. Maps domain entities to DTOs."""

from phonebook.application.dto import (
    ContactDto,
    ContactInput,
    ContactNotFound,
    PagedResult,
    PhoneDto,
)
from phonebook.application.paging import total_pages
from phonebook.application.ports import ContactRepository, DeletionLog
from phonebook.domain import Contact, Phone


class ContactService:
    """Orchestrates the repository and the deletion log. No direct store access."""

    def __init__(self, repository: ContactRepository, deletion_log: DeletionLog) -> None:
        self._repo = repository
        self._deletion_log = deletion_log

    def get_all(self, page: int = 1, page_size: int = 10) -> PagedResult[ContactDto]:
        """Return one page of all contacts ordered by name."""
        contacts, total_count = self._repo.list_page(page, page_size)
        return _paged(contacts, total_count, page, page_size)

    def search(
        self, term: str, page: int = 1, page_size: int = 10
    ) -> PagedResult[ContactDto]:
        """Return one page of contacts whose name or phone contains term (case-insensitive)."""
        contacts, total_count = self._repo.search(term, page, page_size)
        return _paged(contacts, total_count, page, page_size)

    def get_by_id(self, contact_id: int) -> ContactDto | ContactNotFound:
        contact = self._repo.get_by_id(contact_id)
        if contact is None:
            return ContactNotFound(contact_id=contact_id)
        return _to_dto(contact)

    def create(self, data: ContactInput) -> ContactDto:
        created = self._repo.create(_from_input(data))
        return _to_dto(created)

    def update(self, contact_id: int, data: ContactInput) -> ContactDto | ContactNotFound:
        """Replace name, age and the whole phone set of an existing contact."""
        updated = self._repo.update(contact_id, _from_input(data))
        if updated is None:
            return ContactNotFound(contact_id=contact_id)
        return _to_dto(updated)

    def delete(self, contact_id: int) -> ContactDto | ContactNotFound:
        """Delete a contact, then record it in the deletion log.

        The log is written only after the store delete succeeded. A log failure
        is raised to the caller even though the contact is already gone.
        """
        deleted = self._repo.delete(contact_id)
        if deleted is None:
            return ContactNotFound(contact_id=contact_id)
        dto = _to_dto(deleted)
        self._deletion_log.log_deletion(dto)
        return dto


def _from_input(data: ContactInput) -> Contact:
    return Contact(
        name=data.name,
        age=data.age,
        phones=tuple(Phone(phone_number=number) for number in data.phone_numbers),
    )


def _to_dto(contact: Contact) -> ContactDto:
    return ContactDto(
        id=contact.id,
        name=contact.name,
        age=contact.age,
        created_at=contact.created_at,
        updated_at=contact.updated_at,
        phones=tuple(
            PhoneDto(id=phone.id, phone_number=phone.phone_number)
            for phone in contact.phones
        ),
    )


def _paged(
    contacts: list[Contact], total_count: int, page: int, page_size: int
) -> PagedResult[ContactDto]:
    return PagedResult(
        items=tuple(_to_dto(c) for c in contacts),
        total_count=total_count,
        page=page,
        page_size=page_size,
        total_pages=total_pages(total_count, page_size),
    )
