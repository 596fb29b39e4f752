"""Application layer: use cases, ports, and DTOs. Depends only on domain."""

from phonebook.application.contact_service import ContactService
from phonebook.application.dto import (
    ContactDto,
    ContactInput,
    ContactNotFound,
    PagedResult,
    PhoneDto,
)
from phonebook.application.paging import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE,
    MAX_PAGE_SIZE,
    clamp_paging,
    total_pages,
)
from phonebook.application.ports import ContactRepository, DeletionLog

__all__ = [
    "DEFAULT_PAGE",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE",
    "MAX_PAGE_SIZE",
    "ContactDto",
    "ContactInput",
    "ContactNotFound",
    "ContactRepository",
    "ContactService",
    "DeletionLog",
    "PagedResult",
    "PhoneDto",
    "clamp_paging",
    "total_pages",
]
