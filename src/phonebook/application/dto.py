"""Input DTOs, transport DTOs and result types for contact use cases."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PhoneDto:
    """One phone as returned to callers."""

    id: int
    phone_number: str


@dataclass(frozen=True)
class ContactDto:
    """One contact as returned by every ContactService read or write."""

    id: int
    name: str
    age: int
    created_at: datetime
    updated_at: datetime
    phones: tuple[PhoneDto, ...] = ()


@dataclass(frozen=True)
class ContactInput:
    """Data for creating a contact or replacing an existing one. Validated at the boundary."""

    name: str
    age: int
    phone_numbers: tuple[str, ...] = field(default=())


@dataclass(frozen=True)
class PagedResult(Generic[T]):
    """A page of items plus the metadata needed to render pagination."""

    items: tuple[T, ...]
    total_count: int
    page: int
    page_size: int
    total_pages: int


@dataclass(frozen=True)
class ContactNotFound:
    """No contact with the given id."""

    contact_id: int
