"""Domain entities: Contact and Phone."""

import unicodedata
from dataclasses import dataclass, field
from datetime import datetime

# Column limits shared by the schema and request validation.
NAME_MAX_LENGTH = 200
PHONE_NUMBER_MAX_LENGTH = 20
AGE_MIN = 1
AGE_MAX = 149


def has_control_characters(value: str) -> bool:
    """True if value holds a line break, tab, NUL or any other control character."""
    return any(unicodedata.category(ch) == "Cc" for ch in value)


@dataclass(frozen=True)
class Phone:
    """
    A single phone number owned by exactly one Contact.
    Phones are never updated in place; id is None until persisted.
    """

    phone_number: str = field(default="")
    id: int | None = None
    contact_id: int | None = None
    created_at: datetime | None = None

    def __post_init__(self):
        if not self.phone_number or not self.phone_number.strip():
            raise ValueError("Phone number must be non-empty.")
        if len(self.phone_number) > PHONE_NUMBER_MAX_LENGTH:
            raise ValueError(
                f"Phone number must be at most {PHONE_NUMBER_MAX_LENGTH} characters."
            )
        if has_control_characters(self.phone_number):
            raise ValueError("Phone number must not contain control characters.")


@dataclass(frozen=True)
class Contact:
    """
    A named person with an age and the phones it owns.
    Deleting a Contact deletes all of its phones.
    """

    name: str = field(default="")
    age: int = 0
    phones: tuple[Phone, ...] = ()
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Contact name must be non-empty.")
        if len(self.name) > NAME_MAX_LENGTH:
            raise ValueError(
                f"Contact name must be at most {NAME_MAX_LENGTH} characters."
            )
        if has_control_characters(self.name):
            raise ValueError("Contact name must not contain control characters.")
        if not AGE_MIN <= self.age <= AGE_MAX:
            raise ValueError(f"Contact age must be between {AGE_MIN} and {AGE_MAX}.")
        object.__setattr__(self, "phones", tuple(self.phones))
