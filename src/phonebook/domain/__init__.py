"""Domain layer: entities and value objects. No dependencies on outer layers."""

from phonebook.domain.entities import Contact, Phone

__all__ = ["Contact", "Phone"]
