"""SQLAlchemy ORM schema: contact 1..n phone, cascade delete."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from phonebook.domain.entities import NAME_MAX_LENGTH, PHONE_NUMBER_MAX_LENGTH


class Base(DeclarativeBase):
    pass


class ContactRecord(Base):
    __tablename__ = "contact"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False, index=True)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    phones: Mapped[list["PhoneRecord"]] = relationship(
        back_populates="contact",
        cascade="all, delete-orphan",
        order_by="PhoneRecord.id",
    )

    def __repr__(self) -> str:
        return f"<ContactRecord(id={self.id}, name={self.name!r}, age={self.age})>"


class PhoneRecord(Base):
    __tablename__ = "phone"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    contact_id: Mapped[int] = mapped_column(
        ForeignKey("contact.id", ondelete="CASCADE"), nullable=False, index=True
    )
    phone_number: Mapped[str] = mapped_column(String(PHONE_NUMBER_MAX_LENGTH), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    contact: Mapped[ContactRecord] = relationship(back_populates="phones")

    def __repr__(self) -> str:
        return (
            f"<PhoneRecord(id={self.id}, contact_id={self.contact_id}, "
            f"phone_number={self.phone_number!r})>"
        )
