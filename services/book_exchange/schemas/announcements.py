# services/book_exchange/schemas/announcements.py

from pydantic import BaseModel, Field, field_validator
from typing import Optional, Any
from datetime import datetime


class AnnouncementCreate(BaseModel):
    """
    Body of POST /api/announcements.

    Required fields (first_name, last_name, email, type, title, class_id) are
    optional here on purpose: the route checks their presence itself so that
    a missing one is reported with a single 400 message.
    """
    # contact
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    socials: Optional[Any] = None

    # book
    title: Optional[str] = None
    author: Optional[str] = None
    edition: Optional[str] = None
    isbn: Optional[str] = None
    notes: Optional[str] = None

    # listing
    type: Optional[str] = None
    price: Optional[float] = None
    condition: Optional[str] = None
    class_id: Optional[int] = Field(None, ge=-2**63, lt=2**63)
    description: Optional[str] = None
    contact_visible: Optional[bool] = None

    # HTML forms post "" for untouched inputs
    @field_validator("price", "class_id", "contact_visible", mode="before")
    @classmethod
    def blank_as_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def missing_required(self) -> bool:
        return not all([
            self.first_name,
            self.last_name,
            self.email,
            self.type,
            self.title,
            self.class_id,
        ])


class AnnouncementCreated(BaseModel):
    id: int
    user_id: Optional[int]
    book_id: Optional[int]
    type: str
    price: Optional[float]
    condition: Optional[str]
    class_id: Optional[int]
    description: Optional[str]
    contact_visible: Optional[int]
    created_at: Optional[datetime]
    expires_at: Optional[datetime]
    is_active: Optional[int]
    title: Optional[str]

    class Config:
        from_attributes = True


class AnnouncementOut(AnnouncementCreated):
    """One listing row, flattened with its book, class and poster."""
    author: Optional[str] = None
    class_indirizzo: Optional[str] = None
    class_anno: Optional[int] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    socials: Optional[str] = None
