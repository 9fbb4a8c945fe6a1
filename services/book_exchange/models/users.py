# services/book_exchange/models/users.py
from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from shared.db import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, nullable=False)   # looked up on every post, not a unique key
    phone = Column(String, nullable=True)
    socials = Column(Text, nullable=True)    # JSON encoded
    created_at = Column(DateTime, server_default=func.current_timestamp())

    announcements = relationship("Announcement", back_populates="user", passive_deletes=True)
