# services/book_exchange/models/books.py
from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship
from shared.db import Base


class Book(Base):
    __tablename__ = "books"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False)
    author = Column(String, nullable=True)
    edition = Column(String, nullable=True)
    isbn = Column(String, nullable=True)
    notes = Column(Text, nullable=True)

    announcement = relationship("Announcement", back_populates="book", uselist=False, passive_deletes=True)
