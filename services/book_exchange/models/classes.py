# services/book_exchange/models/classes.py
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from shared.db import Base


class SchoolClass(Base):
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    indirizzo = Column(String, nullable=False)   # track, e.g. "Scientifico"
    anno = Column(Integer, nullable=False)       # year, 1 to 5

    announcements = relationship("Announcement", back_populates="school_class", passive_deletes=True)
