# services/book_exchange/models/announcements.py
from sqlalchemy import Column, Integer, String, Float, Text, DateTime, ForeignKey, Index, text
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from shared.db import Base


class Announcement(Base):
    __tablename__ = "announcements"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    book_id = Column(Integer, ForeignKey("books.id", ondelete="SET NULL"), nullable=True)
    type = Column(String, nullable=False)   # "vendo", "cerco", "scambio", ...
    price = Column(Float, nullable=True)
    condition = Column(String, nullable=True)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="SET NULL"), nullable=True)
    description = Column(Text, nullable=True)
    # 0/1 flags, the front end reads them as integers
    contact_visible = Column(Integer, server_default=text("1"))
    created_at = Column(DateTime, server_default=func.current_timestamp())
    expires_at = Column(DateTime, nullable=True)
    is_active = Column(Integer, server_default=text("1"))

    user = relationship("User", back_populates="announcements")
    book = relationship("Book", back_populates="announcement")
    school_class = relationship("SchoolClass", back_populates="announcements")

    __table_args__ = (
        Index("idx_announcement_active_created", "is_active", "created_at"),
    )
