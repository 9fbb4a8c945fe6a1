# services/book_exchange/controllers/announcement_service.py
import json
import re
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select, update, and_, or_, false
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from shared.db import get_db
from shared.logger import get_logger
from services.book_exchange.models import User, SchoolClass, Book, Announcement
from services.book_exchange.schemas.announcements import (
    AnnouncementCreate,
    AnnouncementCreated,
    AnnouncementOut,
)

router = APIRouter(prefix="/api", tags=["Announcements"])
logger = get_logger(__name__)

MISSING_FIELDS_MESSAGE = "Campi obbligatori mancanti"

_LEADING_INT = re.compile(r"\s*[+-]?\d+", re.ASCII)

# SQLite integers are signed 64-bit
SQLITE_INT_MIN = -2**63
SQLITE_INT_MAX = 2**63 - 1


def parse_year(raw: str) -> Optional[int]:
    """
    Read a year the way the front end's parseInt does: the leading integer
    counts ("3a" -> 3), anything else is not a number (None). Years too
    large to be stored can match no class either.
    """
    match = _LEADING_INT.match(raw)
    if not match:
        return None
    year = int(match.group())
    if not SQLITE_INT_MIN <= year <= SQLITE_INT_MAX:
        return None
    return year


def listing_filters(
    type: Optional[str] = None,
    indirizzo: Optional[str] = None,
    anno: Optional[str] = None,
    q: Optional[str] = None,
) -> list:
    """Predicates for the listing query, only active announcements are ever shown."""
    filters = [Announcement.is_active == 1]
    if type:
        filters.append(Announcement.type == type)
    if indirizzo:
        filters.append(SchoolClass.indirizzo == indirizzo)
    if anno:
        year = parse_year(anno)
        # a year that is not a number matches no class
        filters.append(SchoolClass.anno == year if year is not None else false())
    if q:
        pattern = f"%{q}%"
        filters.append(
            or_(
                Book.title.like(pattern),
                Book.author.like(pattern),
                Announcement.description.like(pattern),
            )
        )
    return filters


def _contact_update(user_id: int, payload: AnnouncementCreate, socials: Optional[str]):
    return (
        update(User)
        .where(User.id == user_id)
        .values(
            first_name=payload.first_name,
            last_name=payload.last_name,
            phone=payload.phone or None,
            socials=socials,
        )
    )


async def _refresh_contact(db: AsyncSession, user_id: int, payload: AnnouncementCreate, socials: Optional[str]):
    # Best effort: a failed refresh must not block the announcement
    try:
        async with db.begin_nested():
            await db.execute(_contact_update(user_id, payload, socials))
    except SQLAlchemyError as e:
        logger.warning(f"Could not refresh contact info for user {user_id}: {e}")


# --- LIST / FILTER ANNOUNCEMENTS ---
@router.get("/announcements", response_model=List[AnnouncementOut])
async def get_announcements(
    indirizzo: Optional[str] = None,
    anno: Optional[str] = None,
    type: Optional[str] = None,
    q: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    stmt = (
        select(
            *Announcement.__table__.columns,
            Book.title,
            Book.author,
            SchoolClass.indirizzo.label("class_indirizzo"),
            SchoolClass.anno.label("class_anno"),
            User.first_name,
            User.last_name,
            User.email,
            User.phone,
            User.socials,
        )
        .select_from(Announcement)
        .outerjoin(Book, Book.id == Announcement.book_id)
        .outerjoin(SchoolClass, SchoolClass.id == Announcement.class_id)
        .outerjoin(User, User.id == Announcement.user_id)
        .where(and_(*listing_filters(type=type, indirizzo=indirizzo, anno=anno, q=q)))
        .order_by(Announcement.created_at.desc(), Announcement.id.desc())
    )
    result = await db.execute(stmt)
    return [dict(row) for row in result.mappings().all()]


# --- CREATE ANNOUNCEMENT ---
@router.post("/announcements", response_model=AnnouncementCreated)
async def create_announcement(
    payload: AnnouncementCreate,
    db: AsyncSession = Depends(get_db),
):
    """
    Post a listing. The poster is found by email and their contact details
    overwritten, or created if new; the book is always a new row.
    Everything up to the announcement insert commits together.
    """
    if payload.missing_required():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=MISSING_FIELDS_MESSAGE,
        )

    socials = json.dumps(payload.socials) if payload.socials else None

    # Find or create the poster
    result = await db.execute(select(User.id).where(User.email == payload.email))
    user_id = result.scalars().first()
    if user_id is not None:
        await _refresh_contact(db, user_id, payload, socials)
    else:
        user = User(
            first_name=payload.first_name,
            last_name=payload.last_name,
            email=payload.email,
            phone=payload.phone or None,
            socials=socials,
        )
        db.add(user)
        await db.flush()
        user_id = user.id

    book = Book(
        title=payload.title,
        author=payload.author,
        edition=payload.edition,
        isbn=payload.isbn,
        notes=payload.notes,
    )
    db.add(book)
    await db.flush()

    announcement = Announcement(
        user_id=user_id,
        book_id=book.id,
        type=payload.type,
        price=payload.price or None,
        condition=payload.condition or None,
        class_id=payload.class_id,
        description=payload.description or None,
        contact_visible=0 if payload.contact_visible is False else 1,
    )
    db.add(announcement)
    await db.flush()
    await db.commit()
    logger.info(f"Announcement #{announcement.id} created for user {user_id}")

    result = await db.execute(
        select(*Announcement.__table__.columns, Book.title)
        .select_from(Announcement)
        .outerjoin(Book, Book.id == Announcement.book_id)
        .where(Announcement.id == announcement.id)
    )
    return dict(result.mappings().one())
