# services/book_exchange/controllers/class_service.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shared.db import get_db
from services.book_exchange.models.classes import SchoolClass
from services.book_exchange.schemas.classes import SchoolClassOut

router = APIRouter(prefix="/api", tags=["Classes"])


# --- GET ALL CLASSES ---
@router.get("/classes", response_model=List[SchoolClassOut])
async def get_all_classes(db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(SchoolClass).order_by(SchoolClass.indirizzo, SchoolClass.anno)
    )
    return result.scalars().all()
