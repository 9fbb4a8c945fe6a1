# services/book_exchange/schemas/classes.py

from pydantic import BaseModel


class SchoolClassOut(BaseModel):
    id: int
    indirizzo: str
    anno: int

    class Config:
        from_attributes = True
