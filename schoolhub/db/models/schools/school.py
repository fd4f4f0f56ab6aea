# schoolhub/db/models/schools/school.py
from typing import Optional
from sqlalchemy import Column, DateTime
from sqlmodel import SQLModel, Field
from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class School(SQLModel, table=True):
    __tablename__ = "schools"
    # AUTOINCREMENT keeps SQLite from reusing ids of deleted rows
    __table_args__ = {"sqlite_autoincrement": True}
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255, index=True)
    address: str = Field(max_length=500)
    city: str = Field(max_length=100, index=True)
    state: str = Field(max_length=100, index=True)
    contact: str = Field(max_length=20)
    email_id: str = Field(max_length=255)
    image: Optional[str] = Field(default=None, max_length=500)
    # Always written as aware UTC; SQLite and MySQL hand them back naive
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime(timezone=True), nullable=False))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime(timezone=True), nullable=False))
