from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, DateTime, UniqueConstraint
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReadingProgress(SQLModel, table=True):
    """One completed chapter of a scheduled reading, e.g. ("Week 1", "Genesis 1-10", "3장")."""

    __table_args__ = (UniqueConstraint("week", "day", "chapter"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    week: str = Field(index=True)
    day: str = Field(index=True)
    chapter: str
    summary: str = ""
    completed: bool = Field(default=True)
    completed_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


class ReaderPreference(SQLModel, table=True):
    # Single row holding the last reading position
    id: Optional[int] = Field(default=None, primary_key=True)
    last_week: str = "Week 1"
    last_day: str = ""
    esv_enabled: bool = False
    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
