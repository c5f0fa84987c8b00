from datetime import datetime
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ChapterItem(BaseModel):
    kind: Literal["chapter"] = "chapter"
    label: str


class VerseItem(BaseModel):
    kind: Literal["verse"] = "verse"
    ref: str
    esv: str
    chapter: Optional[int] = None
    verse: Optional[int] = None


class MergedVerseItem(VerseItem):
    nkrv: str = ""
    is_fallback: bool = False


ParsedItem = Annotated[Union[ChapterItem, VerseItem], Field(discriminator="kind")]
MergedItem = Annotated[Union[ChapterItem, MergedVerseItem], Field(discriminator="kind")]


class AssembledSegment(BaseModel):
    title: str
    query: str
    items: List[MergedItem] = Field(default_factory=list)


class VerseRefRead(BaseModel):
    chapter: int
    verse: int

    model_config = ConfigDict(from_attributes=True)


class SegmentRead(BaseModel):
    start: VerseRefRead
    end: VerseRefRead
    length: int
    verses: List[VerseRefRead] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class ReadingPlanRead(BaseModel):
    reference: str
    book_name: str
    book_key: str
    total_verses: int
    max_verses: int
    segments: List[SegmentRead] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class WeekRead(BaseModel):
    week: str
    days: List[str] = Field(default_factory=list)


class ScheduleRead(BaseModel):
    weeks: List[WeekRead] = Field(default_factory=list)


class ReadingMark(BaseModel):
    week: str
    day: str
    chapter: str
    summary: str = ""


class ReadingProgressRead(BaseModel):
    week: str
    day: str
    chapter: str
    summary: str
    completed: bool
    completed_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ToggleResult(BaseModel):
    completed: bool
    reading: Optional[ReadingProgressRead] = None


class WeekProgressRead(BaseModel):
    week: str
    completed: int
    readings: List[ReadingProgressRead] = Field(default_factory=list)


class PositionRead(BaseModel):
    week: str = "Week 1"
    day: str = ""
    esv_enabled: bool = False


class PositionUpdate(BaseModel):
    week: str
    day: str = ""
    esv_enabled: bool = False


class ProgressOverview(BaseModel):
    completed: int
    readings: List[ReadingProgressRead] = Field(default_factory=list)
    position: PositionRead


class CorpusStatusRead(BaseModel):
    books: int
    verses: int
