import re
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlmodel import Session, delete, select

from ..dependencies import get_db
from ..models import ReaderPreference, ReadingProgress, utcnow
from ..schemas import (
    PositionRead,
    PositionUpdate,
    ProgressOverview,
    ReadingMark,
    ReadingProgressRead,
    ToggleResult,
    WeekProgressRead,
)
from ..utils.schedule import day_position

router = APIRouter(prefix="/progress", tags=["progress"])

LEADING_NUMBER = re.compile(r"^\s*(\d+)")


def chapter_number(label: str) -> int:
    match = LEADING_NUMBER.match(label)
    return int(match.group(1)) if match else 0


def week_sort_key(week: str, reading: ReadingProgress) -> tuple:
    # Scheduled days in plan order first, unscheduled days alphabetically, then by chapter number
    position = day_position(week, reading.day)
    if position == -1:
        return (1, 0, reading.day, chapter_number(reading.chapter))
    return (0, position, "", chapter_number(reading.chapter))


def find_reading(session: Session, week: str, day: str, chapter: str) -> Optional[ReadingProgress]:
    return session.exec(
        select(ReadingProgress).where(
            ReadingProgress.week == week,
            ReadingProgress.day == day,
            ReadingProgress.chapter == chapter,
        )
    ).first()


def get_preference(session: Session) -> ReaderPreference:
    pref = session.exec(select(ReaderPreference)).first()
    if pref is None:
        pref = ReaderPreference()
        session.add(pref)
        session.commit()
        session.refresh(pref)
    return pref


def mark_complete(session: Session, mark: ReadingMark) -> ReadingProgress:
    reading = find_reading(session, mark.week, mark.day, mark.chapter)
    if reading is None:
        reading = ReadingProgress(week=mark.week, day=mark.day, chapter=mark.chapter)
    reading.summary = mark.summary
    reading.completed = True
    reading.completed_at = utcnow()
    session.add(reading)
    session.commit()
    session.refresh(reading)
    return reading


def completed_readings(session: Session, week: Optional[str] = None) -> List[ReadingProgress]:
    stmt = select(ReadingProgress).where(ReadingProgress.completed == True)  # noqa: E712
    if week is not None:
        stmt = stmt.where(ReadingProgress.week == week)
    return list(session.exec(stmt.order_by(ReadingProgress.completed_at)).all())


@router.get("", response_model=ProgressOverview)
def read_progress(session: Session = Depends(get_db)) -> ProgressOverview:
    readings = completed_readings(session)
    pref = get_preference(session)
    return ProgressOverview(
        completed=len(readings),
        readings=[ReadingProgressRead.model_validate(r) for r in readings],
        position=PositionRead(week=pref.last_week or "Week 1", day=pref.last_day, esv_enabled=pref.esv_enabled),
    )


@router.get("/weeks/{week}", response_model=WeekProgressRead)
def read_week_progress(week: str, session: Session = Depends(get_db)) -> WeekProgressRead:
    readings = sorted(completed_readings(session, week), key=lambda r: week_sort_key(week, r))
    return WeekProgressRead(
        week=week,
        completed=len(readings),
        readings=[ReadingProgressRead.model_validate(r) for r in readings],
    )


@router.put("/readings", response_model=ReadingProgressRead)
def complete_reading(payload: ReadingMark, session: Session = Depends(get_db)) -> ReadingProgressRead:
    return ReadingProgressRead.model_validate(mark_complete(session, payload))


@router.delete("/readings", status_code=status.HTTP_204_NO_CONTENT)
def uncomplete_reading(
    week: str = Query(...),
    day: str = Query(...),
    chapter: str = Query(...),
    session: Session = Depends(get_db),
) -> Response:
    reading = find_reading(session, week, day, chapter)
    if reading is not None:
        session.delete(reading)
        session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/readings/toggle", response_model=ToggleResult)
def toggle_reading(payload: ReadingMark, session: Session = Depends(get_db)) -> ToggleResult:
    reading = find_reading(session, payload.week, payload.day, payload.chapter)
    if reading is not None and reading.completed:
        session.delete(reading)
        session.commit()
        return ToggleResult(completed=False)
    reading = mark_complete(session, payload)
    return ToggleResult(completed=True, reading=ReadingProgressRead.model_validate(reading))


@router.patch("/readings/summary", response_model=ReadingProgressRead)
def update_summary(payload: ReadingMark, session: Session = Depends(get_db)) -> ReadingProgressRead:
    reading = find_reading(session, payload.week, payload.day, payload.chapter)
    if reading is None:
        raise HTTPException(status_code=404, detail="Reading not marked complete")
    reading.summary = payload.summary
    session.add(reading)
    session.commit()
    session.refresh(reading)
    return ReadingProgressRead.model_validate(reading)


@router.get("/position", response_model=PositionRead)
def read_position(session: Session = Depends(get_db)) -> PositionRead:
    pref = get_preference(session)
    return PositionRead(week=pref.last_week or "Week 1", day=pref.last_day, esv_enabled=pref.esv_enabled)


@router.put("/position", response_model=PositionRead)
def save_position(payload: PositionUpdate, session: Session = Depends(get_db)) -> PositionRead:
    pref = get_preference(session)
    pref.last_week = payload.week
    pref.last_day = payload.day
    pref.esv_enabled = payload.esv_enabled
    pref.updated_at = utcnow()
    session.add(pref)
    session.commit()
    session.refresh(pref)
    return PositionRead(week=pref.last_week, day=pref.last_day, esv_enabled=pref.esv_enabled)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def reset_progress(session: Session = Depends(get_db)) -> Response:
    session.exec(delete(ReadingProgress))
    session.exec(delete(ReaderPreference))
    session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
