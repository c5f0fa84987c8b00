from fastapi import APIRouter, HTTPException

from ..schemas import ScheduleRead, WeekRead
from ..utils.schedule import get_days, list_weeks

router = APIRouter(prefix="/schedule", tags=["schedule"])


@router.get("", response_model=ScheduleRead)
def read_schedule() -> ScheduleRead:
    return ScheduleRead(weeks=[WeekRead(week=week, days=get_days(week)) for week in list_weeks()])


@router.get("/weeks/{week}", response_model=WeekRead)
def read_week(week: str) -> WeekRead:
    days = get_days(week)
    if not days:
        raise HTTPException(status_code=404, detail="Week not found")
    return WeekRead(week=week, days=days)
