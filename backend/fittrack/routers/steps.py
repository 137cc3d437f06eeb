"""Daily steps API router."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from fittrack.database import get_db
from fittrack.models import User
from fittrack.routers.auth import get_current_user
from fittrack.schemas import StepsCreate, StepsResponse, StepsSummary
from fittrack.services.steps_service import StepsService

router = APIRouter(prefix="/steps", tags=["steps"])


@router.post("", response_model=StepsResponse)
def record_steps(
    payload: StepsCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Store a step reading; the day's count never decreases."""
    record = StepsService(db).record_steps(
        user_id=user.id,
        step_count=payload.steps,
        day=payload.day,
        source=payload.source,
    )
    return StepsResponse.model_validate(record)


@router.get("/history", response_model=List[StepsResponse])
def get_history(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    limit: int = Query(30),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """List daily records, newest day first."""
    records = StepsService(db).get_history(
        user.id,
        start_day=start_date,
        end_day=end_date,
        limit=limit,
    )
    return [StepsResponse.model_validate(r) for r in records]


@router.get("/today", response_model=StepsResponse)
def get_today(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Today's record, zero-valued if nothing has synced yet."""
    return StepsResponse.model_validate(StepsService(db).get_today(user.id))


@router.get("/summary", response_model=StepsSummary)
def get_summary(
    days: int = Query(7, ge=1, le=366),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Totals over the last few reporting days."""
    return StepsService(db).summarize(user.id, days=days)
