"""Workout log API router."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List

from fittrack.database import get_db
from fittrack.models import User
from fittrack.routers.auth import get_current_user
from fittrack.schemas import WorkoutCreate, WorkoutResponse
from fittrack.services.workout_service import WorkoutService

router = APIRouter(prefix="/workouts", tags=["workouts"])


@router.post("", response_model=WorkoutResponse, status_code=201)
def log_workout(
    workout_data: WorkoutCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Log a completed workout."""
    return WorkoutService(db).log_workout(user_id=user.id, **workout_data.model_dump())


@router.get("", response_model=List[WorkoutResponse])
def list_workouts(
    limit: int = Query(50),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """List recent workouts, latest start first."""
    return WorkoutService(db).list_workouts(user.id, limit=limit)
