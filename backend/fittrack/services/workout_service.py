"""Workout log store."""

import logging
import math
from typing import List, Optional

from sqlalchemy.orm import Session

from fittrack.errors import ValidationError
from fittrack.models import WorkoutLogEntry
from fittrack.services.common import clamp_limit
from fittrack.timeutils import Instant, parse_instant


logger = logging.getLogger(__name__)


def _finite_number(value, field: str) -> float:
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field} must be a number", field=field)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number", field=field)
    if not math.isfinite(number):
        raise ValidationError(f"{field} must be a finite number", field=field)
    return number


class WorkoutService:
    """Append-only log of completed workouts."""

    LIST_DEFAULT_LIMIT = 50

    def __init__(self, db: Session):
        self.db = db

    def log_workout(
        self,
        user_id: int,
        workout_type: str,
        start_time: Instant,
        duration_seconds: float,
        calories: float,
        met: Optional[float] = None,
    ) -> WorkoutLogEntry:
        """Validate and store one completed workout."""
        workout_type = workout_type.strip() if isinstance(workout_type, str) else ""
        if not workout_type:
            raise ValidationError("workout_type is required", field="workout_type")

        duration = _finite_number(duration_seconds, "duration_seconds")
        if duration <= 0:
            raise ValidationError("duration_seconds must be greater than 0", field="duration_seconds")
        # Half-up rounding, as the app reports it
        duration = int(math.floor(duration + 0.5))
        if duration < 1:
            raise ValidationError("duration_seconds must be at least 1 second", field="duration_seconds")

        calories = _finite_number(calories, "calories")
        if calories < 0:
            raise ValidationError("calories must be 0 or more", field="calories")

        if met is not None:
            met = _finite_number(met, "met")
            if met <= 0:
                raise ValidationError("met must be greater than 0", field="met")

        started = parse_instant(start_time, field="start_time")

        entry = WorkoutLogEntry(
            user_id=user_id,
            workout_type=workout_type,
            start_time=started,
            duration_seconds=duration,
            calories=calories,
            met=met,
        )
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)

        logger.info("Logged %s workout %s for user %s", workout_type, entry.id, user_id)
        return entry

    def list_workouts(self, user_id: int, limit: Optional[int] = LIST_DEFAULT_LIMIT) -> List[WorkoutLogEntry]:
        """Most recent workouts first."""
        limit = clamp_limit(limit, self.LIST_DEFAULT_LIMIT)
        return (
            self.db.query(WorkoutLogEntry)
            .filter(WorkoutLogEntry.user_id == user_id)
            .order_by(WorkoutLogEntry.start_time.desc(), WorkoutLogEntry.id.desc())
            .limit(limit)
            .all()
        )
