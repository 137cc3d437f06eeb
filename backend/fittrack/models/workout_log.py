"""Workout log model for completed sessions."""

from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from fittrack.database import Base
from fittrack.timeutils import utcnow


class WorkoutLogEntry(Base):
    """A completed workout. Never updated after creation."""

    __tablename__ = "workout_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    workout_type = Column(String(100), nullable=False)  # "Running", "Yoga", "HIIT", ...
    start_time = Column(DateTime, nullable=False)
    duration_seconds = Column(Integer, nullable=False)
    calories = Column(Float, nullable=False, default=0)
    met = Column(Float, nullable=True)  # Metabolic equivalent used for the estimate

    created_at = Column(DateTime, default=utcnow)

    # Relationships
    user = relationship("User", back_populates="workouts")

    def __repr__(self):
        return f"<WorkoutLogEntry {self.workout_type} ({self.duration_seconds}s)>"


Index("ix_workout_logs_user_start", WorkoutLogEntry.user_id, WorkoutLogEntry.start_time)
