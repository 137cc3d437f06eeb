"""Daily step aggregate model."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from fittrack.database import Base
from fittrack.timeutils import utcnow

DEFAULT_STEP_SOURCE = "Phone Sensor"


class DailyStepRecord(Base):
    """One step count per user per reporting day."""

    __tablename__ = "daily_steps"
    __table_args__ = (
        UniqueConstraint("user_id", "day", name="uq_daily_steps_user_day"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # UTC instant of local midnight in the reporting timezone
    day = Column(DateTime, nullable=False, index=True)

    step_count = Column(Integer, nullable=False, default=0)
    source = Column(String(100), default=DEFAULT_STEP_SOURCE)
    synced_at = Column(DateTime, default=utcnow)

    # Relationships
    user = relationship("User", back_populates="daily_steps")

    def __repr__(self):
        return f"<DailyStepRecord user={self.user_id} {self.day} - {self.step_count}>"
