"""User model for authentication and name snapshots."""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from fittrack.database import Base
from fittrack.timeutils import utcnow


class User(Base):
    """User account, password-based or federated."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=True)  # Null for federated-only users

    # Federated sign-in (e.g. Google)
    external_auth_id = Column(String(512), nullable=True)

    created_at = Column(DateTime, default=utcnow)

    # Relationships
    daily_steps = relationship("DailyStepRecord", back_populates="user")
    workouts = relationship("WorkoutLogEntry", back_populates="user")

    def __repr__(self):
        return f"<User {self.id}: {self.email}>"

    @property
    def display_name(self):
        """Name used for denormalized snapshots."""
        return self.name or self.email or "User"
