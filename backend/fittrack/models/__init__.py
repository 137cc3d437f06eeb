"""Database models package."""

from fittrack.models.user import User
from fittrack.models.daily_steps import DailyStepRecord
from fittrack.models.workout_log import WorkoutLogEntry
from fittrack.models.community import Community, CommunityMember
from fittrack.models.community_message import CommunityMessage

__all__ = [
    "User",
    "DailyStepRecord",
    "WorkoutLogEntry",
    "Community",
    "CommunityMember",
    "CommunityMessage",
]
