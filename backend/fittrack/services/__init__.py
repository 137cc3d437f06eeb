"""Services package."""

from fittrack.services.auth_service import AuthService
from fittrack.services.steps_service import StepsService
from fittrack.services.workout_service import WorkoutService
from fittrack.services.community_service import CommunityService
from fittrack.services.message_service import MessageService

__all__ = [
    "AuthService",
    "StepsService",
    "WorkoutService",
    "CommunityService",
    "MessageService",
]
