"""Routers package."""

from fittrack.routers.auth import router as auth_router
from fittrack.routers.steps import router as steps_router
from fittrack.routers.workouts import router as workouts_router
from fittrack.routers.communities import router as communities_router

__all__ = [
    "auth_router",
    "steps_router",
    "workouts_router",
    "communities_router",
]
