"""API routes module."""
from fitcoach.api.routes.notifications import router as notifications_router
from fitcoach.api.routes.sessions import router as sessions_router
from fitcoach.api.routes.workouts import router as workouts_router

__all__ = [
    "notifications_router",
    "sessions_router",
    "workouts_router",
]
