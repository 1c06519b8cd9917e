"""API module."""

from .auth import router as auth_router
from .chat import router as chat_router
from .health_metrics import router as health_metrics_router
from .moods import router as moods_router
from .notifications import router as notifications_router
from .nutrition import router as nutrition_router
from .routines import router as routines_router
from .status import router as status_router
from .symptoms import router as symptoms_router
from .users import router as users_router
from .workouts import router as workouts_router

__all__ = [
    'auth_router', 'chat_router', 'health_metrics_router', 'moods_router',
    'notifications_router', 'nutrition_router', 'routines_router', 'status_router',
    'symptoms_router', 'users_router', 'workouts_router',
]
