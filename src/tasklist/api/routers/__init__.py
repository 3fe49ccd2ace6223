"""API router exports"""

from .health import router as health_router
from .records import router as records_router
from .tasks import router as tasks_router

__all__ = ["health_router", "records_router", "tasks_router"]
