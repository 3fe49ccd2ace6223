from .health import HealthResponse
from .tasks import CreateRecordRequest, CreateTaskRequest, UpdateRecordRequest

__all__ = [
    "CreateRecordRequest",
    "CreateTaskRequest",
    "HealthResponse",
    "UpdateRecordRequest",
]
