from enum import Enum
from typing import Optional

from api.schemas.base import CamelModel


class GenerationStatus(str, Enum):
    COMPLETED = "completed"
    NO_OUTPUT = "no_output"
    PRECONDITION_FAILED = "precondition_failed"
    CANCELLED = "cancelled"
    FAILED = "failed"
    SUPERSEDED = "superseded"
    # the owning session was deleted before the result arrived
    DISCARDED = "discarded"


class GenerationOutcome(CamelModel):
    status: GenerationStatus
    mode: str
    session_id: str
    # Text of the model message appended for this request, if any.
    message: Optional[str] = None
