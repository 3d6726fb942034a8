"""
Request and response bodies of the studio HTTP API.
"""

from typing import Optional

from pydantic import BaseModel

from api.schemas.base import CamelModel
from api.schemas.session_schemas import Mode, Rating, Session, SessionSummary


class StudioStateResponse(CamelModel):
    current_session_id: str
    session: Session
    is_generating: bool


class SessionListResponse(CamelModel):
    current_session_id: str
    sessions: list[SessionSummary]


class RenameSessionRequest(BaseModel):
    title: str


class SetModeRequest(BaseModel):
    mode: Mode


class SubmitMessageRequest(BaseModel):
    text: str


class FeedbackRequest(BaseModel):
    rating: Rating


class CancelResponse(CamelModel):
    cancelled: bool


class ActionResponse(CamelModel):
    ok: bool
    detail: Optional[str] = None
