"""
API schemas package. Import from submodules or from this package.

Example:
    from api.schemas import Curriculum, Session
    from api.schemas.curriculum_schemas import Curriculum
"""

from api.schemas.base import CamelModel
from api.schemas.auth_schemas import (
    AuthResponse,
    CredentialRecord,
    LoginRequest,
    LogoutResponse,
    RegisterRequest,
    User,
)
from api.schemas.curriculum_schemas import (
    Assessment,
    AssessmentQuestion,
    Curriculum,
    Lesson,
    Module,
    RubricItem,
)
from api.schemas.generation_schemas import GenerationOutcome, GenerationStatus
from api.schemas.notification_schemas import Notification
from api.schemas.session_schemas import Message, Session, SessionSummary
from api.schemas.settings_schemas import SettingsUpdate, UserSettings
from api.schemas.studio_schemas import (
    ActionResponse,
    CancelResponse,
    FeedbackRequest,
    RenameSessionRequest,
    SessionListResponse,
    SetModeRequest,
    StudioStateResponse,
    SubmitMessageRequest,
)

__all__ = [
    "CamelModel",
    "AuthResponse",
    "CredentialRecord",
    "LoginRequest",
    "LogoutResponse",
    "RegisterRequest",
    "User",
    "Assessment",
    "AssessmentQuestion",
    "Curriculum",
    "Lesson",
    "Module",
    "RubricItem",
    "GenerationOutcome",
    "GenerationStatus",
    "Notification",
    "Message",
    "Session",
    "SessionSummary",
    "SettingsUpdate",
    "UserSettings",
    "ActionResponse",
    "CancelResponse",
    "FeedbackRequest",
    "RenameSessionRequest",
    "SessionListResponse",
    "SetModeRequest",
    "StudioStateResponse",
    "SubmitMessageRequest",
]
