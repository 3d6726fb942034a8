"""
Session and conversation schemas.
"""

import time
import uuid
from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import Field, field_validator, model_validator

from api.schemas.base import CamelModel
from api.schemas.curriculum_schemas import Assessment, Curriculum

Mode = Literal["curriculum", "assessment", "adaptive", "coach"]
Role = Literal["user", "model", "system"]
Rating = Literal["up", "down"]

MODES: tuple[str, ...] = ("curriculum", "assessment", "adaptive", "coach")

UNTITLED_TITLE = "Untitled Course"
MIGRATED_TITLE = "Migrated Session"
PLACEHOLDER_TITLES = frozenset({UNTITLED_TITLE, MIGRATED_TITLE})

WELCOME_MESSAGES: dict[str, tuple[str, str]] = {
    "curriculum": (
        "welcome-c",
        "Hello! I am your Curriculum Architect. \n\n"
        "Tell me about the course topic you want to teach, and I will design a structured blueprint for you.",
    ),
    "assessment": (
        "welcome-a",
        "I am the Assessment Designer. \n\n"
        "Once you have a curriculum, I can create quizzes and assignments for specific modules. Just ask!",
    ),
    "adaptive": (
        "welcome-ad",
        "I am your Adaptive Learning Specialist. \n\n"
        "Does the current curriculum need adjustment? Tell me your learning style (e.g., Visual, Auditory) "
        "or constraints (e.g., 'Make it 1 week long'), and I will personalize the path.",
    ),
    "coach": (
        "welcome-co",
        "I am your Coach Assistant. \n\n"
        "I can explain complex concepts, suggest teaching strategies, or draft lesson content for you. "
        "What do you need help with.",
    ),
}

_last_session_id = 0


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


def new_message_id() -> str:
    return uuid.uuid4().hex


def new_session_id() -> str:
    """Creation time in nanoseconds, bumped so ids never repeat or go backwards."""
    global _last_session_id
    candidate = time.time_ns()
    if candidate <= _last_session_id:
        candidate = _last_session_id + 1
    _last_session_id = candidate
    return str(candidate)


class Message(CamelModel):
    id: str = Field(default_factory=new_message_id)
    role: Role
    text: str
    timestamp: datetime = Field(default_factory=utcnow)
    feedback: Optional[Rating] = None

    @field_validator("timestamp")
    @classmethod
    def _timestamp_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


def welcome_messages() -> dict[str, list[Message]]:
    now = utcnow()
    return {
        mode: [Message(id=message_id, role="model", text=text, timestamp=now)]
        for mode, (message_id, text) in WELCOME_MESSAGES.items()
    }


class Session(CamelModel):
    id: str
    title: str = UNTITLED_TITLE
    last_modified: datetime = Field(default_factory=utcnow)
    mode: Mode = "curriculum"
    curriculum: Optional[Curriculum] = None
    assessments: list[Assessment] = Field(default_factory=list)
    messages: dict[Mode, list[Message]] = Field(default_factory=welcome_messages)

    @field_validator("last_modified")
    @classmethod
    def _last_modified_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    @model_validator(mode="after")
    def _all_modes_present(self) -> "Session":
        missing = [mode for mode in MODES if mode not in self.messages]
        if missing:
            defaults = welcome_messages()
            for mode in missing:
                self.messages[mode] = defaults[mode]
        return self

    @classmethod
    def create(cls, session_id: Optional[str] = None) -> "Session":
        return cls(id=session_id or new_session_id())

    @property
    def has_placeholder_title(self) -> bool:
        return self.title in PLACEHOLDER_TITLES


class SessionSummary(CamelModel):
    id: str
    title: str
    last_modified: datetime
    mode: Mode
    has_curriculum: bool
    assessment_count: int

    @classmethod
    def from_session(cls, session: Session) -> "SessionSummary":
        return cls(
            id=session.id,
            title=session.title,
            last_modified=session.last_modified,
            mode=session.mode,
            has_curriculum=session.curriculum is not None,
            assessment_count=len(session.assessments),
        )
