"""
Session store: the collection of authoring sessions, the active pointer and
write-through persistence of both.
"""

from typing import Dict, List, Optional

from pydantic import ValidationError

from api.schemas.curriculum_schemas import Assessment, Curriculum
from api.schemas.session_schemas import MIGRATED_TITLE, Mode, Session, utcnow
from api.services.notification_service import NotificationCenter
from api.services.persistence import SESSIONS_KEY, PersistenceAdapter
from api.utils.logger import configure_logging

logger = configure_logging()


class SessionNotFound(KeyError):
    def __init__(self, session_id: str):
        super().__init__(session_id)
        self.session_id = session_id

    def __str__(self) -> str:
        return f"Session {self.session_id} not found"


class SessionStore:
    """
    Owns every Session and the active pointer.

    Every mutation goes through ``touch``/``persist`` so the full collection
    plus the pointer is written synchronously under ``SESSIONS_KEY``.
    """

    def __init__(self, persistence: PersistenceAdapter, notifications: NotificationCenter):
        self.persistence = persistence
        self.notifications = notifications
        self.sessions: Dict[str, Session] = {}
        self.current_session_id: str = ""

    # ----- reads -----

    @property
    def active(self) -> Session:
        return self.sessions[self.current_session_id]

    def get(self, session_id: str) -> Optional[Session]:
        return self.sessions.get(session_id)

    def require(self, session_id: str) -> Session:
        session = self.sessions.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session

    def list_sessions(self) -> List[Session]:
        """Most recently modified first."""
        return sorted(self.sessions.values(), key=_recency, reverse=True)

    # ----- lifecycle -----

    def hydrate(self) -> Session:
        """Load the stored collection; fall back to a fresh session when unusable."""
        blob = self.persistence.load_or_default(SESSIONS_KEY)
        sessions: Dict[str, Session] = {}
        current_id = ""
        if isinstance(blob, dict):
            for session_id, raw in (blob.get("sessions") or {}).items():
                session = self._revive(session_id, raw)
                if session is not None:
                    sessions[session.id] = session
            current_id = blob.get("currentSessionId") or ""
        elif blob is not None:
            logger.error("storage load error key=%s detail=unexpected blob type %s", SESSIONS_KEY, type(blob).__name__)

        self.sessions = sessions
        if not sessions:
            fresh = Session.create()
            self.sessions = {fresh.id: fresh}
            self.current_session_id = fresh.id
            self.persist()
        elif current_id in sessions:
            self.current_session_id = current_id
        else:
            self.current_session_id = self.list_sessions()[0].id
        logger.info("sessions hydrated count=%s active=%s", len(self.sessions), self.current_session_id)
        return self.active

    @staticmethod
    def _revive(session_id: str, raw) -> Optional[Session]:
        if not isinstance(raw, dict):
            logger.error("dropping stored session id=%s: not an object", session_id)
            return None
        data = dict(raw)
        data.setdefault("id", session_id)
        data.setdefault("title", MIGRATED_TITLE)
        try:
            return Session.model_validate(data)
        except ValidationError as e:
            logger.error("dropping stored session id=%s: %s", session_id, e.errors())
            return None

    def persist(self) -> None:
        self.persistence.save(
            SESSIONS_KEY,
            {
                "sessions": {sid: s.to_json_dict() for sid, s in self.sessions.items()},
                "currentSessionId": self.current_session_id,
            },
        )

    def touch(self, session_id: str) -> Session:
        """Refresh lastModified of ``session_id`` and write the snapshot."""
        session = self.require(session_id)
        session.last_modified = utcnow()
        self.persist()
        return session

    def create(self) -> Session:
        session = Session.create()
        self.sessions[session.id] = session
        self.current_session_id = session.id
        self.persist()
        self.notifications.add("New session created", "info")
        logger.info("session created id=%s", session.id)
        return session

    def switch_to(self, session_id: str) -> bool:
        target = self.sessions.get(session_id)
        if target is None:
            return False
        self.current_session_id = session_id
        self.persist()
        self.notifications.add(f'Switched to "{target.title}"', "info")
        logger.info("session switched id=%s", session_id)
        return True

    def delete(self, session_id: str) -> bool:
        if session_id not in self.sessions:
            return False
        del self.sessions[session_id]
        logger.info("session deleted id=%s", session_id)

        if session_id != self.current_session_id:
            self.persist()
            return True

        if self.sessions:
            self.switch_to(self.list_sessions()[0].id)
        else:
            fresh = Session.create()
            self.sessions[fresh.id] = fresh
            self.current_session_id = fresh.id
            self.persist()
        return True

    def rename(self, session_id: str, title: str) -> Session:
        title = (title or "").strip()
        if not title:
            raise ValueError("Session title cannot be blank")
        session = self.require(session_id)
        session.title = title
        self.persist()
        return session

    def reset(self) -> Session:
        self.persistence.remove(SESSIONS_KEY)
        self.sessions = {}
        self.current_session_id = ""
        return self.hydrate()

    # ----- document mutations -----

    def set_mode(self, mode: Mode) -> Session:
        session = self.active
        session.mode = mode
        return self.touch(session.id)

    def replace_curriculum(self, session_id: str, curriculum: Curriculum) -> bool:
        """Replace the curriculum; returns True on the first (null to non-null) assignment."""
        session = self.require(session_id)
        first = session.curriculum is None
        session.curriculum = curriculum
        if first:
            self.adopt_title(session)
        self.touch(session_id)
        return first

    def prepend_assessment(self, session_id: str, assessment: Assessment) -> Session:
        session = self.require(session_id)
        session.assessments.insert(0, assessment)
        return self.touch(session_id)

    @staticmethod
    def adopt_title(session: Session) -> None:
        if session.curriculum is not None and session.curriculum.title and session.has_placeholder_title:
            session.title = session.curriculum.title


def _recency(session: Session):
    # Ties on lastModified go to the newer id (ids are creation-time nanoseconds).
    return (session.last_modified, _id_order(session.id))


def _id_order(session_id: str):
    return (1, int(session_id)) if session_id.isdigit() else (0, session_id)
