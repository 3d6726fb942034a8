"""
Per-mode message lists of a session, the generating flag and feedback.
"""

from typing import List, Optional

from api.schemas.session_schemas import Message, Mode, Rating, Role
from api.services.notification_service import NotificationCenter
from api.services.session_service import SessionStore
from api.utils.logger import configure_logging

logger = configure_logging()


class MessageNotFound(LookupError):
    pass


class ConversationState:
    def __init__(self, sessions: SessionStore, notifications: NotificationCenter):
        self.sessions = sessions
        self.notifications = notifications
        self.is_generating = False

    def _resolve(self, mode: Optional[Mode], session_id: Optional[str]):
        session = self.sessions.require(session_id) if session_id else self.sessions.active
        return session, (mode or session.mode)

    def messages(self, mode: Optional[Mode] = None, session_id: Optional[str] = None) -> List[Message]:
        session, mode = self._resolve(mode, session_id)
        return session.messages[mode]

    def add_message(
        self,
        mode: Mode,
        role: Role,
        text: str,
        session_id: Optional[str] = None,
    ) -> Message:
        session, mode = self._resolve(mode, session_id)
        message = Message(role=role, text=text)
        session.messages[mode].append(message)
        self.sessions.touch(session.id)
        return message

    def open_stream(self, mode: Mode, session_id: str) -> Message:
        """Append the empty model message a streamed reply is written into."""
        return self.add_message(mode, "model", "", session_id=session_id)

    def append_fragment(self, mode: Mode, message_id: str, fragment: str, session_id: str) -> Message:
        message = self._find(self.messages(mode, session_id), message_id)
        message.text += fragment
        self.sessions.touch(session_id)
        return message

    def submit_feedback(self, message_id: str, rating: Rating) -> Message:
        session = self.sessions.active
        message = self._find(session.messages[session.mode], message_id)
        message.feedback = rating
        self.sessions.touch(session.id)
        self.notifications.add(
            "Thanks for the positive feedback!" if rating == "up" else "Feedback received. We'll improve.",
            "info",
        )
        logger.info("feedback session=%s message=%s rating=%s", session.id, message_id, rating)
        return message

    @staticmethod
    def _find(messages: List[Message], message_id: str) -> Message:
        for message in messages:
            if message.id == message_id:
                return message
        raise MessageNotFound(message_id)
