"""
Prototype account handling over the credential-list blob.

Only the current user record and yes/no answers leave this service; password
hashes stay inside. Not a security boundary.
"""

import time
from typing import List, Optional

from pydantic import ValidationError

from api.schemas.auth_schemas import CredentialRecord, User
from api.services.notification_service import NotificationCenter
from api.services.persistence import CURRENT_USER_KEY, USERS_KEY, PersistenceAdapter
from api.utils.logger import configure_logging
from api.utils.passwords import get_password_hash, verify_password

logger = configure_logging()


class AuthService:
    def __init__(self, persistence: PersistenceAdapter, notifications: NotificationCenter):
        self.persistence = persistence
        self.notifications = notifications
        self.current_user: Optional[User] = None

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None

    def load(self) -> Optional[User]:
        saved = self.persistence.load_or_default(CURRENT_USER_KEY)
        self.current_user = None
        if isinstance(saved, dict):
            try:
                self.current_user = User.model_validate(saved)
            except ValidationError as e:
                logger.warning("ignoring invalid current user blob: %s", e.errors())
        return self.current_user

    def _credentials(self) -> List[CredentialRecord]:
        raw = self.persistence.load_or_default(USERS_KEY, [])
        records: List[CredentialRecord] = []
        for item in raw if isinstance(raw, list) else []:
            try:
                records.append(CredentialRecord.model_validate(item))
            except ValidationError:
                logger.warning("skipping malformed credential record")
        return records

    def _sign_in(self, user: User) -> None:
        self.current_user = user
        self.persistence.save(CURRENT_USER_KEY, user.to_json_dict())

    def register(self, name: str, email: str, password: str) -> bool:
        email = email.strip().lower()
        records = self._credentials()
        if any(r.email == email for r in records):
            self.notifications.add("Email already exists", "error")
            return False

        record = CredentialRecord(
            id=str(time.time_ns()),
            name=name.strip(),
            email=email,
            password_hash=get_password_hash(password),
        )
        records.append(record)
        self.persistence.save(USERS_KEY, [r.to_json_dict() for r in records])
        self._sign_in(record.public())
        self.notifications.add("Account created successfully", "success")
        logger.info("user registered id=%s", record.id)
        return True

    def login(self, email: str, password: str) -> bool:
        email = email.strip().lower()
        record = next((r for r in self._credentials() if r.email == email), None)
        if record is None or not verify_password(password, record.password_hash):
            self.notifications.add("Invalid email or password", "error")
            return False
        user = record.public()
        self._sign_in(user)
        self.notifications.add(f"Welcome back, {user.name}", "success")
        logger.info("user logged in id=%s", user.id)
        return True

    def logout(self) -> None:
        self.current_user = None
        self.persistence.remove(CURRENT_USER_KEY)
        self.notifications.add("Logged out successfully", "info")

    def reset(self) -> None:
        """Forget the signed-in user; the credential list is kept."""
        self.current_user = None
        self.persistence.remove(CURRENT_USER_KEY)
