from __future__ import annotations

from typing import Optional

USER = "user"
SUPERSEDED = "superseded"


class GenerationCancelled(Exception):
    """Raised at a checkpoint once the owning token has been revoked."""

    def __init__(self, reason: Optional[str] = None):
        super().__init__(f"generation cancelled ({reason or 'unknown'})")
        self.reason = reason


class CancellationToken:
    """
    Cooperative cancellation flag owned by one generation request.

    Revoking is one-way and idempotent; the first reason wins. Work already
    handed to the provider keeps running, callers check the token before
    applying any effect.
    """

    __slots__ = ("_reason",)

    def __init__(self) -> None:
        self._reason: Optional[str] = None

    @property
    def cancelled(self) -> bool:
        return self._reason is not None

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def cancel(self, reason: str = USER) -> None:
        if self._reason is None:
            self._reason = reason

    def raise_if_cancelled(self) -> None:
        if self._reason is not None:
            raise GenerationCancelled(self._reason)

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.cancelled}, reason={self._reason!r})"
