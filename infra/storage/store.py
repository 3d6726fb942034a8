from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """
    Durable string-to-string store.

    Calls are synchronous; a missing key reads as ``None``. Implementations
    must make ``set`` visible to the next ``get`` on the same instance.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete ``key``; deleting a missing key is not an error."""

        raise NotImplementedError
