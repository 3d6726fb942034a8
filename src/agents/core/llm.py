from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, AsyncIterator, Dict, Optional

from agents.core.cancellation import CancellationToken


@dataclass(frozen=True)
class GenerationRequest:
    prompt: str
    system_instruction: str = ""
    temperature: float = 0.7
    # JSON Schema dict; a hint for the provider, never trusted on the way back.
    response_schema: Optional[Dict[str, Any]] = None
    model: Optional[str] = None


@dataclass(frozen=True)
class GenerationResponse:
    text: Optional[str]


@dataclass(frozen=True)
class GenerationChunk:
    text: str


class LLM(ABC):
    """
    Defines the contract for all LLMs.

    ``generate`` returns the complete response (``text`` may be ``None`` when
    the provider produced nothing). ``stream`` yields text fragments in
    arrival order and stops early once ``cancel_token`` is revoked.
    """

    @abstractmethod
    async def generate(
        self,
        request: GenerationRequest,
        *,
        cancel_token: Optional[CancellationToken] = None,
    ) -> GenerationResponse:
        raise NotImplementedError

    @abstractmethod
    def stream(
        self,
        request: GenerationRequest,
        *,
        cancel_token: Optional[CancellationToken] = None,
    ) -> AsyncIterator[GenerationChunk]:
        raise NotImplementedError
