from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Type

from pydantic import BaseModel

# (utterance, current document or None) -> prompt text
PromptFactory = Callable[[str, Optional[Any]], str]


@dataclass(frozen=True)
class AgentProfile:
    """
    Immutable description of one conversational agent.

    ``response_model`` is None for free-text agents; otherwise provider output
    must validate against it before it is accepted.
    """

    mode: str
    name: str
    system_instruction: str
    temperature: float
    build_prompt: PromptFactory
    response_schema: Optional[Dict[str, Any]] = None
    response_model: Optional[Type[BaseModel]] = None
    streaming: bool = False
    requires_curriculum: bool = False
    missing_curriculum_reply: str = ""
    error_reply: Optional[str] = None
