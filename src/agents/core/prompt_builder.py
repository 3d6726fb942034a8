"""
Core prompt builder: template-based prompt construction for agent profiles.
The app defines template strings; the library fills them per request.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from string import Formatter
from typing import Any

from pydantic import BaseModel


class _SafeFormatDict(dict):
    """Mapping that returns empty string for missing keys (for str.format_map)."""

    def __missing__(self, key: str) -> str:
        return ""


def build_from_template(template: str, **kwargs: Any) -> str:
    """
    Fill a template with the given keyword arguments.
    Missing keys and None values render as empty string. Values are inserted
    verbatim, so braces inside user text are never re-interpreted.
    """
    if not template:
        return ""
    safe = {k: ("" if v is None else v) for k, v in kwargs.items()}
    return template.format_map(_SafeFormatDict(safe))


def to_prompt_json(value: Any) -> str:
    """
    Compact JSON for embedding documents in prompts.
    Pydantic models are dumped by alias (camelCase); None becomes ``null``.
    """
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


@dataclass(frozen=True)
class PromptTemplate:
    template: str

    @property
    def placeholders(self) -> list[str]:
        return [name for _, name, _, _ in Formatter().parse(self.template) if name]

    def render(self, **kwargs: Any) -> str:
        return build_from_template(self.template, **kwargs)
