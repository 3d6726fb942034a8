"""
Test doubles shared by unit and integration tests: a scripted provider and
canned agent payloads.
"""
from __future__ import annotations

import asyncio
import json
from typing import Any, Callable, List, Optional

from agents.core.cancellation import CancellationToken
from agents.core.llm import LLM, GenerationChunk, GenerationRequest, GenerationResponse


MOCK_CURRICULUM = {
    "title": "Python for Beginners",
    "description": "Learn Python from scratch",
    "targetAudience": "Beginners",
    "difficultyLevel": "Beginner",
    "estimatedTotalDuration": "4 weeks",
    "modules": [
        {
            "title": "Introduction",
            "description": "Setup and Basics",
            "lessons": [
                {"title": "Install Python", "duration": "10m", "type": "Video", "objectives": ["Install Python 3"]}
            ],
        },
        {
            "title": "Variables",
            "description": "Storing data",
            "lessons": [
                {"title": "Int and Strings", "duration": "15m", "type": "Text", "objectives": ["Understand types"]}
            ],
        },
    ],
}

MOCK_ADAPTED_CURRICULUM = {
    **MOCK_CURRICULUM,
    "difficultyLevel": "Advanced",
    "modules": [
        {
            "title": "Advanced Introduction",
            "description": "Deep dive into internals",
            "lessons": [
                {
                    "title": "Python Memory Management",
                    "duration": "30m",
                    "type": "Video",
                    "objectives": ["Understand Heap"],
                }
            ],
        }
    ],
}

MOCK_ASSESSMENT = {
    "title": "Intro Quiz",
    "targetContext": "Introduction",
    "type": "Quiz",
    "totalPoints": 10,
    "questions": [
        {
            "id": 1,
            "text": "What is Python?",
            "type": "Multiple Choice",
            "options": ["A snake", "A language"],
            "correctAnswer": "A language",
            "points": 5,
        }
    ],
}

MOCK_ASSIGNMENT = {
    "title": "Build a Calculator",
    "targetContext": "Variables",
    "type": "Assignment",
    "totalPoints": 20,
    "rubric": [
        {"criteria": "Correctness", "description": "Handles all four operations", "maxPoints": 15},
        {"criteria": "Style", "description": "Readable names", "maxPoints": 5},
    ],
}


def as_json(payload: Any) -> str:
    return json.dumps(payload)


class Pending:
    """A scripted step that blocks until ``release()`` is called."""

    def __init__(self, value: Any = None):
        self.value = value
        self.reached = asyncio.Event()
        self._released = asyncio.Event()

    def release(self, value: Any = None) -> None:
        if value is not None:
            self.value = value
        self._released.set()

    async def wait(self) -> Any:
        self.reached.set()
        await self._released.wait()
        return self.value


class ScriptedLLM(LLM):
    """
    Replays scripted responses in call order.

    ``generate`` script items: a text (or None), an exception to raise, or a
    Pending whose value is one of those. ``stream`` script items are lists of
    fragments, exceptions, Pendings, or callables run when reached.
    """

    def __init__(self, responses: Optional[List[Any]] = None, streams: Optional[List[List[Any]]] = None):
        self.responses: List[Any] = list(responses or [])
        self.streams: List[List[Any]] = list(streams or [])
        self.requests: List[GenerationRequest] = []

    @property
    def prompts(self) -> List[str]:
        return [r.prompt for r in self.requests]

    async def generate(
        self,
        request: GenerationRequest,
        *,
        cancel_token: Optional[CancellationToken] = None,
    ) -> GenerationResponse:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError("ScriptedLLM.generate called more times than scripted")
        item = self.responses.pop(0)
        if isinstance(item, Pending):
            item = await item.wait()
        if isinstance(item, BaseException):
            raise item
        return GenerationResponse(text=item)

    async def stream(
        self,
        request: GenerationRequest,
        *,
        cancel_token: Optional[CancellationToken] = None,
    ):
        self.requests.append(request)
        if not self.streams:
            raise AssertionError("ScriptedLLM.stream called more times than scripted")
        for item in self.streams.pop(0):
            if isinstance(item, Pending):
                await item.wait()
                continue
            if isinstance(item, BaseException):
                raise item
            if callable(item):
                item()
                continue
            yield GenerationChunk(text=item)
