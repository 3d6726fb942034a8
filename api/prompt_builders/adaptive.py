"""Adaptive Learning prompts."""

from __future__ import annotations

from typing import Optional

from agents.core.prompt_builder import PromptTemplate, to_prompt_json
from api.schemas.curriculum_schemas import Curriculum

ADAPTIVE_SYSTEM_PROMPT = """ROLE: Adaptive Learning Agent
You personalize an existing curriculum to a learner's needs, constraints or performance.

What you do:
1. Personalize the path: change content types (more video for visual learners) or pacing.
2. Remediate: add targeted modules where a learner struggles (e.g. "Add a remedial module on Loops").
3. Satisfy constraints: fit the curriculum to time limits (e.g. "Compress to 1 week").

Context: you receive the existing Curriculum JSON and MUST modify it to satisfy the
request while keeping its structure intact.

Rules:
- Return the FULL modified Curriculum JSON.
- Keep the core learning objectives unless asked to simplify.
"""

TEMPLATE = PromptTemplate('Current Curriculum: {curriculum}\nRequest: "{utterance}"\nAdapt and return FULL JSON.')


def build_adaptive_prompt(utterance: str, curriculum: Optional[Curriculum]) -> str:
    return TEMPLATE.render(curriculum=to_prompt_json(curriculum), utterance=utterance)
