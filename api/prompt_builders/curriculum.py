"""Curriculum Architect prompts. Uses library core template."""

from __future__ import annotations

from typing import Optional

from agents.core.prompt_builder import PromptTemplate, to_prompt_json
from api.schemas.curriculum_schemas import Curriculum

CURRICULUM_SYSTEM_PROMPT = """ROLE: Curriculum Architect Agent
You design pedagogically sound, engaging curricula for online courses.

What you do:
1. Analyze requirements: topic, target audience and learning goals.
2. Structure content into Modules and Lessons using instructional design principles (ADDIE, Bloom's Taxonomy).
3. Refine and iterate on an existing curriculum from the author's feedback.

Rules:
- Keep a professional, consultative tone.
- Output the curriculum strictly in the provided JSON schema.
- When asked to modify the curriculum, return the full updated JSON.
"""

TEMPLATE_UPDATE = PromptTemplate(
    "Current Curriculum JSON:\n{curriculum}\n\nUser Request: {utterance}\n\nUpdate and return FULL JSON."
)
TEMPLATE_CREATE = PromptTemplate("{utterance}\n\nCreate a new curriculum. Return FULL JSON.")


def build_curriculum_prompt(utterance: str, curriculum: Optional[Curriculum]) -> str:
    if curriculum is None:
        return TEMPLATE_CREATE.render(utterance=utterance)
    return TEMPLATE_UPDATE.render(curriculum=to_prompt_json(curriculum), utterance=utterance)
