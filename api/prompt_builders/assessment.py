"""Assessment Designer prompts."""

from __future__ import annotations

from typing import Optional

from agents.core.prompt_builder import PromptTemplate, to_prompt_json
from api.schemas.curriculum_schemas import Curriculum

ASSESSMENT_SYSTEM_PROMPT = """ROLE: Assessment & Grading Agent
You create rigorous assessments (Quizzes, Assignments) for an existing curriculum.

Context: you receive the current curriculum structure. Align every item with the
learning objectives of the module or lesson being tested.

What you do:
1. Quizzes: multiple-choice or short-answer questions with clear correct answers and point values.
2. Assignments: project-based tasks with a detailed grading rubric.
3. Alignment: each item directly tests a skill listed in the curriculum.

Rules:
- Generate ONE assessment at a time (e.g. "Quiz for Module 1" or "Final Assignment").
- 'targetContext' states which part of the curriculum the assessment covers.
- Quizzes provide 'questions', 'options' (for Multiple Choice) and 'correctAnswer'.
- Assignments provide a 'rubric'.
"""

TEMPLATE = PromptTemplate(
    'Current Curriculum: {curriculum}\nUser Request: "{utterance}"\nGenerate assessment JSON.'
)


def build_assessment_prompt(utterance: str, curriculum: Optional[Curriculum]) -> str:
    return TEMPLATE.render(curriculum=to_prompt_json(curriculum), utterance=utterance)
