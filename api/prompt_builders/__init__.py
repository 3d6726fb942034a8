"""
App prompt builders: system instructions and per-request prompts for each agent,
filled with the library core template. Agent profiles receive these at registration.
"""

from api.prompt_builders.curriculum import CURRICULUM_SYSTEM_PROMPT, build_curriculum_prompt
from api.prompt_builders.assessment import ASSESSMENT_SYSTEM_PROMPT, build_assessment_prompt
from api.prompt_builders.adaptive import ADAPTIVE_SYSTEM_PROMPT, build_adaptive_prompt
from api.prompt_builders.coach import COACH_SYSTEM_PROMPT, build_coach_prompt

__all__ = [
    "CURRICULUM_SYSTEM_PROMPT",
    "ASSESSMENT_SYSTEM_PROMPT",
    "ADAPTIVE_SYSTEM_PROMPT",
    "COACH_SYSTEM_PROMPT",
    "build_curriculum_prompt",
    "build_assessment_prompt",
    "build_adaptive_prompt",
    "build_coach_prompt",
]
