"""Unit tests for per-agent prompt construction."""
import pytest

from api.prompt_builders import (
    build_adaptive_prompt,
    build_assessment_prompt,
    build_coach_prompt,
    build_curriculum_prompt,
)


@pytest.mark.unit
class TestCurriculumPrompt:
    def test_create_without_curriculum(self):
        assert build_curriculum_prompt("Teach SQL", None) == "Teach SQL\n\nCreate a new curriculum. Return FULL JSON."

    def test_update_embeds_current_document(self, curriculum):
        prompt = build_curriculum_prompt("Add a module on loops", curriculum)

        assert prompt.startswith("Current Curriculum JSON:\n{")
        assert "Setup and Basics" in prompt
        assert prompt.endswith("User Request: Add a module on loops\n\nUpdate and return FULL JSON.")


@pytest.mark.unit
class TestGroundedPrompts:
    def test_assessment(self, curriculum):
        prompt = build_assessment_prompt("Quiz on module 1", curriculum)

        assert prompt.startswith('Current Curriculum: {"title":"Python for Beginners"')
        assert prompt.endswith('User Request: "Quiz on module 1"\nGenerate assessment JSON.')

    def test_adaptive(self, curriculum):
        prompt = build_adaptive_prompt("Compress to 1 week", curriculum)

        assert prompt.endswith('Request: "Compress to 1 week"\nAdapt and return FULL JSON.')
        assert "Install Python" in prompt

    def test_coach_without_curriculum_sends_null(self):
        prompt = build_coach_prompt("How do I teach recursion?", None)

        assert prompt == (
            "Current Curriculum Context: null\n"
            'User Question: "How do I teach recursion?"\n'
            "Provide a helpful response in markdown."
        )
