"""
End-to-end authoring flow over the wired studio: design a curriculum, adapt it,
then grade it. Each agent must be grounded in the latest curriculum.
"""
import json

import pytest

from api.services.persistence import SESSIONS_KEY
from fakes import MOCK_ADAPTED_CURRICULUM, MOCK_ASSIGNMENT, MOCK_CURRICULUM, as_json


@pytest.mark.integration
class TestAuthoringFlow:
    @pytest.mark.asyncio
    async def test_design_adapt_assess(self, sql_studio, llm, sql_store):
        llm.responses.extend(
            [as_json(MOCK_CURRICULUM), as_json(MOCK_ADAPTED_CURRICULUM), as_json(MOCK_ASSIGNMENT)]
        )
        studio = sql_studio

        created = await studio.orchestrator.submit("Create a Python course for beginners")
        assert created.status == "completed"
        assert studio.sessions.active.title == "Python for Beginners"

        studio.sessions.set_mode("adaptive")
        adapted = await studio.orchestrator.submit("Make it advanced")
        assert adapted.message == "Curriculum adapted successfully."
        assert "Setup and Basics" in llm.prompts[1]

        studio.sessions.set_mode("assessment")
        assessed = await studio.orchestrator.submit("Final assignment")
        assert assessed.message == 'I\'ve created a Assignment for "Variables".'

        assessment_prompt = llm.prompts[2]
        assert "Advanced Introduction" in assessment_prompt
        assert "Setup and Basics" not in assessment_prompt

        session = studio.sessions.active
        assert session.curriculum.difficulty_level == "Advanced"
        assert session.title == "Python for Beginners"
        assert [a.type for a in session.assessments] == ["Assignment"]

        stored = json.loads(sql_store.get(SESSIONS_KEY))["sessions"][session.id]
        assert stored["curriculum"]["modules"][0]["title"] == "Advanced Introduction"
        assert stored["assessments"][0]["rubric"][0]["maxPoints"] == 15
        assert [m["role"] for m in stored["messages"]["assessment"]] == ["model", "user", "model"]

    @pytest.mark.asyncio
    async def test_sessions_keep_their_own_documents(self, sql_studio, llm):
        llm.responses.extend([as_json(MOCK_CURRICULUM)])
        studio = sql_studio
        first = studio.sessions.current_session_id
        await studio.orchestrator.submit("Create a Python course")

        second = studio.sessions.create()
        studio.sessions.set_mode("assessment")
        outcome = await studio.orchestrator.submit("Quiz please")

        assert outcome.status == "precondition_failed"
        assert studio.sessions.get(first).curriculum is not None
        assert studio.sessions.get(second.id).curriculum is None
        assert studio.sessions.get(first).mode == "curriculum"
