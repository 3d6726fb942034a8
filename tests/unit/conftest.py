"""
Unit test fixtures. Scripted provider and in-memory store; no real DB server or LLM.
"""
import pytest


@pytest.fixture
def messages_of(studio):
    """Return the active session's messages for a mode as (role, text) pairs."""
    def _messages(mode):
        return [(m.role, m.text) for m in studio.conversation.messages(mode)]
    return _messages
