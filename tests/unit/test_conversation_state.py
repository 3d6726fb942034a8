"""Unit tests for ConversationState."""
import pytest

from api.services.conversation_state import MessageNotFound


@pytest.mark.unit
class TestMessages:
    def test_defaults_to_active_mode(self, studio):
        studio.sessions.set_mode("coach")

        assert studio.conversation.messages()[0].id == "welcome-co"

    def test_add_message_targets_given_session(self, studio):
        origin = studio.sessions.current_session_id
        studio.sessions.create()

        message = studio.conversation.add_message("assessment", "user", "hi", session_id=origin)

        assert studio.sessions.get(origin).messages["assessment"][-1] is message
        assert [m.role for m in studio.conversation.messages("assessment")] == ["model"]

    def test_add_message_refreshes_last_modified(self, studio):
        before = studio.sessions.active.last_modified

        studio.conversation.add_message("curriculum", "user", "hello")

        assert studio.sessions.active.last_modified >= before

    def test_stream_placeholder_grows_in_order(self, studio):
        session_id = studio.sessions.current_session_id
        placeholder = studio.conversation.open_stream("coach", session_id)
        for fragment in ["a", "b", "c"]:
            studio.conversation.append_fragment("coach", placeholder.id, fragment, session_id)

        assert placeholder.text == "abc"
        assert studio.conversation.messages("coach")[-1] is placeholder


@pytest.mark.unit
class TestFeedback:
    @pytest.mark.parametrize(
        "rating,notice",
        [("up", "Thanks for the positive feedback!"), ("down", "Feedback received. We'll improve.")],
    )
    def test_feedback_annotates_and_notifies(self, studio, rating, notice):
        message = studio.conversation.submit_feedback("welcome-c", rating)

        assert message.feedback == rating
        assert studio.sessions.active.messages["curriculum"][0].feedback == rating
        assert [n.message for n in studio.notifications.active()] == [notice]

    def test_feedback_only_searches_active_mode(self, studio):
        with pytest.raises(MessageNotFound):
            studio.conversation.submit_feedback("welcome-co", "up")

    def test_feedback_is_persisted(self, studio, memory_store):
        studio.conversation.submit_feedback("welcome-c", "down")

        assert '"feedback": "down"' in memory_store.get("curriculum_architect_v2")
