"""Unit tests for SessionStore (in-memory key-value store)."""
from datetime import datetime, timedelta, timezone

import pytest

from api.schemas.session_schemas import WELCOME_MESSAGES, Session
from api.services.persistence import SESSIONS_KEY, PersistenceAdapter
from api.services.session_service import SessionNotFound, SessionStore


@pytest.fixture
def store(persistence, notifications):
    sessions = SessionStore(persistence, notifications)
    sessions.hydrate()
    return sessions


def saved_blob(memory_store):
    return PersistenceAdapter(memory_store).load(SESSIONS_KEY)


@pytest.mark.unit
class TestHydrate:
    def test_empty_store_creates_fresh_session(self, store):
        assert len(store.sessions) == 1
        session = store.active
        assert session.title == "Untitled Course"
        assert session.mode == "curriculum"
        assert session.curriculum is None
        assert session.assessments == []

    def test_fresh_session_has_one_welcome_per_mode(self, store):
        messages = store.active.messages
        assert set(messages) == {"curriculum", "assessment", "adaptive", "coach"}
        for mode, (message_id, text) in WELCOME_MESSAGES.items():
            assert [(m.id, m.role, m.text) for m in messages[mode]] == [(message_id, "model", text)]

    def test_restores_collection_and_pointer(self, store, persistence, notifications, memory_store):
        first_id = store.current_session_id
        second = store.create()
        store.rename(second.id, "Second")
        store.switch_to(first_id)

        restored = SessionStore(persistence, notifications)
        restored.hydrate()

        assert set(restored.sessions) == {first_id, second.id}
        assert restored.current_session_id == first_id
        assert restored.get(second.id).title == "Second"
        assert isinstance(restored.get(second.id).last_modified, datetime)

    def test_corrupt_blob_is_ignored(self, memory_store, persistence, notifications):
        memory_store.set(SESSIONS_KEY, "{not json")
        sessions = SessionStore(persistence, notifications)

        session = sessions.hydrate()

        assert list(sessions.sessions) == [session.id]
        assert session.title == "Untitled Course"

    def test_empty_collection_yields_fresh_session(self, memory_store, persistence, notifications):
        persistence.save(SESSIONS_KEY, {"sessions": {}, "currentSessionId": "gone"})
        sessions = SessionStore(persistence, notifications)

        session = sessions.hydrate()

        assert sessions.current_session_id == session.id
        assert len(sessions.sessions) == 1

    def test_dangling_pointer_selects_most_recent(self, persistence, notifications):
        old = Session.create()
        old.last_modified = datetime(2024, 1, 1, tzinfo=timezone.utc)
        recent = Session.create()
        recent.last_modified = datetime(2024, 6, 1, tzinfo=timezone.utc)
        persistence.save(
            SESSIONS_KEY,
            {"sessions": {s.id: s.to_json_dict() for s in (old, recent)}, "currentSessionId": "missing"},
        )
        sessions = SessionStore(persistence, notifications)

        assert sessions.hydrate().id == recent.id

    def test_untitled_stored_session_becomes_migrated(self, persistence, notifications):
        legacy = Session.create().to_json_dict()
        legacy.pop("title")
        persistence.save(SESSIONS_KEY, {"sessions": {legacy["id"]: legacy}, "currentSessionId": legacy["id"]})
        sessions = SessionStore(persistence, notifications)

        assert sessions.hydrate().title == "Migrated Session"


@pytest.mark.unit
class TestCreateAndSwitch:
    def test_ids_are_unique_and_increasing(self, store):
        ids = [store.create().id for _ in range(20)]
        assert len(set(ids)) == 20
        assert [int(i) for i in ids] == sorted(int(i) for i in ids)

    def test_create_activates_and_notifies(self, store, notifications, memory_store):
        session = store.create()

        assert store.current_session_id == session.id
        assert [n.message for n in notifications.active()] == ["New session created"]
        assert saved_blob(memory_store)["currentSessionId"] == session.id

    def test_switch_unknown_is_noop(self, store, notifications):
        current = store.current_session_id

        assert store.switch_to("nope") is False
        assert store.current_session_id == current
        assert notifications.active() == []

    def test_switch_leaves_previous_session_untouched(self, store, notifications, memory_store):
        first = store.active
        store.set_mode("coach")
        second = store.create()
        store.rename(second.id, "Other")
        snapshot = store.get(second.id).model_copy(deep=True)

        assert store.switch_to(first.id) is True

        assert store.active.mode == "coach"
        assert store.get(second.id) == snapshot
        assert saved_blob(memory_store)["currentSessionId"] == first.id
        assert notifications.active()[-1].message == f'Switched to "{first.title}"'


@pytest.mark.unit
class TestDelete:
    def test_delete_only_session_creates_replacement(self, store):
        only = store.current_session_id

        assert store.delete(only) is True

        assert only not in store.sessions
        assert len(store.sessions) == 1
        assert store.active.title == "Untitled Course"

    def test_delete_active_with_one_survivor(self, store):
        first = store.current_session_id
        second = store.create().id

        store.delete(second)

        assert store.current_session_id == first

    def test_delete_active_picks_most_recently_modified(self, store):
        base = datetime(2025, 1, 1, tzinfo=timezone.utc)
        a = store.active
        b = store.create()
        c = store.create()
        a.last_modified = base + timedelta(minutes=5)
        b.last_modified = base + timedelta(minutes=1)

        store.delete(c.id)

        assert store.current_session_id == a.id

    def test_equal_timestamps_prefer_newer_session(self, store):
        stamp = datetime(2025, 1, 1, tzinfo=timezone.utc)
        a = store.active
        b = store.create()
        c = store.create()
        a.last_modified = stamp
        b.last_modified = stamp

        store.delete(c.id)

        assert store.current_session_id == b.id

    def test_delete_inactive_only_updates_collection(self, store, notifications, memory_store):
        keep = store.create()
        other = store.create()
        store.switch_to(keep.id)
        notifications.clear()

        assert store.delete(other.id) is True

        assert store.current_session_id == keep.id
        assert other.id not in saved_blob(memory_store)["sessions"]
        assert notifications.active() == []

    def test_delete_unknown_is_noop(self, store):
        assert store.delete("missing") is False


@pytest.mark.unit
class TestRenameAndWriteThrough:
    def test_rename_persists(self, store, memory_store):
        store.rename(store.current_session_id, "  Data Science 101 ")

        assert store.active.title == "Data Science 101"
        assert saved_blob(memory_store)["sessions"][store.current_session_id]["title"] == "Data Science 101"

    @pytest.mark.parametrize("title", ["", "   "])
    def test_blank_title_rejected(self, store, title):
        with pytest.raises(ValueError):
            store.rename(store.current_session_id, title)
        assert store.active.title == "Untitled Course"

    def test_rename_unknown_raises(self, store):
        with pytest.raises(SessionNotFound):
            store.rename("missing", "Title")

    def test_mode_change_refreshes_last_modified_and_persists(self, store, memory_store):
        store.active.last_modified = datetime(2020, 1, 1, tzinfo=timezone.utc)

        store.set_mode("assessment")

        assert store.active.last_modified.year > 2020
        stored = saved_blob(memory_store)["sessions"][store.current_session_id]
        assert stored["mode"] == "assessment"
        assert stored["lastModified"] == store.active.last_modified

    def test_replace_curriculum_reports_first_assignment(self, store, curriculum):
        session_id = store.current_session_id

        assert store.replace_curriculum(session_id, curriculum) is True
        assert store.replace_curriculum(session_id, curriculum) is False
        assert store.active.title == "Python for Beginners"

    def test_list_sessions_most_recent_first(self, store):
        older = store.active
        newer = store.create()
        older.last_modified = datetime(2020, 1, 1, tzinfo=timezone.utc)

        assert [s.id for s in store.list_sessions()] == [newer.id, older.id]

    def test_reset_drops_everything(self, store, memory_store):
        store.create()
        store.create()

        session = store.reset()

        assert list(store.sessions) == [session.id]
        assert list(saved_blob(memory_store)["sessions"]) == [session.id]

    def test_later_replace_keeps_title(self, store, curriculum):
        session_id = store.current_session_id
        store.replace_curriculum(session_id, curriculum)
        store.rename(session_id, "Untitled Course")

        store.replace_curriculum(session_id, curriculum.model_copy(update={"title": "Renamed Course"}))

        assert store.active.title == "Untitled Course"
