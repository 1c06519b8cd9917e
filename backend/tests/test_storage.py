"""
Tests for the local document store, chat session appends and user storage.
"""

import asyncio
import datetime as dt

import pytest

from vitalvibe.core.conversation import CHAT_LOGS, ConversationManager
from vitalvibe.models import ChatTurn
from vitalvibe.storage import (
    DuplicateKeyError,
    InvalidDocumentId,
    LocalStorage,
    StorageUnavailable,
    UserStorage,
)


class TestLocalStorage:

    @pytest.mark.asyncio
    async def test_insert_and_get(self, store):
        saved = await store.insert("moods", {"userId": "u1", "mood": "happy"})
        assert saved["revision"] == 1
        assert saved["createdAt"] == saved["updatedAt"]

        loaded = await store.get("moods", saved["id"])
        assert loaded == saved

    @pytest.mark.asyncio
    async def test_explicit_id_conflict(self, store):
        await store.insert("chatlogs", {"messages": []}, doc_id="session-1")
        with pytest.raises(DuplicateKeyError):
            await store.insert("chatlogs", {"messages": []}, doc_id="session-1")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad_id", ["../etc/passwd", "a/b", "", ".hidden", "x" * 200])
    async def test_invalid_ids_are_rejected(self, store, bad_id):
        with pytest.raises(InvalidDocumentId):
            await store.get("moods", bad_id)

    @pytest.mark.asyncio
    async def test_update_bumps_revision_and_protects_id(self, store):
        saved = await store.insert("routines", {"title": "Morning"})
        updated = await store.update("routines", saved["id"], {"title": "Evening", "id": "other"})
        assert updated["title"] == "Evening"
        assert updated["id"] == saved["id"]
        assert updated["revision"] == 2

    @pytest.mark.asyncio
    async def test_update_and_delete_missing(self, store):
        assert await store.update("routines", "missing", {"x": 1}) is None
        assert await store.delete("routines", "missing") is False

    @pytest.mark.asyncio
    async def test_find_filters_and_sorting(self, store):
        for day, intensity in ((1, 3), (5, 7), (9, 5)):
            await store.insert("moods", {
                "userId": "u1", "date": dt.date(2026, 10, day).isoformat(), "intensity": intensity,
            })
        await store.insert("moods", {"userId": "u2", "date": "2026-10-05", "intensity": 1})

        found = await store.find("moods", {
            "userId": "u1",
            "date": {"$gte": dt.datetime(2026, 10, 2, tzinfo=dt.timezone.utc)},
        }, sort_by="date")
        assert [m["intensity"] for m in found] == [5, 7]

        ascending = await store.find("moods", {"userId": "u1"}, sort_by="intensity", descending=False)
        assert [m["intensity"] for m in ascending] == [3, 5, 7]

        page = await store.find("moods", {"userId": "u1"}, sort_by="intensity", limit=1, skip=1)
        assert [m["intensity"] for m in page] == [5]

    @pytest.mark.asyncio
    async def test_in_and_ne_operators(self, store):
        await store.insert("notifications", {"type": "push", "read": False})
        await store.insert("notifications", {"type": "email", "read": True})
        await store.insert("notifications", {"type": "goal", "read": False})

        assert await store.count("notifications", {"type": {"$in": ["push", "email"]}}) == 2
        assert await store.count("notifications", {"read": {"$ne": True}}) == 2

    @pytest.mark.asyncio
    async def test_update_many_and_delete_many(self, store):
        for _ in range(3):
            await store.insert("notifications", {"userId": "u1", "read": False})
        assert await store.update_many("notifications", {"userId": "u1"}, {"read": True}) == 3
        assert await store.count("notifications", {"read": True}) == 3
        assert await store.delete_many("notifications", {"userId": "u1"}) == 3
        assert await store.count("notifications") == 0

    @pytest.mark.asyncio
    async def test_push_creates_missing_document(self, store):
        doc = await store.push("chatlogs", "session-9", "messages", [{"role": "user"}],
                               defaults={"sessionId": "session-9", "messages": []})
        assert doc["messages"] == [{"role": "user"}]
        assert doc["revision"] == 1

    @pytest.mark.asyncio
    async def test_push_without_defaults_requires_document(self, store):
        with pytest.raises(KeyError):
            await store.push("chatlogs", "session-404", "messages", [1])

    @pytest.mark.asyncio
    async def test_concurrent_pushes_lose_nothing(self, store):
        async def append(i):
            await store.push("chatlogs", "session-race", "messages", [i], defaults={"messages": []})

        await asyncio.gather(*(append(i) for i in range(25)))

        doc = await store.get("chatlogs", "session-race")
        assert sorted(doc["messages"]) == list(range(25))
        assert doc["revision"] == 25

    @pytest.mark.asyncio
    async def test_write_locks_are_released(self, store):
        for i in range(50):
            await store.insert("moods", {"_id": f"m{i}", "mood": "calm"})
        await asyncio.gather(*(
            store.push("chatlogs", f"session-{i % 5}", "messages", [i], defaults={"messages": []})
            for i in range(20)
        ))
        await store.update("moods", "m1", {"mood": "happy"})
        await store.delete("moods", "m2")

        assert store._locks == {}

    @pytest.mark.asyncio
    async def test_delete_racing_pushes(self, store):
        await store.push("chatlogs", "session-del", "messages", [-1], defaults={"messages": []})

        async def append(i):
            await store.push("chatlogs", "session-del", "messages", [i], defaults={"messages": []})

        results = await asyncio.gather(
            *(append(i) for i in range(10)),
            store.delete("chatlogs", "session-del"),
            *(append(i) for i in range(10, 20)),
        )

        assert results[10] is True
        doc = await store.get("chatlogs", "session-del")
        assert doc is not None
        assert set(doc["messages"]) <= set(range(20))
        assert len(doc["messages"]) == len(set(doc["messages"]))
        assert store._locks == {}

    @pytest.mark.asyncio
    async def test_disconnected_store_is_unavailable(self, tmp_path):
        storage = LocalStorage(str(tmp_path / "other"))
        assert not storage.is_ready()
        with pytest.raises(StorageUnavailable):
            await storage.find("moods")

        await storage.connect()
        assert storage.is_ready()
        await storage.disconnect()
        with pytest.raises(StorageUnavailable):
            await storage.insert("moods", {})


class TestConversationManager:

    @pytest.mark.asyncio
    async def test_missing_session_has_no_history(self, store):
        conversations = ConversationManager(store)
        assert await conversations.load_history(None) == []
        assert await conversations.load_history("session-unknown") == []

    @pytest.mark.asyncio
    async def test_append_creates_session_for_demo_user(self, store):
        conversations = ConversationManager(store, demo_user_id="demo-user")
        session = await conversations.append_turns("session-1", [
            ChatTurn(role="user", content="hi"),
            ChatTurn(role="assistant", content="hello"),
        ])
        assert session["userId"] == "demo-user"
        assert session["sessionId"] == "session-1"
        assert [m["role"] for m in session["messages"]] == ["user", "assistant"]

        history = await conversations.load_history("session-1")
        assert [m["content"] for m in history] == ["hi", "hello"]

    @pytest.mark.asyncio
    async def test_concurrent_turns_on_one_session(self, store):
        conversations = ConversationManager(store)

        await asyncio.gather(*(
            conversations.append_turns("session-2", [ChatTurn(role="user", content=str(i))], user_id="u1")
            for i in range(10)
        ))

        session = await store.get(CHAT_LOGS, "session-2")
        assert len(session["messages"]) == 10
        assert session["userId"] == "u1"


class TestUserStorage:

    @pytest.mark.asyncio
    async def test_create_hashes_password(self, store):
        users = UserStorage(store)
        user = await users.create_user("Alice@Example.com", "s3cret-pass", "Alice")
        assert user["email"] == "alice@example.com"
        assert user["password"] != "s3cret-pass"
        assert user["password"].startswith("$2")

    @pytest.mark.asyncio
    async def test_duplicate_email(self, store):
        users = UserStorage(store)
        await users.create_user("bob@example.com", "password1", "Bob")
        with pytest.raises(DuplicateKeyError):
            await users.create_user("BOB@example.com", "password2", "Bobby")

    @pytest.mark.asyncio
    async def test_authenticate_records_login(self, store):
        users = UserStorage(store)
        await users.create_user("carol@example.com", "password1", "Carol")

        assert await users.authenticate("carol@example.com", "wrong-pass") is None
        user = await users.authenticate("carol@example.com", "password1")
        assert user["loginCount"] == 1
        assert user["lastLogin"] is not None

    @pytest.mark.asyncio
    async def test_update_rehashes_password(self, store):
        users = UserStorage(store)
        user = await users.create_user("dan@example.com", "password1", "Dan")
        await users.update_user(user["id"], {"password": "password2"})

        assert await users.authenticate("dan@example.com", "password2") is not None
        assert await users.authenticate("dan@example.com", "password1") is None
