"""
NoteKeep — Notes Route Tests
=============================

What:  HTTP-level tests for every notes endpoint through HTTPX + ASGITransport.
How:   The app's get_note_store dependency is overridden with a store over a
       tmp_path state file (see conftest.test_client).

What we test:
    ✅ Status codes for every success and failure path
    ✅ Error envelope carries only category, generic message and request ID
    ✅ Storage failures surface as 500 without internal details
"""

import pytest
from httpx import ASGITransport, AsyncClient

from notekeep.routes.notes import parse_note_id
from notekeep.services.note_store import get_note_store


async def _create(client, title="A", content="x"):
    response = await client.post("/note", json={"title": title, "content": content})
    assert response.status_code == 201
    return response.json()


class TestParseNoteId:

    @pytest.mark.parametrize("raw,expected", [("1", 1), ("42", 42), ("007", 7)])
    def test_valid(self, raw, expected):
        assert parse_note_id(raw) == expected

    @pytest.mark.parametrize("raw", ["0", "-1", "1.5", "abc", "", " 1", "1e3", "٣"])
    def test_invalid(self, raw):
        assert parse_note_id(raw) is None


class TestListNotes:

    @pytest.mark.asyncio
    async def test_empty_collection_is_404(self, test_client):
        response = await test_client.get("/notes")

        assert response.status_code == 404
        assert response.json()["message"] == "No notes found"

    @pytest.mark.asyncio
    async def test_lists_in_insertion_order(self, test_client):
        await _create(test_client, "first")
        await _create(test_client, "second")

        response = await test_client.get("/notes")

        assert response.status_code == 200
        assert [n["title"] for n in response.json()] == ["first", "second"]
        assert response.headers["X-Total-Count"] == "2"


class TestGetNote:

    @pytest.mark.asyncio
    async def test_by_id(self, test_client):
        created = await _create(test_client)

        response = await test_client.get(f"/note/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    @pytest.mark.parametrize("raw_id", ["0", "-3", "abc", "2.5"])
    @pytest.mark.asyncio
    async def test_invalid_id_is_404(self, test_client, raw_id):
        response = await test_client.get(f"/note/{raw_id}")

        assert response.status_code == 404
        assert response.json()["message"] == "Note not found"

    @pytest.mark.asyncio
    async def test_unknown_id_is_404(self, test_client):
        response = await test_client.get("/note/12")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_by_title(self, test_client):
        created = await _create(test_client, "Meeting notes", "agenda")

        response = await test_client.get("/note/read/Meeting notes")

        assert response.status_code == 200
        assert response.json()["id"] == created["id"]

    @pytest.mark.asyncio
    async def test_by_unknown_title_is_404(self, test_client):
        await _create(test_client, "A")

        response = await test_client.get("/note/read/a")

        assert response.status_code == 404


class TestCreateNote:

    @pytest.mark.asyncio
    async def test_created(self, test_client):
        response = await test_client.post("/note", json={"title": "A", "content": "x"})

        assert response.status_code == 201
        body = response.json()
        assert body["id"] == 1
        assert (body["title"], body["content"]) == ("A", "x")
        assert body["created"] == body["changed"]

    @pytest.mark.parametrize(
        "payload",
        [{"title": "A"}, {"content": "x"}, {"title": "", "content": "x"}, {}],
    )
    @pytest.mark.asyncio
    async def test_missing_field_is_409(self, test_client, payload):
        response = await test_client.post("/note", json=payload)

        assert response.status_code == 409
        assert response.json()["message"] == "Cannot create note"

    @pytest.mark.asyncio
    async def test_duplicate_title_is_409(self, test_client):
        await _create(test_client, "A")

        response = await test_client.post("/note", json={"title": "A", "content": "y"})

        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "conflict"
        assert body["message"] == "Cannot create note"

    @pytest.mark.asyncio
    async def test_malformed_body_is_409(self, test_client):
        response = await test_client.post(
            "/note", content=b"{oops", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 409
        assert response.json()["message"] == "Cannot create note"

    @pytest.mark.asyncio
    async def test_error_body_hides_internal_context(self, test_client):
        await _create(test_client, "secret title")

        response = await test_client.post(
            "/note", json={"title": "secret title", "content": "y"}
        )

        assert set(response.json()) == {"error", "message", "request_id"}
        assert "secret title" not in response.text


class TestUpdateNote:

    @pytest.mark.asyncio
    async def test_updated_is_204(self, test_client):
        await _create(test_client, "A", "x")

        response = await test_client.put("/note/1", json={"content": "y"})

        assert response.status_code == 204
        assert response.content == b""
        note = (await test_client.get("/note/1")).json()
        assert (note["title"], note["content"]) == ("A", "y")

    @pytest.mark.asyncio
    async def test_same_title_is_allowed(self, test_client):
        await _create(test_client, "A", "x")

        response = await test_client.put("/note/1", json={"title": "A"})

        assert response.status_code == 204

    @pytest.mark.asyncio
    async def test_nothing_to_update_is_409(self, test_client):
        await _create(test_client)

        response = await test_client.put("/note/1", json={})

        assert response.status_code == 409
        assert response.json()["message"] == "Cannot update note"

    @pytest.mark.asyncio
    async def test_title_conflict_is_409(self, test_client):
        await _create(test_client, "A")
        await _create(test_client, "B")

        response = await test_client.put("/note/2", json={"title": "A"})

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_unknown_id_is_409(self, test_client):
        response = await test_client.put("/note/5", json={"content": "x"})

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_invalid_id_is_409(self, test_client):
        response = await test_client.put("/note/zero", json={"content": "x"})

        assert response.status_code == 409
        assert response.json()["message"] == "Cannot update note"


class TestDeleteNote:

    @pytest.mark.asyncio
    async def test_deleted_is_204(self, test_client):
        await _create(test_client)

        response = await test_client.delete("/note/1")

        assert response.status_code == 204
        assert (await test_client.get("/note/1")).status_code == 404

    @pytest.mark.asyncio
    async def test_unknown_id_is_409(self, test_client):
        response = await test_client.delete("/note/1")

        assert response.status_code == 409
        assert response.json()["message"] == "Cannot delete note"

    @pytest.mark.asyncio
    async def test_invalid_id_is_409(self, test_client):
        response = await test_client.delete("/note/-1")

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_id_not_reused_over_http(self, test_client):
        await _create(test_client, "A")
        await test_client.delete("/note/1")

        created = await _create(test_client, "A")

        assert created["id"] == 2


class TestStorageFailures:

    @pytest.mark.asyncio
    async def test_corrupted_state_is_500(self, test_client, state_path):
        state_path.parent.mkdir(parents=True)
        state_path.write_text("not json", encoding="utf-8")

        for method, url, kwargs in [
            ("GET", "/notes", {}),
            ("GET", "/note/1", {}),
            ("GET", "/note/read/A", {}),
            ("POST", "/note", {"json": {"title": "A", "content": "x"}}),
            ("PUT", "/note/1", {"json": {"content": "x"}}),
            ("DELETE", "/note/1", {}),
        ]:
            response = await test_client.request(method, url, **kwargs)
            assert response.status_code == 500, (method, url)
            assert response.json()["message"] == "Unexpected error"
            assert str(state_path) not in response.text


    @pytest.mark.asyncio
    async def test_timestamps_without_offset_fail_reads_and_updates_alike(
        self, test_client, state_path
    ):
        state_path.parent.mkdir(parents=True)
        state_path.write_text(
            '{"lastId": 1, "notes": [{"id": 1, "title": "A", "content": "x", '
            '"created": "2024-01-15T12:00:00", "changed": "2024-01-15T12:00:00"}]}',
            encoding="utf-8",
        )

        get_response = await test_client.get("/note/1")
        put_response = await test_client.put("/note/1", json={"content": "y"})

        assert get_response.status_code == 500
        assert put_response.status_code == 500
        assert put_response.json()["message"] == "Unexpected error"


class _BrokenStore:
    """Stand-in store whose reads fail with a non-application exception."""

    async def list_all(self):
        raise RuntimeError("disk controller exploded at /var/lib/notes")


class TestUnexpectedErrors:

    @pytest.mark.asyncio
    async def test_unexpected_exception_returns_generic_500(self):
        from notekeep.main import app

        app.dependency_overrides[get_note_store] = lambda: _BrokenStore()
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        try:
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.get("/notes")
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "internal_server_error"
        assert body["message"] == "Unexpected error"
        assert set(body) == {"error", "message", "request_id"}
        assert "exploded" not in response.text


class TestHealth:

    @pytest.mark.asyncio
    async def test_healthy(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["storage"] == "readable"

    @pytest.mark.asyncio
    async def test_unhealthy_when_state_unreadable(self, test_client, state_path):
        state_path.parent.mkdir(parents=True)
        state_path.write_text("[]", encoding="utf-8")

        response = await test_client.get("/health")

        assert response.status_code == 503
        assert response.json()["storage"] == "unavailable"

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, test_client):
        response = await test_client.get("/notes", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"
        assert response.json()["request_id"] == "abc123"
