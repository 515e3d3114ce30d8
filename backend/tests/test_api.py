"""
ScatterBrain Backend - HTTP API Tests
=====================================

What:  End-to-end requests through the FastAPI app into a real SQLite store.

What we test:
    ✅ ping payload
    ✅ create → get → update → get scenario with timestamps
    ✅ 400 for malformed bodies and identifiers, 404 for unknown ids
    ✅ labels and thought-label routes, including the compound POST
    ✅ X-Request-ID is echoed
"""

import asyncio
import uuid
from datetime import datetime

import pytest


def parse_time(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class TestPing:

    @pytest.mark.asyncio
    async def test_ping(self, test_client):
        response = await test_client.get("/api/ping")

        assert response.status_code == 200
        assert response.json() == {"Status": "pong", "Service": "scatter-brain"}


class TestThoughtScenario:

    @pytest.mark.asyncio
    async def test_create_get_update_cycle(self, test_client):
        created = await test_client.post(
            "/api/thoughts", json={"title": "hello", "content": "world"}
        )
        assert created.status_code == 201
        body = created.json()
        assert uuid.UUID(body["id"]).version == 4
        assert body["title"] == "hello"
        assert body["content"] == "world"
        assert body["create_time"] == body["update_time"]

        fetched = await test_client.get(f"/api/thoughts/{body['id']}")
        assert fetched.status_code == 200
        assert fetched.json() == body

        await asyncio.sleep(0.01)
        updated = await test_client.put(
            f"/api/thoughts/{body['id']}", json={"title": "hello2", "content": "world2"}
        )
        assert updated.status_code == 204
        assert updated.content == b""

        refetched = (await test_client.get(f"/api/thoughts/{body['id']}")).json()
        assert refetched["title"] == "hello2"
        assert refetched["content"] == "world2"
        assert refetched["create_time"] == body["create_time"]
        assert parse_time(refetched["update_time"]) > parse_time(body["update_time"])

    @pytest.mark.asyncio
    async def test_list_thoughts(self, test_client):
        assert (await test_client.get("/api/thoughts")).json() == []

        await test_client.post("/api/thoughts", json={"title": "a", "content": "1"})
        await test_client.post("/api/thoughts", json={"title": "b", "content": "2"})

        response = await test_client.get("/api/thoughts")
        assert response.status_code == 200
        assert sorted(t["title"] for t in response.json()) == ["a", "b"]


class TestThoughtErrors:

    @pytest.mark.asyncio
    async def test_get_unknown_id_is_404(self, test_client):
        response = await test_client.get(f"/api/thoughts/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_update_unknown_id_is_404(self, test_client):
        response = await test_client.put(
            f"/api/thoughts/{uuid.uuid4()}", json={"title": "x", "content": "y"}
        )

        assert response.status_code == 404
        assert response.json()["error"] == "no_row_updated"
        assert (await test_client.get("/api/thoughts")).json() == []

    @pytest.mark.asyncio
    async def test_malformed_id_is_400(self, test_client):
        get = await test_client.get("/api/thoughts/not-a-uuid")
        put = await test_client.put(
            "/api/thoughts/not-a-uuid", json={"title": "x", "content": "y"}
        )

        assert get.status_code == 400
        assert put.status_code == 400
        assert get.json()["message"] == "unable to parse the identifier."

    @pytest.mark.asyncio
    async def test_non_canonical_ids_are_400(self, test_client):
        created = (
            await test_client.post("/api/thoughts", json={"title": "t", "content": "c"})
        ).json()
        thought_id = uuid.UUID(created["id"])

        for spelling in (thought_id.hex, f"{{{thought_id}}}", f"urn:uuid:{thought_id}"):
            response = await test_client.get(f"/api/thoughts/{spelling}")
            assert response.status_code == 400, spelling

        canonical = await test_client.get(f"/api/thoughts/{thought_id}")
        assert canonical.status_code == 200

    @pytest.mark.asyncio
    async def test_malformed_json_is_400(self, test_client):
        response = await test_client.post(
            "/api/thoughts",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        assert response.json()["message"].startswith("Unable to decode")

    @pytest.mark.asyncio
    async def test_missing_field_is_400(self, test_client):
        response = await test_client.post("/api/thoughts", json={"title": "only"})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_update_with_bad_body_is_400(self, test_client):
        created = (
            await test_client.post("/api/thoughts", json={"title": "t", "content": "c"})
        ).json()

        response = await test_client.put(f"/api/thoughts/{created['id']}", json=["nope"])
        assert response.status_code == 400


class TestLabels:

    @pytest.mark.asyncio
    async def test_create_and_list(self, test_client):
        created = await test_client.post("/api/labels", json={"hex": "#fff", "description": "x"})

        assert created.status_code == 201
        label = created.json()
        assert isinstance(label["id"], int)
        assert label["hex"] == "#fff"
        assert label["description"] == "x"

        listed = await test_client.get("/api/labels")
        assert listed.status_code == 200
        assert listed.json() == [label]

    @pytest.mark.asyncio
    async def test_bad_body_is_400(self, test_client):
        response = await test_client.post("/api/labels", json={"hex": "#fff"})
        assert response.status_code == 400


class TestThoughtLabels:

    @pytest.mark.asyncio
    async def test_attach_label_echoes_link(self, test_client):
        thought = (
            await test_client.post("/api/thoughts", json={"title": "t", "content": "c"})
        ).json()
        label = (
            await test_client.post("/api/labels", json={"hex": "#f00", "description": "red"})
        ).json()
        link = {"thought_id": thought["id"], "label_id": label["id"]}

        response = await test_client.put("/api/thought-labels", json=link)

        assert response.status_code == 201
        assert response.json() == link

        listed = (await test_client.get(f"/api/thoughts/{thought['id']}/labels")).json()
        assert listed == [{"thought": thought, "labels": label}]

    @pytest.mark.asyncio
    async def test_attach_unknown_label_is_500(self, test_client):
        thought = (
            await test_client.post("/api/thoughts", json={"title": "t", "content": "c"})
        ).json()

        response = await test_client.put(
            "/api/thought-labels", json={"thought_id": thought["id"], "label_id": 42}
        )

        assert response.status_code == 500
        assert response.json()["error"] == "server_error"

    @pytest.mark.asyncio
    async def test_attach_with_bad_thought_id_is_400(self, test_client):
        response = await test_client.put(
            "/api/thought-labels", json={"thought_id": "nope", "label_id": 1}
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_attach_with_non_canonical_thought_id_is_400(self, test_client):
        thought = (
            await test_client.post("/api/thoughts", json={"title": "t", "content": "c"})
        ).json()
        label = (
            await test_client.post("/api/labels", json={"hex": "#00f", "description": "blue"})
        ).json()

        response = await test_client.put(
            "/api/thought-labels",
            json={"thought_id": uuid.UUID(thought["id"]).hex, "label_id": label["id"]},
        )

        assert response.status_code == 400
        listed = await test_client.get(f"/api/thoughts/{thought['id']}/labels")
        assert listed.json() == []

    @pytest.mark.asyncio
    async def test_create_thought_with_label(self, test_client):
        label = (
            await test_client.post("/api/labels", json={"hex": "#0f0", "description": "green"})
        ).json()

        response = await test_client.post(
            "/api/thought-labels",
            json={"title": "hello", "content": "world", "label_id": label["id"]},
        )

        assert response.status_code == 201
        assert response.text == "thought created"
        thoughts = (await test_client.get("/api/thoughts")).json()
        assert [t["title"] for t in thoughts] == ["hello"]

    @pytest.mark.asyncio
    async def test_create_thought_with_unknown_label_stores_nothing(self, test_client):
        response = await test_client.post(
            "/api/thought-labels",
            json={"title": "hello", "content": "world", "label_id": 12345},
        )

        assert response.status_code == 500
        assert (await test_client.get("/api/thoughts")).json() == []

    @pytest.mark.asyncio
    async def test_labels_of_malformed_id_is_400(self, test_client):
        response = await test_client.get("/api/thoughts/xyz/labels")
        assert response.status_code == 400


class TestRequestId:

    @pytest.mark.asyncio
    async def test_generated_request_id(self, test_client):
        response = await test_client.get("/api/labels")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_client_request_id_echoed(self, test_client):
        response = await test_client.get(
            f"/api/thoughts/{uuid.uuid4()}", headers={"X-Request-ID": "trace-123"}
        )

        assert response.headers["X-Request-ID"] == "trace-123"
        assert response.json()["request_id"] == "trace-123"

    @pytest.mark.asyncio
    async def test_oversized_request_id_replaced(self, test_client):
        response = await test_client.get("/api/labels", headers={"X-Request-ID": "x" * 500})
        assert len(response.headers["X-Request-ID"]) == 8
