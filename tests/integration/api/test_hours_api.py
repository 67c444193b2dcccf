"""Integration tests for Hours API."""

from typing import Any
from uuid import UUID, uuid4

import pytest
from httpx import AsyncClient

from infrastructure.auth.provider import TokenUser


@pytest.fixture
def new_hour(authenticated_client: AsyncClient, seed: dict[str, UUID]):
    """POST an hour on the internal project, overriding any field."""

    async def _post(**overrides: Any) -> dict[str, Any]:
        body: dict[str, Any] = {
            "project_id": str(seed["internal"]),
            "category_id": str(seed["development"]),
            "starting_time": "2015-04-20T09:00:00",
            "ending_time": "2015-04-20T11:30:00",
            "value": 2.5,
        }
        body.update(overrides)
        response = await authenticated_client.post("/api/v1/hours", json=body)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _post


class TestCreateHour:
    async def test_create_hour(self, new_hour, test_user: TokenUser):
        data = await new_hour(description="Pairing on #tdd for the #api")

        assert data["user_id"] == str(test_user.id)
        assert data["value"] == 2.5
        assert data["tag_list"] == "tdd, api"
        assert [t["name"] for t in data["tags"]] == ["tdd", "api"]
        assert data["is_open"] is False

    async def test_create_open_hour(self, new_hour):
        data = await new_hour(ending_time=None)

        assert data["is_open"] is True

    async def test_offset_times_are_converted_to_utc(
        self, new_hour, authenticated_client: AsyncClient
    ):
        data = await new_hour(
            starting_time="2015-04-20T23:30:00-05:00",
            ending_time="2015-04-21T05:00:00Z",
        )

        assert data["starting_time"] == "2015-04-21T04:30:00"
        assert data["ending_time"] == "2015-04-21T05:00:00"
        response = await authenticated_client.get(
            "/api/v1/hours", params={"from_date": "21/04/2015", "to_date": "21/04/2015"}
        )
        assert [hour["id"] for hour in response.json()["data"]] == [data["id"]]

    async def test_patch_with_utc_designator(
        self, new_hour, authenticated_client: AsyncClient
    ):
        data = await new_hour()

        response = await authenticated_client.patch(
            f"/api/v1/hours/{data['id']}", json={"ending_time": "2015-04-20T12:00:00Z"}
        )

        assert response.status_code == 200
        assert response.json()["data"]["ending_time"] == "2015-04-20T12:00:00"

    async def test_missing_project_is_rejected(
        self, authenticated_client: AsyncClient, seed: dict[str, UUID]
    ):
        response = await authenticated_client.post(
            "/api/v1/hours",
            json={
                "category_id": str(seed["development"]),
                "starting_time": "2015-04-20T09:00:00",
            },
        )

        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["details"] == [{"field": "project", "message": "can't be blank"}]

    async def test_unknown_category_is_rejected(
        self, authenticated_client: AsyncClient, seed: dict[str, UUID]
    ):
        response = await authenticated_client.post(
            "/api/v1/hours",
            json={
                "project_id": str(seed["internal"]),
                "category_id": str(uuid4()),
                "starting_time": "2015-04-20T09:00:00",
            },
        )

        assert response.status_code == 422
        assert response.json()["details"] == [{"field": "category", "message": "does not exist"}]

    async def test_negative_value_is_rejected(self, authenticated_client: AsyncClient):
        response = await authenticated_client.post("/api/v1/hours", json={"value": -1})

        assert response.status_code == 422


class TestReadHours:
    async def test_get_hour(self, authenticated_client: AsyncClient, new_hour):
        created = await new_hour(description="#api")

        response = await authenticated_client.get(f"/api/v1/hours/{created['id']}")

        assert response.status_code == 200
        assert response.json()["data"]["tag_list"] == "api"

    async def test_get_unknown_hour(self, authenticated_client: AsyncClient):
        response = await authenticated_client.get(f"/api/v1/hours/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["error_code"] == "HOUR_NOT_FOUND"

    async def test_list_latest_start_first(self, authenticated_client: AsyncClient, new_hour):
        early = await new_hour(starting_time="2015-04-01T09:00:00")
        late = await new_hour(starting_time="2015-04-05T09:00:00")

        response = await authenticated_client.get("/api/v1/hours")

        body = response.json()
        assert [h["id"] for h in body["data"]] == [late["id"], early["id"]]
        assert body["meta"]["total"] == 2
        assert body["meta"]["total_value"] == 5.0

    async def test_list_by_created_at(self, authenticated_client: AsyncClient, new_hour):
        first = await new_hour(starting_time="2015-04-05T09:00:00")
        second = await new_hour(starting_time="2015-04-01T09:00:00")

        response = await authenticated_client.get("/api/v1/hours", params={"order": "created_at"})

        assert [h["id"] for h in response.json()["data"]] == [second["id"], first["id"]]

    async def test_list_filters_by_date_range(self, authenticated_client: AsyncClient, new_hour):
        await new_hour(starting_time="2015-03-31T23:59:59")
        inside = await new_hour(starting_time="2015-04-30T23:00:00")

        response = await authenticated_client.get(
            "/api/v1/hours", params={"from_date": "01/04/2015", "to_date": "30/04/2015"}
        )

        assert [h["id"] for h in response.json()["data"]] == [inside["id"]]

    async def test_list_rejects_malformed_date(self, authenticated_client: AsyncClient):
        response = await authenticated_client.get("/api/v1/hours", params={"from_date": "2015-04-01"})

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_FILTER"

    async def test_empty_filter_values_are_ignored(
        self, authenticated_client: AsyncClient, new_hour
    ):
        await new_hour()

        response = await authenticated_client.get(
            "/api/v1/hours", params={"from_date": "", "project_id": ""}
        )

        assert response.status_code == 200
        assert len(response.json()["data"]) == 1

    async def test_search_whole_words(self, authenticated_client: AsyncClient, new_hour):
        asp = await new_hour(description="protocol ASP1000")
        await new_hour(description="protocol LVP1000")

        exact = await authenticated_client.get("/api/v1/hours", params={"q": "asp1000"})
        partial = await authenticated_client.get("/api/v1/hours", params={"q": "ASP"})

        assert [h["id"] for h in exact.json()["data"]] == [asp["id"]]
        assert partial.json()["data"] == []

    async def test_with_clients(
        self, authenticated_client: AsyncClient, new_hour, seed: dict[str, UUID]
    ):
        billed = await new_hour(project_id=str(seed["acme"]))
        await new_hour()

        response = await authenticated_client.get("/api/v1/hours", params={"with_clients": True})

        assert [h["id"] for h in response.json()["data"]] == [billed["id"]]

    async def test_open_hours_of_current_user(
        self, authenticated_client: AsyncClient, new_hour, seed: dict[str, UUID]
    ):
        mine = await new_hour(ending_time=None)
        await new_hour()
        await new_hour(ending_time=None, user_id=str(seed["other_user"]))

        response = await authenticated_client.get("/api/v1/hours/open")

        assert response.status_code == 200
        assert [h["id"] for h in response.json()["data"]] == [mine["id"]]


class TestUpdateHour:
    async def test_update_description_retags(self, authenticated_client: AsyncClient, new_hour):
        created = await new_hour(description="#tdd #api")

        response = await authenticated_client.patch(
            f"/api/v1/hours/{created['id']}", json={"description": "only #api"}
        )

        assert response.status_code == 200
        assert response.json()["data"]["tag_list"] == "api"

    async def test_explicit_null_reopens(self, authenticated_client: AsyncClient, new_hour):
        created = await new_hour()

        response = await authenticated_client.patch(
            f"/api/v1/hours/{created['id']}", json={"ending_time": None}
        )

        data = response.json()["data"]
        assert data["ending_time"] is None
        assert data["is_open"] is True

    async def test_omitted_fields_are_kept(self, authenticated_client: AsyncClient, new_hour):
        created = await new_hour(description="keep me")

        response = await authenticated_client.patch(
            f"/api/v1/hours/{created['id']}", json={"value": 3}
        )

        data = response.json()["data"]
        assert data["description"] == "keep me"
        assert data["ending_time"] == created["ending_time"]
        assert data["value"] == 3

    async def test_update_unknown_hour(self, authenticated_client: AsyncClient):
        response = await authenticated_client.patch(f"/api/v1/hours/{uuid4()}", json={"value": 1})

        assert response.status_code == 404


class TestDeleteHour:
    async def test_delete_hour(self, authenticated_client: AsyncClient, new_hour):
        created = await new_hour()

        response = await authenticated_client.delete(f"/api/v1/hours/{created['id']}")
        follow_up = await authenticated_client.get(f"/api/v1/hours/{created['id']}")

        assert response.status_code == 204
        assert follow_up.status_code == 404

    async def test_delete_unknown_hour(self, authenticated_client: AsyncClient):
        response = await authenticated_client.delete(f"/api/v1/hours/{uuid4()}")

        assert response.status_code == 404


class TestHourAudits:
    async def test_history_records_acting_user(
        self, authenticated_client: AsyncClient, new_hour, test_user: TokenUser
    ):
        created = await new_hour(description="first")
        await authenticated_client.patch(
            f"/api/v1/hours/{created['id']}", json={"description": "second"}
        )
        await authenticated_client.delete(f"/api/v1/hours/{created['id']}")

        response = await authenticated_client.get(f"/api/v1/hours/{created['id']}/audits")

        body = response.json()
        assert [a["action"] for a in body["data"]] == ["create", "update", "destroy"]
        assert [a["version"] for a in body["data"]] == [1, 2, 3]
        assert {a["user_id"] for a in body["data"]} == {str(test_user.id)}
        assert body["data"][1]["audited_changes"] == {
            "description": {"old": "first", "new": "second"}
        }
        assert body["meta"]["total"] == 3
