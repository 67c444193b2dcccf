"""Integration tests for Clients, Projects and Categories API."""

from uuid import UUID, uuid4

from httpx import AsyncClient


class TestClientsAPI:
    async def test_create_and_list_clients(self, authenticated_client: AsyncClient):
        response = await authenticated_client.post("/api/v1/clients", json={"name": "Beta Ltd"})

        assert response.status_code == 201
        names = [c["name"] for c in (await authenticated_client.get("/api/v1/clients")).json()["data"]]
        assert names == ["Acme Corp", "Beta Ltd"]

    async def test_duplicate_client(self, authenticated_client: AsyncClient):
        response = await authenticated_client.post("/api/v1/clients", json={"name": "acme corp"})

        assert response.status_code == 409
        assert response.json()["error_code"] == "DUPLICATE_NAME"

    async def test_blank_name_is_rejected(self, authenticated_client: AsyncClient):
        response = await authenticated_client.post("/api/v1/clients", json={"name": ""})

        assert response.status_code == 422


class TestProjectsAPI:
    async def test_create_project_for_client(
        self, authenticated_client: AsyncClient, seed: dict[str, UUID]
    ):
        response = await authenticated_client.post(
            "/api/v1/projects", json={"name": "Acme app", "client_id": str(seed["client"])}
        )

        assert response.status_code == 201
        assert response.json()["data"]["client_id"] == str(seed["client"])

    async def test_create_project_unknown_client(self, authenticated_client: AsyncClient):
        response = await authenticated_client.post(
            "/api/v1/projects", json={"name": "Orphan", "client_id": str(uuid4())}
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "CLIENT_NOT_FOUND"

    async def test_detach_project_from_client(
        self, authenticated_client: AsyncClient, seed: dict[str, UUID]
    ):
        response = await authenticated_client.patch(
            f"/api/v1/projects/{seed['acme']}", json={"client_id": None}
        )

        assert response.status_code == 200
        assert response.json()["data"]["client_id"] is None

    async def test_detached_project_leaves_with_clients(
        self, authenticated_client: AsyncClient, seed: dict[str, UUID]
    ):
        await authenticated_client.post(
            "/api/v1/hours",
            json={
                "project_id": str(seed["acme"]),
                "category_id": str(seed["development"]),
                "starting_time": "2015-04-20T09:00:00",
            },
        )
        await authenticated_client.patch(f"/api/v1/projects/{seed['acme']}", json={"client_id": None})

        response = await authenticated_client.get("/api/v1/hours", params={"with_clients": True})

        assert response.json()["data"] == []

    async def test_update_unknown_project(self, authenticated_client: AsyncClient):
        response = await authenticated_client.patch(
            f"/api/v1/projects/{uuid4()}", json={"client_id": None}
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "PROJECT_NOT_FOUND"


class TestCategoriesAPI:
    async def test_list_categories(self, authenticated_client: AsyncClient):
        response = await authenticated_client.get("/api/v1/categories")

        assert [c["name"] for c in response.json()["data"]] == ["Development", "Meeting"]

    async def test_create_category(self, authenticated_client: AsyncClient):
        response = await authenticated_client.post("/api/v1/categories", json={"name": "Support"})

        assert response.status_code == 201
        assert response.json()["data"]["name"] == "Support"
