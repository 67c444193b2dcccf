"""Unit tests for exception handlers."""

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from api.exception_handlers import setup_exception_handlers
from core.exceptions import HourNotFoundError, HourValidationError, InvalidFilterError


def _create_test_app() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)
    return app


async def _get(app: FastAPI, path: str, **kwargs):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        return await c.get(path, **kwargs)


class TestExceptionHandlers:
    async def test_app_exception_returns_error_code_and_message(self) -> None:
        app = _create_test_app()

        @app.get("/raise-app")
        async def _() -> None:
            raise HourNotFoundError("some-id")

        response = await _get(app, "/raise-app")

        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "HOUR_NOT_FOUND"
        assert "some-id" in body["message"]
        assert body["details"]["hour_id"] == "some-id"

    async def test_hour_validation_error_lists_fields(self) -> None:
        app = _create_test_app()

        @app.get("/raise-validation")
        async def _() -> None:
            raise HourValidationError({"project": "can't be blank", "category": "does not exist"})

        response = await _get(app, "/raise-validation")

        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["details"] == [
            {"field": "category", "message": "does not exist"},
            {"field": "project", "message": "can't be blank"},
        ]

    async def test_invalid_filter_is_bad_request(self) -> None:
        app = _create_test_app()

        @app.get("/raise-filter")
        async def _() -> None:
            raise InvalidFilterError("from_date", "2015-04-01")

        response = await _get(app, "/raise-filter")

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_FILTER"

    async def test_http_exception_returns_standard_format(self) -> None:
        from starlette.exceptions import HTTPException

        app = _create_test_app()

        @app.get("/raise-http")
        async def _() -> None:
            raise HTTPException(status_code=403, detail="Forbidden")

        response = await _get(app, "/raise-http")

        assert response.status_code == 403
        body = response.json()
        assert body["error_code"] == "HTTP_ERROR"
        assert body["message"] == "Forbidden"

    async def test_request_validation_error_returns_field_details(self) -> None:
        app = _create_test_app()

        @app.get("/needs-int")
        async def _(page: int) -> dict:
            return {"page": page}

        response = await _get(app, "/needs-int", params={"page": "abc"})

        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["details"][0]["field"] == "query.page"

    async def test_database_error_is_reported_as_database_error(self) -> None:
        app = _create_test_app()

        @app.get("/raise-db")
        async def _() -> None:
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        response = await _get(app, "/raise-db")

        assert response.status_code == 500
        body = response.json()
        assert body["error_code"] == "DATABASE_ERROR"
        assert "request_id" in body["details"]

    async def test_unhandled_exception_returns_internal_error(self) -> None:
        app = _create_test_app()

        @app.get("/raise-unhandled")
        async def _() -> None:
            raise RuntimeError("boom")

        response = await _get(app, "/raise-unhandled")

        assert response.status_code == 500
        assert response.json()["error_code"] == "INTERNAL_ERROR"
