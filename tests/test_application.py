"""Tests for signpost.app — the ASGI entry point, end to end via TestClient."""

import logging

import pytest

from signpost.app import App
from signpost.config import RouterConfig
from signpost.errors import ConfigurationError
from signpost.http.request import RequestContext
from signpost.http.response import ResponseWriter
from signpost.routing.router import Router
from signpost.testing import TestClient


def _echo(req: RequestContext, res: ResponseWriter) -> None:
    res.json(
        {
            "params": dict(req.params),
            "query": dict(req.query),
            "path": req.path,
            "original": req.original_url,
            "ip": req.ip,
            "body": req.text,
            "agent": req.headers.get("user-agent"),
        }
    )


def _boom(req: RequestContext, res: ResponseWriter) -> None:
    res.send("partial")
    1 / 0  # noqa: B018


def _program(router: Router) -> None:
    router.get("/users/:id", _echo)
    router.post("/users/:id", _echo)
    router.get("/search", _echo)
    router.get("/search/:term", _echo)
    router.get("/files/:name", _echo)
    router.delete("/boom", _boom)


@pytest.fixture
def app() -> App:
    return App(_program)


class TestRouting:
    @pytest.mark.asyncio
    async def test_param_route(self, app: App) -> None:
        async with TestClient(app) as client:
            response = await client.get("/users/42", headers={"User-Agent": "pytest"})
        assert response.status == 200
        assert response.header("content-type") == "application/json"
        data = response.json()
        assert data["params"] == {"id": "42"}
        assert data["agent"] == "pytest"

    @pytest.mark.asyncio
    async def test_query(self, app: App) -> None:
        async with TestClient(app) as client:
            response = await client.get("/search?q=cats&page=2")
        data = response.json()
        assert data["path"] == "/search"
        assert data["query"] == {"q": "cats", "page": "2"}
        assert data["original"] == "/search?q=cats&page=2"

    @pytest.mark.asyncio
    async def test_body_is_raw(self, app: App) -> None:
        async with TestClient(app) as client:
            response = await client.post("/users/1", json={"name": "ada"})
        assert response.json()["body"] == '{"name": "ada"}'

    @pytest.mark.asyncio
    async def test_ip_from_forwarded_for(self, app: App) -> None:
        async with TestClient(app) as client:
            response = await client.get(
                "/users/1", headers={"X-Forwarded-For": "1.2.3.4, 5.6.7.8"}
            )
        assert response.json()["ip"] == "1.2.3.4"

    @pytest.mark.asyncio
    async def test_encoded_question_mark_stays_in_path(self, app: App) -> None:
        async with TestClient(app) as client:
            response = await client.get("/search/what%3F?page=2")
        data = response.json()
        assert data["params"] == {"term": "what%3F"}
        assert data["query"] == {"page": "2"}

    @pytest.mark.asyncio
    async def test_encoded_slash_is_one_segment(self, app: App) -> None:
        async with TestClient(app) as client:
            response = await client.get("/files/a%2Fb")
        assert response.json()["params"] == {"name": "a%2Fb"}

    @pytest.mark.asyncio
    async def test_ip_falls_back_to_client(self, app: App) -> None:
        async with TestClient(app, client=("10.1.2.3", 5555)) as client:
            response = await client.get("/users/1")
        assert response.json()["ip"] == "10.1.2.3"

    @pytest.mark.asyncio
    async def test_no_match_is_empty_200(self, app: App) -> None:
        async with TestClient(app) as client:
            response = await client.get("/missing")
        assert response.status == 200
        assert response.body == b""
        assert response.headers == ()

    @pytest.mark.asyncio
    async def test_method_without_registration(self, app: App) -> None:
        async with TestClient(app) as client:
            response = await client.put("/users/1")
        assert response.status == 200
        assert response.body == b""


class TestConfig:
    @pytest.mark.asyncio
    async def test_base_path(self) -> None:
        app = App(_program, RouterConfig(base_path="/api"))
        async with TestClient(app) as client:
            response = await client.get("/api/users/9")
        assert response.json()["path"] == "/users/9"

    @pytest.mark.asyncio
    async def test_method_not_allowed(self) -> None:
        app = App(_program, RouterConfig(allowed_methods=frozenset({"get"})))
        async with TestClient(app) as client:
            response = await client.post("/users/1")
        assert response.status == 405
        assert response.header("content-type") == "application/json"
        assert response.header("allow") == "GET"
        assert response.json() == {"error": 405, "msg": "method not allowed"}


class TestErrors:
    @pytest.mark.asyncio
    async def test_handler_exception_becomes_500(
        self, app: App, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.ERROR, logger="signpost.server"):
            async with TestClient(app) as client:
                response = await client.delete("/boom")
        assert response.status == 500
        assert response.json() == {"error": 500, "msg": "internal server error"}
        assert "Unhandled error in route program" in caplog.text

    @pytest.mark.asyncio
    async def test_debug_includes_detail(self) -> None:
        app = App(_program, RouterConfig(debug=True))
        async with TestClient(app) as client:
            response = await client.delete("/boom")
        assert response.json() == {"error": 500, "msg": "division by zero"}


class TestApp:
    def test_routes_decorator(self) -> None:
        app = App()

        @app.routes
        def routes(router: Router) -> None:
            pass

        assert app.program is routes

    def test_second_program_rejected(self) -> None:
        app = App(_program)
        with pytest.raises(ConfigurationError):
            app.routes(_program)

    def test_missing_program(self) -> None:
        with pytest.raises(ConfigurationError):
            App().program

    @pytest.mark.asyncio
    async def test_lifespan(self) -> None:
        app = App(_program)
        incoming = iter([{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}])
        sent: list[dict] = []

        async def receive() -> dict:
            return next(incoming)

        async def send(message: dict) -> None:
            sent.append(message)

        await app({"type": "lifespan"}, receive, send)
        assert [m["type"] for m in sent] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]

    @pytest.mark.asyncio
    async def test_lifespan_fails_without_program(self) -> None:
        sent: list[dict] = []

        async def receive() -> dict:
            return {"type": "lifespan.startup"}

        async def send(message: dict) -> None:
            sent.append(message)

        await App()({"type": "lifespan"}, receive, send)
        assert sent[0]["type"] == "lifespan.startup.failed"

    @pytest.mark.asyncio
    async def test_non_http_scope_ignored(self) -> None:
        sent: list[dict] = []

        async def receive() -> dict:
            return {}

        async def send(message: dict) -> None:
            sent.append(message)

        await App(_program)({"type": "websocket"}, receive, send)
        assert sent == []
