"""Tests for signpost.http.response — ResponseWriter over a transport."""

import pytest

from signpost.errors import ResponseEnded
from signpost.http.response import OutboundResponse, ResponseWriter


@pytest.fixture
def transport() -> OutboundResponse:
    return OutboundResponse()


@pytest.fixture
def writer(transport: OutboundResponse) -> ResponseWriter:
    return ResponseWriter(transport)


class TestOutboundResponse:
    def test_defaults(self, transport: OutboundResponse) -> None:
        assert transport.status == 200
        assert transport.headers == ()
        assert transport.body == b""

    def test_header_overwrite_is_case_insensitive(self, transport: OutboundResponse) -> None:
        transport.set_header("X-Thing", "1")
        transport.set_header("x-thing", "2")
        assert transport.headers == (("x-thing", "2"),)
        assert transport.header("X-THING") == "2"

    def test_reset(self, transport: OutboundResponse) -> None:
        transport.set_status(418)
        transport.set_header("A", "1")
        transport.write(b"x")
        transport.reset()
        assert (transport.status, transport.headers, transport.body) == (200, (), b"")


class TestResponseWriter:
    def test_chaining_returns_self(self, writer: ResponseWriter) -> None:
        assert writer.set_status(201) is writer
        assert writer.set_header("A", "1") is writer
        assert writer.send("x") is writer
        assert writer.json({}) is writer

    def test_set_status(self, writer: ResponseWriter, transport: OutboundResponse) -> None:
        writer.set_status(404)
        assert transport.status == 404

    def test_json_sets_content_type_and_compact_body(
        self, writer: ResponseWriter, transport: OutboundResponse
    ) -> None:
        writer.json({"error": 405, "msg": "method not allowed"})
        assert transport.header("Content-Type") == "application/json"
        assert transport.body == b'{"error":405,"msg":"method not allowed"}'

    def test_send_leaves_content_type_alone(
        self, writer: ResponseWriter, transport: OutboundResponse
    ) -> None:
        writer.set_header("Content-Type", "text/plain").send("hi")
        assert transport.header("content-type") == "text/plain"
        assert transport.body == b"hi"

    def test_send_sets_no_content_type(
        self, writer: ResponseWriter, transport: OutboundResponse
    ) -> None:
        writer.send("hi")
        assert transport.header("content-type") is None

    def test_send_types(self, writer: ResponseWriter, transport: OutboundResponse) -> None:
        writer.send(b"\x00\x01").send("é").send(42)
        assert transport.body == b"\x00\x01" + "é".encode() + b"42"

    def test_writes_in_call_order(
        self, writer: ResponseWriter, transport: OutboundResponse
    ) -> None:
        writer.send("a").json([1]).send("b")
        assert transport.chunks == [b"a", b"[1]", b"b"]

    def test_end_raises_signal(self, writer: ResponseWriter) -> None:
        with pytest.raises(ResponseEnded):
            writer.end()

    def test_end_escapes_except_exception(self, writer: ResponseWriter) -> None:
        def handler() -> None:
            try:
                writer.end()
            except Exception:  # noqa: BLE001
                pytest.fail("ResponseEnded must not be an Exception")

        with pytest.raises(ResponseEnded):
            handler()

    def test_json_end_keyword(self, writer: ResponseWriter, transport: OutboundResponse) -> None:
        with pytest.raises(ResponseEnded):
            writer.json({"ok": True}, end=True)
        assert transport.json() == {"ok": True}

    def test_send_end_keyword(self, writer: ResponseWriter, transport: OutboundResponse) -> None:
        with pytest.raises(ResponseEnded):
            writer.send("done", end=True)
        assert transport.text == "done"
