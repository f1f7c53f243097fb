"""Tests for the outbound workflow relay: envelope, endpoint, result variants."""

import json

import httpx
import pytest

from widget_relay.common.config import RelaySettings
from widget_relay.relay.client import (
    API_KEY_HEADER,
    RelayFailure,
    RelaySuccess,
    WorkflowRelay,
    build_endpoint,
    build_envelope,
)


def make_relay(handler, **overrides) -> WorkflowRelay:
    settings = RelaySettings(**overrides)
    return WorkflowRelay(settings, transport=httpx.MockTransport(handler))


class TestBuildEndpoint:
    def test_trims_one_trailing_slash(self):
        assert build_endpoint("https://api.example.com/run/", "wf-1") == "https://api.example.com/run/wf-1"

    def test_no_trailing_slash(self):
        assert build_endpoint("https://api.example.com/run", "wf-1") == "https://api.example.com/run/wf-1"

    def test_only_one_slash_trimmed(self):
        assert build_endpoint("https://api.example.com/run//", "wf") == "https://api.example.com/run//wf"


class TestEnvelope:
    def test_fixed_shape(self):
        assert build_envelope("hi", "s1") == {
            "output_type": "chat",
            "input_type": "chat",
            "input_value": "hi",
            "session_id": "s1",
        }


class TestRelay:
    async def test_success(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"response": "hello"})

        relay = make_relay(handler)
        result = await relay.relay("https://api.example.com/run/", "wf-1", "k", "hi", "s1")

        assert isinstance(result, RelaySuccess)
        assert result.success is True
        assert result.payload == {"response": "hello"}
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == "https://api.example.com/run/wf-1"
        assert request.headers[API_KEY_HEADER] == "k"
        assert json.loads(request.content) == build_envelope("hi", "s1")

    async def test_string_body(self):
        relay = make_relay(lambda request: httpx.Response(200, json="plain"))
        result = await relay.relay("https://x.test", "wf", "k", "hi", "s1")
        assert isinstance(result, RelaySuccess)
        assert result.payload == "plain"

    async def test_non_2xx(self):
        relay = make_relay(lambda request: httpx.Response(503, json={"detail": "down"}))
        result = await relay.relay("https://x.test", "wf", "k", "hi", "s1")
        assert isinstance(result, RelayFailure)
        assert result.success is False
        assert result.error == "HTTP 503: Service Unavailable"
        assert result.status_code == 503

    async def test_invalid_json(self):
        relay = make_relay(lambda request: httpx.Response(200, content=b"<html>"))
        result = await relay.relay("https://x.test", "wf", "k", "hi", "s1")
        assert isinstance(result, RelayFailure)
        assert result.error.startswith("Invalid JSON in response")

    async def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        result = await make_relay(handler).relay("https://x.test", "wf", "k", "hi", "s1")
        assert isinstance(result, RelayFailure)
        assert result.error == "connection refused"
        assert result.status_code is None

    async def test_timeout_is_a_failure(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        result = await make_relay(handler, relay_timeout=2.5).relay(
            "https://x.test", "wf", "k", "hi", "s1",
        )
        assert isinstance(result, RelayFailure)
        assert result.error == "Request timed out after 2.5s"

    async def test_error_does_not_leak_api_key(self):
        relay = make_relay(lambda request: httpx.Response(401, json={"key": "super-secret"}))
        result = await relay.relay("https://x.test", "wf", "super-secret", "hi", "s1")
        assert "super-secret" not in result.error


class TestConnectionCheck:
    async def test_success_message_and_default_session(self):
        seen = []

        def handler(request):
            seen.append(json.loads(request.content))
            return httpx.Response(200, json={"output": "pong"})

        result = await make_relay(handler).test_connection("https://x.test", "wf", "k")
        assert isinstance(result, RelaySuccess)
        assert result.message == "Connection successful"
        assert result.payload == {"output": "pong"}
        assert seen[0]["session_id"].startswith("test-")
        assert seen[0]["input_value"] == "Hello, this is a test message"

    async def test_custom_message(self):
        seen = []

        def handler(request):
            seen.append(json.loads(request.content))
            return httpx.Response(200, json={})

        await make_relay(handler).test_connection("https://x.test", "wf", "k", "ping")
        assert seen[0]["input_value"] == "ping"

    async def test_http_failure_message(self):
        result = await make_relay(lambda r: httpx.Response(404)).test_connection(
            "https://x.test", "wf", "k",
        )
        assert isinstance(result, RelayFailure)
        assert result.message == "Connection failed"
        assert result.error == "HTTP 404: Not Found"

    async def test_network_error_message(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        result = await make_relay(handler).test_connection("https://x.test", "wf", "k")
        assert isinstance(result, RelayFailure)
        assert result.message == "Connection error"
        assert result.error == "unreachable"
