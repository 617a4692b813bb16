from __future__ import annotations

import json as _json
from typing import Any, Dict, List

import httpx
import pytest

from ptc_runtime.core.config import PtcSettings
from ptc_runtime.host.base import HostClientProtocol
from ptc_runtime.host.http import HttpHostClient


def _mock_transport(seen: List[httpx.Request]) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        path = request.url.path
        if request.method == "GET" and path == "/config":
            return httpx.Response(200, json={"model": "anthropic/claude-sonnet-4"})
        if request.method == "GET" and path == "/config/providers":
            return httpx.Response(200, json={"providers": [{"id": "openai"}], "default": {"openai": "gpt-4o"}})
        if request.method == "GET" and path == "/experimental/tool":
            return httpx.Response(200, json=[{"id": "read", "description": "Read a file", "parameters": {}}])
        if request.method == "GET" and path == "/agent":
            return httpx.Response(200, json=[{"name": "explore", "mode": "subagent"}])
        if request.method == "POST" and path == "/experimental/tool/execute":
            body = _json.loads(request.content.decode("utf-8"))
            if body["toolID"] == "broken":
                return httpx.Response(500, json={"name": "UnknownError", "data": {"message": "tool crashed"}})
            if body["toolID"] == "garbled":
                return httpx.Response(200, content=b"<html>")
            if body["toolID"] == "silent":
                return httpx.Response(204)
            return httpx.Response(200, json={"output": f"ran {body['toolID']}", "title": "", "metadata": {}})
        return httpx.Response(404, text="not found")

    return httpx.MockTransport(handler)


def _client(seen: List[httpx.Request], **kwargs: Any) -> HttpHostClient:
    http = httpx.AsyncClient(transport=_mock_transport(seen))
    return HttpHostClient("http://mock/", client=http, **kwargs)


def _execute_kwargs(tool_id: str) -> Dict[str, Any]:
    return {
        "session_id": "ses_1",
        "message_id": "msg_1",
        "provider_id": "anthropic",
        "model_id": "claude-sonnet-4",
        "tool_id": tool_id,
        "args": {"filePath": "/a"},
        "agent": "build",
    }


def test_satisfies_protocol() -> None:
    assert isinstance(HttpHostClient("http://mock"), HostClientProtocol)


@pytest.mark.asyncio
async def test_catalog_endpoints() -> None:
    seen: List[httpx.Request] = []
    host = _client(seen)

    config = await host.get_config(directory="/work")
    providers = await host.list_providers()
    tools = await host.list_tools(provider="anthropic", model="claude-sonnet-4", directory="/work")
    agents = await host.list_agents()

    assert config.ok and config.data == {"model": "anthropic/claude-sonnet-4"}
    assert providers.data["default"] == {"openai": "gpt-4o"}
    assert tools.data[0]["id"] == "read"
    assert agents.data[0]["name"] == "explore"

    assert seen[0].url.params["directory"] == "/work"
    assert "directory" not in seen[1].url.params
    assert dict(seen[2].url.params) == {"provider": "anthropic", "model": "claude-sonnet-4", "directory": "/work"}
    await host.aclose()


@pytest.mark.asyncio
async def test_execute_tool_posts_host_field_names() -> None:
    seen: List[httpx.Request] = []
    host = _client(seen, auth_token="secret")

    resp = await host.execute_tool(directory="/work", **_execute_kwargs("read"))

    assert resp.ok
    assert resp.data["output"] == "ran read"
    (request,) = seen
    assert request.headers["Authorization"] == "Bearer secret"
    assert request.url.params["directory"] == "/work"
    assert _json.loads(request.content) == {
        "sessionID": "ses_1",
        "messageID": "msg_1",
        "providerID": "anthropic",
        "modelID": "claude-sonnet-4",
        "toolID": "read",
        "args": {"filePath": "/a"},
        "agent": "build",
    }


@pytest.mark.asyncio
async def test_no_auth_header_without_token() -> None:
    seen: List[httpx.Request] = []
    await _client(seen).list_agents()
    assert "Authorization" not in seen[0].headers


@pytest.mark.asyncio
async def test_http_error_is_returned_not_raised() -> None:
    seen: List[httpx.Request] = []
    resp = await _client(seen).execute_tool(**_execute_kwargs("broken"))

    assert not resp.ok
    assert resp.data is None
    assert resp.error["status"] == 500
    assert resp.error["body"]["data"]["message"] == "tool crashed"


@pytest.mark.asyncio
async def test_non_json_error_body_is_kept_as_text() -> None:
    http = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(502, text="bad gateway")))
    resp = await HttpHostClient("http://mock", client=http).get_config()
    assert resp.error == {"status": 502, "body": "bad gateway"}


@pytest.mark.asyncio
async def test_invalid_json_and_empty_bodies() -> None:
    seen: List[httpx.Request] = []
    host = _client(seen)

    garbled = await host.execute_tool(**_execute_kwargs("garbled"))
    silent = await host.execute_tool(**_execute_kwargs("silent"))

    assert garbled.error is not None and garbled.error["message"] == "invalid JSON response"
    assert silent.ok and silent.data is None


@pytest.mark.asyncio
async def test_transport_error_is_returned() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    resp = await HttpHostClient("http://mock", client=http).list_agents()

    assert resp.error == {"message": "connection refused"}


def test_from_settings_uses_host_configuration() -> None:
    settings = PtcSettings(
        _env_file=None,
        host_base_url="http://localhost:9999/",
        host_auth_token="tok",
        host_request_timeout_seconds=5,
    )
    client = HttpHostClient.from_settings(settings)

    assert client.base_url == "http://localhost:9999"
    assert client.auth_token == "tok"
