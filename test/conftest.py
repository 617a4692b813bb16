from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional

import httpx
import pytest

from ptc_runtime.host.base import HostClientProtocol, HostResponse
from ptc_runtime.schemas.execution import ExecutionContext

ExecuteHandler = Callable[[str, Dict[str, Any]], Awaitable[HostResponse]]


@dataclass
class FakeHostClient(HostClientProtocol):
    """In-memory host: serves a fixed catalog and answers tool executions via ``handler``."""

    tools: List[Dict[str, Any]] = field(default_factory=list)
    agents: List[Dict[str, Any]] = field(default_factory=list)
    config: Dict[str, Any] = field(default_factory=lambda: {"model": "anthropic/claude-sonnet-4"})
    providers: Dict[str, Any] = field(default_factory=lambda: {"providers": [], "default": {}})
    handler: Optional[ExecuteHandler] = None
    errors: Dict[str, Any] = field(default_factory=dict)
    executions: List[Dict[str, Any]] = field(default_factory=list)
    list_tools_calls: List[Dict[str, Any]] = field(default_factory=list)

    async def get_config(self, *, directory: Optional[str] = None) -> HostResponse:
        if "config" in self.errors:
            return HostResponse(error=self.errors["config"])
        return HostResponse(data=self.config)

    async def list_providers(self, *, directory: Optional[str] = None) -> HostResponse:
        if "providers" in self.errors:
            return HostResponse(error=self.errors["providers"])
        return HostResponse(data=self.providers)

    async def list_tools(self, *, provider: str, model: str, directory: Optional[str] = None) -> HostResponse:
        self.list_tools_calls.append({"provider": provider, "model": model, "directory": directory})
        if "tools" in self.errors:
            return HostResponse(error=self.errors["tools"])
        return HostResponse(data=self.tools)

    async def list_agents(self) -> HostResponse:
        if "agents" in self.errors:
            return HostResponse(error=self.errors["agents"])
        return HostResponse(data=self.agents)

    async def execute_tool(
        self,
        *,
        session_id: str,
        message_id: str,
        provider_id: str,
        model_id: str,
        tool_id: str,
        args: Dict[str, Any],
        agent: str,
        directory: Optional[str] = None,
    ) -> HostResponse:
        self.executions.append(
            {
                "session_id": session_id,
                "message_id": message_id,
                "provider_id": provider_id,
                "model_id": model_id,
                "tool_id": tool_id,
                "args": dict(args),
                "agent": agent,
                "directory": directory,
            }
        )
        if self.handler is not None:
            return await self.handler(tool_id, args)
        return HostResponse(data={"output": f"{tool_id} ok"})


def echo_handler(delays: Optional[Dict[str, float]] = None) -> ExecuteHandler:
    """Handler returning ``<tool>:<sorted args>``, optionally sleeping per tool first."""

    async def handler(tool_id: str, args: Dict[str, Any]) -> HostResponse:
        if delays and tool_id in delays:
            await asyncio.sleep(delays[tool_id])
        rendered = ",".join(f"{k}={args[k]}" for k in sorted(args))
        return HostResponse(data={"output": f"{tool_id}:{rendered}"})

    return handler


def tool_def(name: str, properties: Optional[Dict[str, Any]] = None, required: Iterable[str] = ()) -> Dict[str, Any]:
    params: Dict[str, Any] = {"type": "object"}
    if properties is not None:
        params["properties"] = properties
        params["required"] = list(required)
    return {"id": name, "description": f"The {name} tool", "parameters": params}


@pytest.fixture
def fake_host() -> FakeHostClient:
    return FakeHostClient()


@pytest.fixture
def make_context() -> Callable[..., ExecutionContext]:
    def _make(client: Any = None, **overrides: Any) -> ExecutionContext:
        values: Dict[str, Any] = {
            "session_id": "ses_1",
            "message_id": "msg_1",
            "provider_id": "anthropic",
            "model_id": "claude-sonnet-4",
            "agent": "build",
            "directory": "/work",
            "client": client,
        }
        values.update(overrides)
        return ExecutionContext(**values)

    return _make


@pytest.fixture(autouse=True)
def _global_offline_http_guard(monkeypatch: pytest.MonkeyPatch):
    allowed_prefixes: Iterable[str] = (
        "http://mock",
        "https://mock",
        "http://localhost",
        "http://127.0.0.1",
    )

    orig_async = httpx._client.AsyncClient.request

    def _is_allowed(url_str: str) -> bool:
        return any(url_str.startswith(p) for p in allowed_prefixes)

    async def offline_async(self, method, url, *args, **kwargs):
        url_str = str(url)
        if _is_allowed(url_str):
            return await orig_async(self, method, url, *args, **kwargs)
        raise RuntimeError(f"External HTTP blocked by global offline guard (async): {url_str}")

    monkeypatch.setattr(httpx._client.AsyncClient, "request", offline_async, raising=True)


@pytest.fixture
def host_factory() -> Callable[..., FakeHostClient]:
    return FakeHostClient


@pytest.fixture
def make_tool_def() -> Callable[..., Dict[str, Any]]:
    return tool_def


@pytest.fixture
def make_echo_handler() -> Callable[..., ExecuteHandler]:
    return echo_handler
