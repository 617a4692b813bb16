"""Host client protocol.

The host is the session/transport layer that owns the real tools. This
runtime only needs five operations from it; anything satisfying
`HostClientProtocol` can back an execution (the HTTP client in
`ptc_runtime.host.http`, an in-process adapter, or a test double).

Every operation returns a `HostResponse` envelope instead of raising on
transport-level failures, so callers decide how an error is surfaced.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class HostResponse:
    """Result envelope of one host call: exactly one of ``data``/``error`` is meaningful."""

    data: Any = None
    error: Any = None

    @property
    def ok(self) -> bool:
        return self.error is None


@runtime_checkable
class HostClientProtocol(Protocol):
    async def get_config(self, *, directory: Optional[str] = None) -> HostResponse: ...

    async def list_providers(self, *, directory: Optional[str] = None) -> HostResponse: ...

    async def list_tools(self, *, provider: str, model: str, directory: Optional[str] = None) -> HostResponse: ...

    async def list_agents(self) -> HostResponse: ...

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
    ) -> HostResponse: ...
