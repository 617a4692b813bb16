from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from .base import HostClientProtocol, HostResponse
from .dto import ToolExecuteRequestDTO


class HttpHostClient(HostClientProtocol):
    """
    Thin async HTTP client for the host session API.

    Responsibilities:
    - get_config / list_providers (default model resolution)
    - list_tools / list_agents (capability catalog)
    - execute_tool (single tool execution on behalf of a session)

    Transport failures are never raised: they are returned as
    ``HostResponse(error=...)`` with the HTTP status and body when available.
    """

    def __init__(
        self,
        base_url: str,
        *,
        auth_token: Optional[str] = None,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.auth_token = auth_token
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        self._logger = logging.getLogger(__name__)

    @classmethod
    def from_settings(cls, settings: Any, *, client: Optional[httpx.AsyncClient] = None) -> "HttpHostClient":
        host = settings.host
        return cls(
            host.base_url,
            auth_token=host.auth_token,
            timeout=host.request_timeout_seconds,
            client=client,
        )

    def _headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {"Content-Type": "application/json"}
        if self.auth_token:
            headers["Authorization"] = f"Bearer {self.auth_token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> HostResponse:
        url = f"{self.base_url}{path}"
        query = {k: v for k, v in (params or {}).items() if v is not None}
        self._logger.debug("HttpHostClient: %s %s params=%s", method, url, query)
        try:
            r = await self._client.request(method, url, headers=self._headers(), params=query or None, json=json)
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            try:
                body: Any = e.response.json()
            except ValueError:
                body = e.response.text
            self._logger.debug("HttpHostClient: %s %s failed status=%s", method, url, e.response.status_code)
            return HostResponse(error={"status": e.response.status_code, "body": body})
        except httpx.HTTPError as e:
            self._logger.debug("HttpHostClient: %s %s transport error: %s", method, url, e)
            return HostResponse(error={"message": str(e) or type(e).__name__})
        if not r.content:
            return HostResponse(data=None)
        try:
            return HostResponse(data=r.json())
        except ValueError:
            return HostResponse(error={"status": r.status_code, "body": r.text, "message": "invalid JSON response"})

    async def get_config(self, *, directory: Optional[str] = None) -> HostResponse:
        return await self._request("GET", "/config", params={"directory": directory})

    async def list_providers(self, *, directory: Optional[str] = None) -> HostResponse:
        return await self._request("GET", "/config/providers", params={"directory": directory})

    async def list_tools(self, *, provider: str, model: str, directory: Optional[str] = None) -> HostResponse:
        return await self._request(
            "GET",
            "/experimental/tool",
            params={"provider": provider, "model": model, "directory": directory},
        )

    async def list_agents(self) -> HostResponse:
        return await self._request("GET", "/agent")

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
        payload = ToolExecuteRequestDTO(
            session_id=session_id,
            message_id=message_id,
            provider_id=provider_id,
            model_id=model_id,
            tool_id=tool_id,
            args=args,
            agent=agent,
        )
        return await self._request(
            "POST",
            "/experimental/tool/execute",
            params={"directory": directory},
            json=payload.model_dump(by_alias=True, mode="json"),
        )

    async def aclose(self) -> None:
        await self._client.aclose()
