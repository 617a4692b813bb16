"""Caller-facing tool surface.

``PtcToolset`` wires the catalog builder, the executor and the formatter
together for one host. ``create_ptc_tools`` exposes it as two tool
definitions a host can register:

- ``ptc_execute``: run a snippet (or list capabilities with
  ``listAvailable``) and return the formatted report.
- ``ptc_list``: return the capability listing.

Catalog and model-resolution errors propagate to the host; everything that
happens while the snippet runs is reported inside the returned text.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional

from pydantic import Field

from ptc_runtime.bindings.signatures import generate_function_signatures
from ptc_runtime.catalog.builder import build_catalog, resolve_default_model
from ptc_runtime.core.config import PtcSettings
from ptc_runtime.core.config import settings as default_settings
from ptc_runtime.core.logging_config import setup_logging
from ptc_runtime.formatter import format_execution_result
from ptc_runtime.host.base import HostClientProtocol
from ptc_runtime.runtime.engine import create_executor
from ptc_runtime.schemas.base import BaseSchema
from ptc_runtime.schemas.execution import ExecutionContext

logger = logging.getLogger(__name__)

PTC_EXECUTE_DESCRIPTION = """Execute Python code that can call available tools, agents, and skills programmatically.

This tool lets you write async Python code that orchestrates multiple tool calls, agents, and skills in a single execution. All capability functions are async and return a string.

AVAILABLE NAMES:
- tools: all available tools as async functions, e.g. tools.read or tools["read"]
- agents: all available agents as async functions (listing only, calls raise)
- skills: all available skills as async functions (listing only, calls raise)
- log(*args): log messages (captured in output)
- context: session_id, message_id, provider_id, model_id, agent, directory

EXAMPLE USAGE:
```python
# Read a file and search for patterns
content = await tools.read({"filePath": "/path/to/file.py"})
log("File content length:", len(content))

# Run grep to find matches
matches = await tools.grep({"pattern": "TODO", "path": "."})

# Run independent calls concurrently
import asyncio
a, b = await asyncio.gather(tools.read({"filePath": "a.py"}), tools.read({"filePath": "b.py"}))

# Return a value (will be included in output)
return {"matches": len(matches.splitlines())}
```

The code runs as the body of an async function. Nothing is returned implicitly: use 'return' to provide a final result."""

PTC_LIST_DESCRIPTION = """List all available tools, agents, and skills that can be called via ptc_execute.
Returns function signatures showing the available functions and their parameters."""


class PtcExecuteArgs(BaseSchema):
    code: str = Field(..., description="Python code to execute. Runs as the body of an async function.")
    list_available: Optional[bool] = Field(
        None,
        description="If true, returns list of available tools/agents/skills instead of executing code",
    )


@dataclass(frozen=True)
class ToolCallContext:
    """Identifiers of the host session invoking a toolset tool."""

    session_id: str
    message_id: str
    agent: str


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    description: str
    execute: Callable[[Mapping[str, Any], ToolCallContext], Awaitable[str]]
    parameters: Dict[str, Any] = field(default_factory=dict)


class PtcToolset:
    """Resolve the model, build the catalog, execute, and format, per request."""

    def __init__(
        self,
        client: HostClientProtocol,
        *,
        directory: Optional[str] = None,
        settings: Optional[PtcSettings] = None,
    ) -> None:
        self._client = client
        self._directory = directory
        self._settings = settings or default_settings

    async def list_capabilities(self) -> str:
        provider_id, model_id = await resolve_default_model(self._client, self._directory)
        catalog = await build_catalog(self._client, provider_id, model_id, self._directory)
        return generate_function_signatures(catalog.tools, catalog.agents, catalog.skills)

    async def execute(
        self,
        code: str,
        *,
        session_id: str,
        message_id: str,
        agent: str,
        list_available: bool = False,
        timeout_ms: Optional[int] = None,
        max_tool_calls: Optional[int] = None,
    ) -> str:
        """Run ``code`` for a session and return the formatted report.

        Args:
            code: Snippet to run.
            session_id: Host session the call belongs to.
            message_id: Host message the call belongs to.
            agent: Name of the calling agent.
            list_available: Return the capability listing instead of executing.
            timeout_ms: Per-request override of the configured timeout.
            max_tool_calls: Per-request override of the configured call ceiling.

        Raises:
            CatalogFetchError: If the host config, tools or agents cannot be fetched.
            ModelResolutionError: If no default model is configured.
        """
        provider_id, model_id = await resolve_default_model(self._client, self._directory)
        catalog = await build_catalog(self._client, provider_id, model_id, self._directory)
        if list_available:
            return generate_function_signatures(catalog.tools, catalog.agents, catalog.skills)

        context = ExecutionContext(
            session_id=session_id,
            message_id=message_id,
            provider_id=provider_id,
            model_id=model_id,
            agent=agent,
            directory=self._directory,
            client=self._client,
        )
        options = self._settings.executor_options(timeout_ms=timeout_ms, max_tool_calls=max_tool_calls)
        executor = create_executor(self._client, catalog.tools, catalog.agents, catalog.skills, options)
        result = await executor.execute(code, context)
        return format_execution_result(result)


def create_ptc_tools(
    client: HostClientProtocol,
    *,
    directory: Optional[str] = None,
    settings: Optional[PtcSettings] = None,
    configure_logging: bool = False,
) -> Dict[str, ToolDefinition]:
    """Build the ``ptc_execute`` / ``ptc_list`` tool definitions for a host.

    Set ``configure_logging`` when the host has not configured logging itself.
    """
    if configure_logging:
        cfg = settings or default_settings
        setup_logging(
            log_level=cfg.log_level,
            log_format=cfg.log_format,
            enable_file=cfg.enable_file_logging,
            log_file_dir=cfg.log_file_dir,
        )
    toolset = PtcToolset(client, directory=directory, settings=settings)

    async def ptc_execute(args: Mapping[str, Any], ctx: ToolCallContext) -> str:
        parsed = PtcExecuteArgs.model_validate(dict(args))
        logger.debug("ptc_execute: session=%s list_available=%s", ctx.session_id, parsed.list_available)
        return await toolset.execute(
            parsed.code,
            session_id=ctx.session_id,
            message_id=ctx.message_id,
            agent=ctx.agent,
            list_available=bool(parsed.list_available),
        )

    async def ptc_list(args: Mapping[str, Any], ctx: ToolCallContext) -> str:
        return await toolset.list_capabilities()

    return {
        "ptc_execute": ToolDefinition(
            name="ptc_execute",
            description=PTC_EXECUTE_DESCRIPTION,
            parameters=PtcExecuteArgs.model_json_schema(by_alias=True),
            execute=ptc_execute,
        ),
        "ptc_list": ToolDefinition(
            name="ptc_list",
            description=PTC_LIST_DESCRIPTION,
            parameters={"type": "object", "properties": {}},
            execute=ptc_list,
        ),
    }
