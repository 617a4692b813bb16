"""Generated capability bindings.

Each function returned here is an ``async`` callable bound to one
``ExecutionContext`` and one ``CallRecorder``. Whatever happens during an
invocation (success, host error, placeholder refusal, call-limit refusal or
cancellation), exactly one ``CallRecord`` is appended once the invocation
settles.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Sequence, Tuple

from ptc_runtime.bindings.namespace import CapabilityNamespace
from ptc_runtime.bindings.recorder import CallRecorder
from ptc_runtime.bindings.signatures import sanitize_name
from ptc_runtime.errors import CapabilityInvocationError, PtcError, normalize_error
from ptc_runtime.host.base import HostClientProtocol
from ptc_runtime.host.dto import ToolExecuteResponseDTO
from ptc_runtime.schemas.catalog import AgentDescriptor, CapabilityKind, SkillDescriptor, ToolDescriptor
from ptc_runtime.schemas.execution import CallRecord, ExecutionContext

logger = logging.getLogger(__name__)

ToolFunction = Callable[..., Awaitable[str]]
AgentFunction = Callable[..., Awaitable[str]]
SkillFunction = Callable[[], Awaitable[str]]

AGENT_UNSUPPORTED_MESSAGE = (
    "Agent calls are not yet supported in direct execution mode. Use the 'task' tool directly for agent invocation."
)
SKILL_UNSUPPORTED_MESSAGE = "Skill calls are not yet supported in direct execution mode. Use the 'skill' tool directly."


def _elapsed_ms(started: float) -> int:
    return int(round((time.monotonic() - started) * 1000))


def _stringify_output(output: Any) -> str:
    if output is None:
        return ""
    if isinstance(output, str):
        return output
    return json.dumps(output, default=str)


def create_tool_function(
    client: HostClientProtocol,
    tool: ToolDescriptor,
    context: ExecutionContext,
    recorder: CallRecorder,
) -> ToolFunction:
    """Bind a host tool to an async function taking one argument mapping.

    Keyword arguments are accepted as well and merged over the mapping, so
    ``tools.read({"filePath": p})`` and ``tools.read(filePath=p)`` are the same
    call. The tool's textual output is returned; a host error is raised as
    ``CapabilityInvocationError``.
    """

    async def tool_function(args: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> str:
        started = time.monotonic()
        call_args: Dict[str, Any] = dict(args) if isinstance(args, Mapping) else {}
        call_args.update(kwargs)
        record = CallRecord(tool=tool.name, args=call_args)
        try:
            if args is not None and not isinstance(args, Mapping):
                raise CapabilityInvocationError(
                    tool.name, f"Tool '{tool.name}' expects a mapping of arguments, got {type(args).__name__}"
                )
            recorder.admit(tool.name)
            logger.debug("tool_function: executing tool=%s arg_keys=%s", tool.name, list(call_args))
            response = await client.execute_tool(
                session_id=context.session_id,
                message_id=context.message_id,
                provider_id=context.provider_id,
                model_id=context.model_id,
                tool_id=tool.name,
                args=call_args,
                agent=context.agent,
                directory=context.directory,
            )
            if response.error is not None:
                raise CapabilityInvocationError(
                    tool.name, f"Tool execute failed: {json.dumps(response.error, default=str)}"
                )
            data = response.data if isinstance(response.data, dict) else {}
            output = _stringify_output(ToolExecuteResponseDTO.model_validate(data).output)
            record.result = output
            return output
        except PtcError as e:
            record.error = normalize_error(e)
            raise
        except asyncio.CancelledError:
            record.error = "Cancelled"
            raise
        except Exception as e:
            record.error = normalize_error(e)
            raise CapabilityInvocationError(tool.name, record.error) from e
        finally:
            record.duration_ms = _elapsed_ms(started)
            recorder.append(record)
            logger.debug(
                "tool_function: settled tool=%s duration_ms=%d ok=%s", tool.name, record.duration_ms, record.error is None
            )

    tool_function.__name__ = sanitize_name(tool.name)
    tool_function.__doc__ = tool.description or None
    return tool_function


def create_agent_function(
    client: HostClientProtocol,
    agent: AgentDescriptor,
    context: ExecutionContext,
    recorder: CallRecorder,
) -> AgentFunction:
    """Bind an agent. Direct agent invocation is unsupported and always raises."""
    capability = f"agent:{agent.name}"

    async def agent_function(prompt: str, options: Optional[Mapping[str, Any]] = None) -> str:
        started = time.monotonic()
        record = CallRecord(tool=capability, args={"prompt": prompt})
        try:
            recorder.admit(capability)
            raise CapabilityInvocationError(capability, AGENT_UNSUPPORTED_MESSAGE)
        except PtcError as e:
            record.error = normalize_error(e)
            raise
        finally:
            record.duration_ms = _elapsed_ms(started)
            recorder.append(record)

    agent_function.__name__ = sanitize_name(agent.name)
    agent_function.__doc__ = agent.description
    return agent_function


def create_skill_function(
    client: HostClientProtocol,
    skill: SkillDescriptor,
    context: ExecutionContext,
    recorder: CallRecorder,
) -> SkillFunction:
    """Bind a skill. Skill invocation is unsupported and always raises."""
    capability = f"skill:{skill.name}"

    async def skill_function() -> str:
        started = time.monotonic()
        record = CallRecord(tool=capability, args={})
        try:
            recorder.admit(capability)
            raise CapabilityInvocationError(capability, SKILL_UNSUPPORTED_MESSAGE)
        except PtcError as e:
            record.error = normalize_error(e)
            raise
        finally:
            record.duration_ms = _elapsed_ms(started)
            recorder.append(record)

    skill_function.__name__ = sanitize_name(skill.name)
    skill_function.__doc__ = skill.description or None
    return skill_function


def build_namespaces(
    client: HostClientProtocol,
    tools: Sequence[ToolDescriptor],
    agents: Sequence[AgentDescriptor],
    skills: Sequence[SkillDescriptor],
    context: ExecutionContext,
    recorder: CallRecorder,
) -> Tuple[CapabilityNamespace, CapabilityNamespace, CapabilityNamespace]:
    """Generate the ``tools``/``agents``/``skills`` namespaces for one execution.

    Later descriptors whose sanitized names collide with earlier ones
    overwrite them.
    """
    tool_functions: Dict[str, ToolFunction] = {}
    for tool in tools:
        safe_name = sanitize_name(tool.name)
        if safe_name in tool_functions:
            logger.debug("build_namespaces: tool binding '%s' overwritten by '%s'", safe_name, tool.name)
        tool_functions[safe_name] = create_tool_function(client, tool, context, recorder)

    agent_functions: Dict[str, AgentFunction] = {}
    for agent in agents:
        agent_functions[sanitize_name(agent.name)] = create_agent_function(client, agent, context, recorder)

    skill_functions: Dict[str, SkillFunction] = {}
    for skill in skills:
        skill_functions[sanitize_name(skill.name)] = create_skill_function(client, skill, context, recorder)

    return (
        CapabilityNamespace(CapabilityKind.TOOL, tool_functions),
        CapabilityNamespace(CapabilityKind.AGENT, agent_functions),
        CapabilityNamespace(CapabilityKind.SKILL, skill_functions),
    )
