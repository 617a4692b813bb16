"""Binding names and human-readable capability listings."""

from __future__ import annotations

import re
from typing import List, Sequence

from ptc_runtime.schemas.catalog import AgentDescriptor, SkillDescriptor, ToolDescriptor

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_]")

_DISPLAY_TYPES = {
    "string": "string",
    "number": "number",
    "integer": "number",
    "boolean": "boolean",
    "array": "unknown[]",
    "object": "Record<string, unknown>",
}


def sanitize_name(name: str) -> str:
    """Replace every character outside ``[A-Za-z0-9_]`` with ``_``.

    Distinct names may collide after sanitization (``file/read`` and
    ``file:read`` both become ``file_read``); the last binding wins.
    """
    return _UNSAFE_CHARS.sub("_", name)


def map_type_to_display(type_name: str) -> str:
    return _DISPLAY_TYPES.get(type_name, "unknown")


def _comment(text: str) -> List[str]:
    return [f"// {line}" for line in (text.splitlines() or [""])]


def format_tool_signature(tool: ToolDescriptor) -> str:
    params = ", ".join(
        f"{name}{'' if spec.required else '?'}: {map_type_to_display(spec.type)}"
        for name, spec in tool.parameters.items()
    )
    shape = f"{{ {params} }}" if params else "{}"
    return f"async function {sanitize_name(tool.name)}(args: {shape}): Promise<string>"


def generate_function_signatures(
    tools: Sequence[ToolDescriptor],
    agents: Sequence[AgentDescriptor],
    skills: Sequence[SkillDescriptor],
) -> str:
    """Render the capability listing shown to callers.

    Tools are rendered as typed async signatures, agents are listed but
    marked as not directly callable, and the skills section only appears
    when at least one skill exists.
    """
    lines: List[str] = ["// Available Tools", ""]

    for tool in tools:
        lines.extend(_comment(tool.description))
        lines.append(format_tool_signature(tool))
        lines.append("")

    lines.append("// Available Agents (listing only - use 'task' tool for invocation)")
    lines.append("")
    for agent in agents:
        lines.extend(_comment(agent.description or "No description"))
        lines.append(f"// agents.{sanitize_name(agent.name)} - not directly callable")
        lines.append("")

    if skills:
        lines.append("// Available Skills (listing only - use 'skill' tool for invocation)")
        lines.append("")
        for skill in skills:
            lines.extend(_comment(skill.description))
            lines.append(f"// skills.{sanitize_name(skill.name)} - not directly callable")
            lines.append("")

    lines.append("// Snippets run as the body of an async function: use 'return' to hand back a result.")
    return "\n".join(lines)
