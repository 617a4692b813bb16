"""Capability catalog models.

A capability is anything a snippet can invoke through a generated binding:
a host tool, an agent, or a skill. Descriptors are rebuilt from the host on
every execution request and never mutated afterwards.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from pydantic import ConfigDict, Field

from .base import BaseSchema


class CapabilityKind(str, Enum):
    TOOL = "tool"
    AGENT = "agent"
    SKILL = "skill"


class ParameterSpec(BaseSchema):
    """Simplified description of one tool parameter, derived from its JSON schema."""

    model_config = ConfigDict(frozen=True)

    type: str = Field(
        "string",
        description="JSON Schema type (string, number, integer, boolean, array, object); anything else is unknown.",
        examples=["string", "number"],
    )
    description: Optional[str] = Field(None, description="Human-friendly description of the parameter.")
    required: bool = Field(False, description="Whether the tool requires this parameter.")
    enum: Optional[List[str]] = Field(None, description="Allowed values when the parameter is an enumeration.")
    items: Optional["ParameterSpec"] = Field(None, description="Element spec for array parameters.")
    properties: Optional[Dict[str, "ParameterSpec"]] = Field(None, description="Member specs for object parameters.")


class ToolDescriptor(BaseSchema):
    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        description="Original tool identifier as known by the host. May contain characters such as '-' or '/'.",
        min_length=1,
        examples=["read", "file/read"],
    )
    description: str = Field("", description="Short description of what the tool does.")
    parameters: Dict[str, ParameterSpec] = Field(
        default_factory=dict,
        description="Ordered mapping of parameter name to its spec.",
    )


class AgentDescriptor(BaseSchema):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Agent name as registered on the host.", min_length=1)
    description: Optional[str] = Field(None, description="What the agent is for.")
    mode: str = Field(
        "subagent",
        description="Agent mode as reported by the host. Primary agents are never exposed to snippets.",
    )


class SkillDescriptor(BaseSchema):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Skill name.", min_length=1)
    description: str = Field("", description="What the skill provides.")


ParameterSpec.model_rebuild()
