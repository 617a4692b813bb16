"""DTO models for host payloads.

These Pydantic models centralize deserialization of the host's tool, agent,
config and tool-execution payloads so that the catalog builder and bindings
remain thin.

Guidelines:
- Unknown fields are tolerated (``extra="allow"``); hosts add fields freely.
- Keep aliasing explicit to match the host's JSON keys.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field

from ptc_runtime.schemas.base import BaseSchema

JSONValue = Any


class ToolDefinitionDTO(BaseSchema):
    """Tool definition as listed by the host."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="Tool identifier, unique within the host.", examples=["read", "file/read"])
    description: Optional[str] = Field(default=None, description="Human-readable description of the tool.")
    parameters: Optional[Dict[str, JSONValue]] = Field(
        default=None,
        description="JSON Schema of the tool input (object with properties/required).",
        examples=[{"type": "object", "properties": {"filePath": {"type": "string"}}, "required": ["filePath"]}],
    )


class AgentInfoDTO(BaseSchema):
    model_config = ConfigDict(extra="allow")

    name: str = Field(..., description="Agent name.", examples=["explore", "build"])
    description: Optional[str] = Field(default=None, description="What the agent is for.")
    mode: str = Field(default="all", description="Agent mode: subagent, primary or all.")


class HostConfigDTO(BaseSchema):
    model_config = ConfigDict(extra="allow")

    model: Optional[str] = Field(
        default=None,
        description="Default model as 'provider/model'.",
        examples=["anthropic/claude-sonnet-4"],
    )


class ProvidersPayloadDTO(BaseSchema):
    model_config = ConfigDict(extra="allow")

    providers: List[Dict[str, JSONValue]] = Field(default_factory=list, description="Configured providers.")
    default: Dict[str, JSONValue] = Field(
        default_factory=dict,
        description="Provider ID to default model ID table, in host order.",
    )


class ToolExecuteRequestDTO(BaseSchema):
    session_id: str = Field(..., alias="sessionID")
    message_id: str = Field(..., alias="messageID")
    provider_id: str = Field(..., alias="providerID")
    model_id: str = Field(..., alias="modelID")
    tool_id: str = Field(..., alias="toolID")
    args: Dict[str, JSONValue] = Field(default_factory=dict)
    agent: str


class ToolExecuteResponseDTO(BaseSchema):
    model_config = ConfigDict(extra="allow")

    output: Optional[JSONValue] = Field(default=None, description="Output of the tool; normally text.")
    title: Optional[str] = None
    metadata: Optional[Dict[str, JSONValue]] = None
