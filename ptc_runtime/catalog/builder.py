"""Capability catalog construction.

Fetches tools, agents and skills from the host and normalizes them into
descriptors. The catalog is rebuilt for every execution request and is
all-or-nothing: any host failure raises ``CatalogFetchError`` and no partial
catalog is returned.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from ptc_runtime.errors import CatalogFetchError, ModelResolutionError
from ptc_runtime.host.base import HostClientProtocol
from ptc_runtime.host.dto import AgentInfoDTO, HostConfigDTO, ProvidersPayloadDTO, ToolDefinitionDTO
from ptc_runtime.schemas.catalog import AgentDescriptor, ParameterSpec, SkillDescriptor, ToolDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CapabilityCatalog:
    tools: List[ToolDescriptor] = field(default_factory=list)
    agents: List[AgentDescriptor] = field(default_factory=list)
    skills: List[SkillDescriptor] = field(default_factory=list)


def _describe(error: Any) -> str:
    try:
        return json.dumps(error, default=str)
    except (TypeError, ValueError):
        return str(error)


async def resolve_default_model(client: HostClientProtocol, directory: Optional[str] = None) -> Tuple[str, str]:
    """Resolve the ``(provider_id, model_id)`` pair used for tool execution.

    Reads ``config.model`` ("provider/model") first and falls back to the
    first entry of the host's provider-default table.

    Raises:
        CatalogFetchError: If the host config or providers cannot be fetched.
        ModelResolutionError: If neither source yields a usable pair.
    """
    config_response = await client.get_config(directory=directory)
    if config_response.error is not None:
        raise CatalogFetchError(
            f"Failed to fetch config: {_describe(config_response.error)}", details=config_response.error
        )
    try:
        config = HostConfigDTO.model_validate(config_response.data or {})
    except ValidationError as e:
        raise CatalogFetchError(f"Failed to fetch config: malformed config: {e}") from e
    if config.model:
        provider_id, _, model_id = config.model.partition("/")
        if provider_id and model_id:
            logger.debug("resolve_default_model: using config.model provider=%s model=%s", provider_id, model_id)
            return provider_id, model_id

    providers_response = await client.list_providers(directory=directory)
    if providers_response.error is not None:
        raise CatalogFetchError(
            f"Failed to fetch providers: {_describe(providers_response.error)}", details=providers_response.error
        )
    try:
        providers = ProvidersPayloadDTO.model_validate(providers_response.data or {})
    except ValidationError as e:
        raise CatalogFetchError(f"Failed to fetch providers: malformed providers: {e}") from e
    entries = list(providers.default.items())
    if entries:
        provider_id, model_id = entries[0]
        if provider_id and isinstance(model_id, str) and model_id:
            logger.debug("resolve_default_model: using provider default provider=%s model=%s", provider_id, model_id)
            return provider_id, model_id

    raise ModelResolutionError("No default model configured. Set the 'model' option in the host configuration.")


def _to_parameter_spec(raw: Any, *, required: bool = False) -> ParameterSpec:
    param: Dict[str, Any] = raw if isinstance(raw, dict) else {}
    typ = param.get("type")
    desc = param.get("description")
    enum = param.get("enum")
    items = param.get("items")
    props = param.get("properties")
    nested_required = set(param.get("required") or []) if isinstance(param.get("required"), list) else set()
    return ParameterSpec(
        type=typ if isinstance(typ, str) else "string",
        description=desc if isinstance(desc, str) else None,
        required=required,
        enum=[str(v) for v in enum] if isinstance(enum, list) else None,
        items=_to_parameter_spec(items) if isinstance(items, dict) else None,
        properties=(
            {str(k): _to_parameter_spec(v, required=str(k) in nested_required) for k, v in props.items()}
            if isinstance(props, dict)
            else None
        ),
    )


def normalize_tool(definition: ToolDefinitionDTO) -> ToolDescriptor:
    """Convert a host tool definition into a ``ToolDescriptor``.

    A property is required iff its name appears in the schema's ``required``
    list. A property without ``type`` defaults to ``"string"``. A schema
    without ``properties`` yields an empty parameter mapping.
    """
    schema: Dict[str, Any] = dict(definition.parameters or {})
    props = schema.get("properties")
    required = schema.get("required")
    required_names = set(required) if isinstance(required, list) else set()
    parameters: Dict[str, ParameterSpec] = {}
    if isinstance(props, dict):
        for name, raw in props.items():
            parameters[str(name)] = _to_parameter_spec(raw, required=str(name) in required_names)
    return ToolDescriptor(name=definition.id, description=definition.description or "", parameters=parameters)


async def fetch_available_tools(
    client: HostClientProtocol,
    provider_id: str,
    model_id: str,
    directory: Optional[str] = None,
) -> List[ToolDescriptor]:
    response = await client.list_tools(provider=provider_id, model=model_id, directory=directory)
    if response.error is not None:
        raise CatalogFetchError(f"Failed to fetch tools: {_describe(response.error)}", details=response.error)
    try:
        definitions = [ToolDefinitionDTO.model_validate(item) for item in (response.data or [])]
        tools = [normalize_tool(d) for d in definitions]
    except ValidationError as e:
        raise CatalogFetchError(f"Failed to fetch tools: malformed tool list: {e}") from e
    logger.debug("fetch_available_tools: %d tools for provider=%s model=%s", len(tools), provider_id, model_id)
    return tools


async def fetch_available_agents(client: HostClientProtocol) -> List[AgentDescriptor]:
    """List agents that snippets may reference, excluding primary agents."""
    response = await client.list_agents()
    if response.error is not None:
        raise CatalogFetchError(f"Failed to fetch agents: {_describe(response.error)}", details=response.error)
    try:
        infos = [AgentInfoDTO.model_validate(item) for item in (response.data or [])]
        agents = [
            AgentDescriptor(name=info.name, description=info.description, mode=info.mode)
            for info in infos
            if info.mode != "primary"
        ]
    except ValidationError as e:
        raise CatalogFetchError(f"Failed to fetch agents: malformed agent list: {e}") from e
    logger.debug("fetch_available_agents: %d agents (of %d)", len(agents), len(infos))
    return agents


async def fetch_available_skills(client: HostClientProtocol) -> List[SkillDescriptor]:
    # No skill registry exists on the host yet.
    return []


async def build_catalog(
    client: HostClientProtocol,
    provider_id: str,
    model_id: str,
    directory: Optional[str] = None,
) -> CapabilityCatalog:
    """Fetch all three capability kinds concurrently."""
    tools, agents, skills = await asyncio.gather(
        fetch_available_tools(client, provider_id, model_id, directory),
        fetch_available_agents(client),
        fetch_available_skills(client),
    )
    return CapabilityCatalog(tools=tools, agents=agents, skills=skills)
