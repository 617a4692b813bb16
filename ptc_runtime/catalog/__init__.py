"""Capability catalog: host tools, agents and skills as normalized descriptors."""

from .builder import (
    CapabilityCatalog,
    build_catalog,
    fetch_available_agents,
    fetch_available_skills,
    fetch_available_tools,
    normalize_tool,
    resolve_default_model,
)

__all__ = [
    "CapabilityCatalog",
    "build_catalog",
    "fetch_available_agents",
    "fetch_available_skills",
    "fetch_available_tools",
    "normalize_tool",
    "resolve_default_model",
]
