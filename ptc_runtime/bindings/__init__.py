"""Generated bindings exposing capabilities to executed code.

This package exports:

- ``CallRecorder``: the shared, append-only ledger of invocation attempts.
- ``CapabilityNamespace``: the ``tools``/``agents``/``skills`` objects.
- ``create_*_function`` / ``build_namespaces``: binding generation.
- ``sanitize_name`` / ``generate_function_signatures``: naming and listing.
"""

from .generators import (
    build_namespaces,
    create_agent_function,
    create_skill_function,
    create_tool_function,
)
from .namespace import CapabilityNamespace
from .recorder import CallRecorder
from .signatures import generate_function_signatures, map_type_to_display, sanitize_name

__all__ = [
    "CallRecorder",
    "CapabilityNamespace",
    "build_namespaces",
    "create_agent_function",
    "create_skill_function",
    "create_tool_function",
    "generate_function_signatures",
    "map_type_to_display",
    "sanitize_name",
]
