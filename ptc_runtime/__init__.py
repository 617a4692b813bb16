"""Programmatic tool calling runtime.

Run Python snippets that orchestrate host tools through generated async
bindings, under a deadline, with every invocation recorded.
"""

from .catalog import CapabilityCatalog, build_catalog, resolve_default_model
from .errors import (
    CapabilityInvocationError,
    CatalogFetchError,
    ExecutionTimeoutError,
    ModelResolutionError,
    PtcError,
    SnippetAbortedError,
    ToolCallLimitExceededError,
)
from .formatter import format_execution_result
from .runtime import CodeExecutor, create_executor
from .schemas import CallRecord, ExecutionContext, ExecutionResult, ExecutorOptions
from .toolset import PtcToolset, create_ptc_tools

__all__ = [
    "CallRecord",
    "CapabilityCatalog",
    "CapabilityInvocationError",
    "CatalogFetchError",
    "CodeExecutor",
    "ExecutionContext",
    "ExecutionResult",
    "ExecutionTimeoutError",
    "ExecutorOptions",
    "ModelResolutionError",
    "PtcError",
    "PtcToolset",
    "SnippetAbortedError",
    "ToolCallLimitExceededError",
    "build_catalog",
    "create_executor",
    "create_ptc_tools",
    "format_execution_result",
    "resolve_default_model",
]
