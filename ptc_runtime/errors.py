"""Error types raised by the programmatic tool calling runtime.

Purpose:
- Give callers one base class (`PtcError`) to catch for anything raised by
  this package.
- Separate failures that abort a request before any code runs (catalog and
  model resolution) from failures that are captured into an
  `ExecutionResult` (capability invocations, timeouts).

Usage:
- `CatalogFetchError` / `ModelResolutionError` propagate to the caller.
- `CapabilityInvocationError` is raised *into* the executing snippet, which
  may catch it; the engine records it either way.
"""

from __future__ import annotations

from typing import Any, Optional


class PtcError(Exception):
    pass


class CatalogFetchError(PtcError):
    """Raised when tools, agents, skills or the host configuration cannot be fetched."""

    def __init__(self, message: str, *, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.details = details


class ModelResolutionError(PtcError):
    """Raised when neither the config nor the provider defaults yield a model."""


class CapabilityInvocationError(PtcError):
    def __init__(self, capability: str, message: str) -> None:
        super().__init__(message)
        self.capability = capability


class ToolCallLimitExceededError(CapabilityInvocationError):
    def __init__(self, capability: str, limit: int) -> None:
        super().__init__(capability, f"Tool call limit exceeded: at most {limit} calls are allowed per execution")
        self.limit = limit


class ExecutionTimeoutError(PtcError):
    def __init__(self, timeout_ms: int) -> None:
        super().__init__(f"Execution timed out after {timeout_ms}ms")
        self.timeout_ms = timeout_ms


class SnippetAbortedError(PtcError):
    """Raised in place of a ``BaseException`` (e.g. ``SystemExit``) escaping a snippet.

    Such exceptions would otherwise bypass the engine's error capture or stop
    the event loop.
    """

    def __init__(self, cause: BaseException) -> None:
        exit_without_code = isinstance(cause, SystemExit) and cause.code is None
        super().__init__(type(cause).__name__ if exit_without_code else normalize_error(cause))
        self.cause = cause


def normalize_error(err: BaseException) -> str:
    """Return the error's message, or its class name when the message is empty."""
    return str(err) or type(err).__name__
