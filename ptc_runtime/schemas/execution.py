"""Execution data models.

- ``ExecutionContext`` is the immutable value threaded through one code
  execution request and shared by every generated binding.
- ``CallRecord`` is the bookkeeping entry for one capability invocation.
- ``ExecutionResult`` is the terminal value of an execution request.
- ``ExecutorOptions`` holds the per-request execution policy.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import BaseSchema


@dataclass(frozen=True)
class ExecutionContext:
    """Read-only identifiers for the session that submitted the code.

    Attributes
    ----------
    session_id / message_id:
        Host session and message the execution belongs to.
    provider_id / model_id:
        Resolved default model, forwarded to every host tool execution.
    agent:
        Name of the active (calling) agent.
    directory:
        Optional working directory forwarded to the host.
    client:
        Handle to the host client. Exposed to snippets for introspection only.
    """

    session_id: str
    message_id: str
    provider_id: str
    model_id: str
    agent: str
    directory: Optional[str] = None
    client: Any = None


class CallRecord(BaseSchema):
    tool: str = Field(
        ...,
        description="Original capability name; agents and skills are prefixed with 'agent:' / 'skill:'.",
        examples=["read", "agent:explore"],
    )
    args: Dict[str, Any] = Field(default_factory=dict, description="Arguments the capability was invoked with.")
    result: Optional[str] = Field(None, description="Textual output when the invocation succeeded.")
    error: Optional[str] = Field(None, description="Error message when the invocation failed.")
    duration_ms: int = Field(0, ge=0, description="Wall-clock duration of the invocation in milliseconds.")


class ExecutionResult(BaseSchema):
    success: bool = Field(..., description="Whether the snippet returned normally before the deadline.")
    result: Any = Field(None, description="Value returned by the snippet (meaningful only on success).")
    error: Optional[str] = Field(None, description="Normalized error message (meaningful only on failure).")
    logs: List[str] = Field(default_factory=list, description="Lines passed to log(), in call order.")
    tool_calls: List[CallRecord] = Field(
        default_factory=list,
        description="One record per capability invocation, in settlement order.",
    )


class ExecutorOptions(BaseSchema):
    timeout_ms: int = Field(300000, ge=1, description="Deadline for one execution in milliseconds.")
    max_tool_calls: int = Field(100, ge=0, description="Maximum capability invocations allowed per execution.")
    cancel_on_timeout: bool = Field(
        False,
        description="Cancel the snippet task when the deadline expires instead of leaving it running.",
    )
