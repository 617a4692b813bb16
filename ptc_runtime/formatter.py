"""Plain-text rendering of an ``ExecutionResult``.

Sections appear in a fixed order and are omitted when empty:

- ``=== Logs ===``
- ``=== Tool Calls ===``
- ``=== Result ===`` (on success) or ``=== Error ===`` (on failure)

Rendering never mutates the result.
"""

from __future__ import annotations

import json
from typing import Any, List

from ptc_runtime.schemas.execution import CallRecord, ExecutionResult

NO_RETURN_VALUE = "(no return value)"
UNKNOWN_ERROR = "Unknown error"


def _json(value: Any, **kwargs: Any) -> str:
    return json.dumps(value, default=str, ensure_ascii=False, **kwargs)


def format_call_record(call: CallRecord) -> str:
    status = f"ERROR: {call.error}" if call.error is not None else "OK"
    return f"- {call.tool}({_json(call.args, separators=(',', ':'))}) [{call.duration_ms}ms] {status}"


def format_execution_result(result: ExecutionResult) -> str:
    output: List[str] = []

    if result.logs:
        output.append("=== Logs ===")
        output.extend(result.logs)
        output.append("")

    if result.tool_calls:
        output.append("=== Tool Calls ===")
        output.extend(format_call_record(call) for call in result.tool_calls)
        output.append("")

    if result.success:
        output.append("=== Result ===")
        output.append(_json(result.result, indent=2) if result.result is not None else NO_RETURN_VALUE)
    else:
        output.append("=== Error ===")
        output.append(result.error or UNKNOWN_ERROR)

    return "\n".join(output)
