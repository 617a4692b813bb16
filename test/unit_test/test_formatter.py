from __future__ import annotations

import pytest

from ptc_runtime.formatter import NO_RETURN_VALUE, UNKNOWN_ERROR, format_call_record, format_execution_result
from ptc_runtime.schemas.execution import CallRecord, ExecutionResult


@pytest.mark.parametrize(
    "record,expected",
    [
        (CallRecord(tool="read", args={"filePath": "/a"}, result="x", duration_ms=3), '- read({"filePath":"/a"}) [3ms] OK'),
        (CallRecord(tool="grep", args={}, error="bad pattern", duration_ms=0), "- grep({}) [0ms] ERROR: bad pattern"),
        (
            CallRecord(tool="agent:explore", args={"prompt": "héllo"}, error="nope", duration_ms=1),
            '- agent:explore({"prompt":"héllo"}) [1ms] ERROR: nope',
        ),
    ],
)
def test_format_call_record(record: CallRecord, expected: str) -> None:
    assert format_call_record(record) == expected


def test_result_only() -> None:
    assert format_execution_result(ExecutionResult(success=True, result=2)) == "=== Result ===\n2"


def test_no_return_value_placeholder() -> None:
    assert format_execution_result(ExecutionResult(success=True)) == f"=== Result ===\n{NO_RETURN_VALUE}"


def test_falsy_results_are_rendered() -> None:
    assert format_execution_result(ExecutionResult(success=True, result=0)) == "=== Result ===\n0"
    assert format_execution_result(ExecutionResult(success=True, result="")) == '=== Result ===\n""'


def test_full_success_report() -> None:
    result = ExecutionResult(
        success=True,
        result={"matches": 3},
        logs=["reading", "done"],
        tool_calls=[CallRecord(tool="read", args={"filePath": "/a"}, result="...", duration_ms=12)],
    )

    assert format_execution_result(result) == "\n".join(
        [
            "=== Logs ===",
            "reading",
            "done",
            "",
            "=== Tool Calls ===",
            '- read({"filePath":"/a"}) [12ms] OK',
            "",
            "=== Result ===",
            "{",
            '  "matches": 3',
            "}",
        ]
    )


def test_failure_report_has_no_result_section() -> None:
    result = ExecutionResult(
        success=False,
        result="ignored",
        error="Execution timed out after 50ms",
        tool_calls=[CallRecord(tool="read", error="Cancelled", duration_ms=50)],
    )

    text = format_execution_result(result)

    assert "=== Result ===" not in text
    assert text.endswith("=== Error ===\nExecution timed out after 50ms")
    assert "=== Logs ===" not in text


def test_missing_error_message_placeholder() -> None:
    assert format_execution_result(ExecutionResult(success=False)) == f"=== Error ===\n{UNKNOWN_ERROR}"


def test_formatting_does_not_mutate_result() -> None:
    result = ExecutionResult(success=True, result={"a": [1]}, logs=["x"])
    before = result.model_dump()
    format_execution_result(result)
    assert result.model_dump() == before
