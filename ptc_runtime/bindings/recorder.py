"""Shared call ledger for one execution request.

Every binding generated for an execution appends exactly one ``CallRecord``
per invocation attempt. Records are appended when the invocation settles,
so concurrent calls appear in settlement order, not initiation order.
"""

from __future__ import annotations

import threading
from typing import List, Optional

from ptc_runtime.errors import ToolCallLimitExceededError
from ptc_runtime.schemas.execution import CallRecord


class CallRecorder:
    """Append-only, lock-serialized sequence of ``CallRecord``.

    Also counts initiated invocations so bindings can enforce the
    per-execution call ceiling.
    """

    def __init__(self, *, max_calls: Optional[int] = None) -> None:
        self._records: List[CallRecord] = []
        self._lock = threading.Lock()
        self._initiated = 0
        self._max_calls = max_calls

    @property
    def max_calls(self) -> Optional[int]:
        return self._max_calls

    @property
    def initiated(self) -> int:
        return self._initiated

    def admit(self, capability: str) -> None:
        """Count one invocation attempt against the ceiling.

        Raises:
            ToolCallLimitExceededError: If this attempt exceeds ``max_calls``.
        """
        with self._lock:
            self._initiated += 1
            over = self._max_calls is not None and self._initiated > self._max_calls
        if over:
            raise ToolCallLimitExceededError(capability, self._max_calls or 0)

    def append(self, record: CallRecord) -> None:
        with self._lock:
            self._records.append(record)

    @property
    def records(self) -> List[CallRecord]:
        """Snapshot of the records appended so far."""
        with self._lock:
            return list(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
