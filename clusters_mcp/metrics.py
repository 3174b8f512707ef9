"""
In-process tool metrics (not suitable for multi-process aggregation).

Keys are bounded: tool counters only ever see registered tool names or
``UNKNOWN_TOOL_LABEL``, failure counters only see error class names, and request
durations keep the most recent ``MAX_RECENT_DURATIONS`` entries.
"""

from __future__ import annotations

from collections import Counter, OrderedDict
from dataclasses import dataclass
from threading import Lock
from typing import Dict, Optional

MAX_RECENT_DURATIONS = 100
UNKNOWN_TOOL_LABEL = "<unknown>"


@dataclass(slots=True)
class _Latency:
    count: int = 0
    total_ms: float = 0.0
    max_ms: float = 0.0

    def add(self, duration_ms: float) -> None:
        self.count += 1
        self.total_ms += duration_ms
        self.max_ms = max(self.max_ms, duration_ms)

    def summary(self) -> Dict[str, float]:
        return {
            "count": self.count,
            "avg_ms": round(self.total_ms / self.count, 3) if self.count else 0.0,
            "max_ms": round(self.max_ms, 3),
        }


class MetricsRecorder:
    def __init__(self) -> None:
        self._lock = Lock()
        self._requests = 0
        self._request_durations_ms: "OrderedDict[str, float]" = OrderedDict()
        self._tool_success: Counter[str] = Counter()
        self._tool_error: Counter[str] = Counter()
        self._failures: Counter[str] = Counter()
        self._tool_latency: Dict[str, _Latency] = {}

    def incr_request(self) -> None:
        with self._lock:
            self._requests += 1

    def record_duration(self, request_id: str, duration_ms: float) -> None:
        with self._lock:
            self._request_durations_ms[request_id] = duration_ms
            while len(self._request_durations_ms) > MAX_RECENT_DURATIONS:
                self._request_durations_ms.popitem(last=False)

    def record_tool(
        self,
        tool: str,
        *,
        success: bool,
        duration_ms: Optional[float] = None,
        failure: Optional[str] = None,
    ) -> None:
        """
        Count one tool outcome.

        ``tool`` must be a registered name or ``UNKNOWN_TOOL_LABEL``; ``failure``
        is the error class name for failed calls. Latency is only tracked for
        calls that reached the Clusters API.
        """
        with self._lock:
            if success:
                self._tool_success[tool] += 1
            else:
                self._tool_error[tool] += 1
            if failure:
                self._failures[failure] += 1
            if duration_ms is not None:
                self._tool_latency.setdefault(tool, _Latency()).add(duration_ms)

    def snapshot(self) -> Dict[str, object]:
        with self._lock:
            return {
                "requests": self._requests,
                "tool_success": dict(self._tool_success),
                "tool_error": dict(self._tool_error),
                "failures": dict(self._failures),
                "tool_latency_ms": {tool: latency.summary() for tool, latency in self._tool_latency.items()},
                "recent_request_durations_ms": dict(self._request_durations_ms),
            }

    def reset(self) -> None:
        with self._lock:
            self._requests = 0
            self._request_durations_ms.clear()
            self._tool_success.clear()
            self._tool_error.clear()
            self._failures.clear()
            self._tool_latency.clear()


default_metrics = MetricsRecorder()
