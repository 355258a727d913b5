"""
burst/executor/aggregator.py

Purpose:
    Per-run success/failure counters and the wall-clock timer.

Semantics:
    - record() bumps exactly one counter per call, under a lock, so
      concurrent writers (event-loop tasks or threads) lose no updates.
    - State moves NOT_STARTED -> IN_PROGRESS -> COMPLETED, never back.
    - snapshot() is only meaningful once the Dispatcher's barrier returned.
"""

from __future__ import annotations
import logging
import threading
import time
from typing import Optional, Tuple

from burst.errors import BurstError, ErrorCode
from .models import RunResult, RunState, Verdict

log = logging.getLogger(__name__)


class Aggregator:
    def __init__(self):
        self._lock = threading.Lock()
        self._successes = 0
        self._failures = 0
        self._state = RunState.NOT_STARTED
        self._started_at: Optional[float] = None
        self._result: Optional[RunResult] = None

    @property
    def state(self) -> RunState:
        return self._state

    def start(self) -> None:
        with self._lock:
            if self._state is not RunState.NOT_STARTED:
                raise BurstError(
                    ErrorCode.RUN_INVALID_STATE,
                    f"Cannot start a run that is {self._state.value}",
                )
            self._state = RunState.IN_PROGRESS
            self._started_at = time.perf_counter()

    def record(self, verdict: Verdict) -> None:
        with self._lock:
            if self._state is not RunState.IN_PROGRESS:
                raise BurstError(
                    ErrorCode.RUN_INVALID_STATE,
                    f"Cannot record a verdict while the run is {self._state.value}",
                )
            if verdict.is_success:
                self._successes += 1
            else:
                self._failures += 1

    def snapshot(self) -> Tuple[int, int]:
        with self._lock:
            return self._successes, self._failures

    def elapsed_ms(self) -> float:
        if self._result is not None:
            return self._result.elapsed_ms
        if self._started_at is None:
            return 0.0
        return (time.perf_counter() - self._started_at) * 1000

    def finish(self) -> RunResult:
        with self._lock:
            if self._state is not RunState.IN_PROGRESS:
                raise BurstError(
                    ErrorCode.RUN_INVALID_STATE,
                    f"Cannot finish a run that is {self._state.value}",
                )
            elapsed = (time.perf_counter() - self._started_at) * 1000
            self._state = RunState.COMPLETED
            self._result = RunResult(
                successes=self._successes,
                failures=self._failures,
                elapsed_ms=elapsed,
            )
        log.debug(f"Run completed: {self._result}")
        return self._result
