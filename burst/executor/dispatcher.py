"""
burst/executor/dispatcher.py

Purpose:
    Launches the burst: `count` concurrent executions of one template,
    optionally paced, then waits for every one of them.

Semantics:
    - Every execution is its own asyncio task; nothing caps how many are
      in flight at once.
    - delay_ms paces *launches*: the dispatcher sleeps between two launches,
      already-launched tasks keep running meanwhile.
    - run() is a barrier: it returns only after all `count` verdicts have
      been recorded, so successes + failures == count on return.
    - Per-execution problems never escape a task; they are verdicts.
"""

from __future__ import annotations
import asyncio
import logging
from typing import List

from burst.utils.observer import Signal
from .aggregator import Aggregator
from .classifier import classify
from .harness import Harness
from .http_harness import describe_error
from .models import Failed, RequestTemplate, RunResult, Verdict

log = logging.getLogger(__name__)


class Dispatcher:
    """
    Runs one burst at a time against a harness.

    Subscribers of `on_outcome` receive (outcome, verdict) for every
    finished execution, in completion order.
    """

    def __init__(self, harness: Harness, expected_status: int = 200):
        self.harness = harness
        self.expected_status = expected_status
        self.on_outcome = Signal()
        self.aggregator = Aggregator()

    async def _execute_one(self, template: RequestTemplate, index: int) -> None:
        try:
            outcome = await self.harness.execute(template)
        except Exception as e:
            # Harnesses should not raise; if one does, the execution still counts
            log.error(f"Harness raised on execution #{index}: {e}", exc_info=True)
            outcome = Failed(f"internal error: {describe_error(e)}")
        try:
            verdict = classify(outcome, self.expected_status)
        except Exception as e:
            log.error(f"Could not classify execution #{index} ({outcome!r}): {e}", exc_info=True)
            verdict = Verdict.failure(f"internal error: {describe_error(e)}")
        self.aggregator.record(verdict)
        if not verdict.is_success:
            log.debug(f"Execution #{index} failed: {verdict.reason}")
        self.on_outcome.emit(outcome, verdict)

    async def run(self, template: RequestTemplate, count: int, delay_ms: int = 0) -> RunResult:
        if count < 1:
            raise ValueError(f"count must be positive, got {count}")
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be non-negative, got {delay_ms}")

        # Fresh counters for every run
        self.aggregator = Aggregator()
        self.aggregator.start()

        log.info(f"Launching {count} {template.method} requests to {template.url} (delay {delay_ms} ms)")
        tasks: List[asyncio.Task] = []
        for index in range(count):
            if index and delay_ms:
                await asyncio.sleep(delay_ms / 1000)
            tasks.append(asyncio.create_task(self._execute_one(template, index), name=f"burst-{index}"))

        log.info("Waiting for requests to finish")
        await asyncio.gather(*tasks)

        result = self.aggregator.finish()
        log.info(
            f"Done ({result.elapsed_ms:.0f} ms)! Successes: {result.successes}, Fails: {result.failures}"
        )
        return result
