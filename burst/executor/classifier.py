"""
burst/executor/classifier.py

Purpose:
    Decides whether one execution counts as a success.

Rules:
    - Transport failure -> always Failure("transport error: ...").
    - Response -> Success iff status == expected, else
      Failure("unexpected status: got <code>, expected <expected>").
    - Single attempt. Nothing is retried.
"""

from __future__ import annotations

from .models import ExecutionOutcome, Failed, Responded, Verdict


def classify(outcome: ExecutionOutcome, expected: int) -> Verdict:
    if isinstance(outcome, Failed):
        return Verdict.failure(f"transport error: {outcome.error}")

    if isinstance(outcome, Responded):
        if outcome.status_code == expected:
            return Verdict.success()
        return Verdict.failure(
            f"unexpected status: got {outcome.status_code}, expected {expected}"
        )

    raise TypeError(f"Unknown execution outcome: {outcome!r}")
