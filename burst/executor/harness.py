"""
burst/executor/harness.py

Purpose:
    The abstract interface for "the hands": whatever actually sends a
    template over the wire.
"""

from __future__ import annotations
from typing import Protocol, runtime_checkable

from .models import ExecutionOutcome, RequestTemplate


@runtime_checkable
class Harness(Protocol):
    """
    Interface for execution strategies.
    Implementations might include:
    - HttpHarness (uses httpx)
    - a scripted fake in tests
    """

    async def execute(self, template: RequestTemplate) -> ExecutionOutcome:
        """
        Issues the template's request once.
        Must handle its own exceptions and return Failed(...) instead of raising.
        """
        ...
