from .models import (
    ExecutionOutcome,
    Failed,
    HttpMethod,
    RequestConfig,
    RequestTemplate,
    Responded,
    RunResult,
    RunState,
    Verdict,
    VerdictKind,
)
from .template import build
from .classifier import classify
from .aggregator import Aggregator
from .harness import Harness
from .http_harness import HttpHarness
from .dispatcher import Dispatcher

__all__ = [
    "ExecutionOutcome",
    "Failed",
    "HttpMethod",
    "RequestConfig",
    "RequestTemplate",
    "Responded",
    "RunResult",
    "RunState",
    "Verdict",
    "VerdictKind",
    "build",
    "classify",
    "Aggregator",
    "Harness",
    "HttpHarness",
    "Dispatcher",
]
