"""
burst/executor/models.py

Purpose:
    Data structures that flow through one burst run.

Semantics:
    - RequestConfig: raw user input, field-checked, immutable.
    - RequestTemplate: the validated executable request, shared read-only
      by every execution of the run.
    - Responded / Failed: the outcome of a single execution attempt.
    - Verdict: Success/Failure of one outcome against the expected status.
    - RunResult: final aggregate counts plus elapsed wall-clock time.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from burst.errors import ConfigError, ErrorCode


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    @classmethod
    def parse(cls, value: str) -> "HttpMethod":
        """Case-insensitive lookup ("get", "Get" and "GET" are the same)."""
        try:
            return cls(value.strip().upper())
        except ValueError:
            choices = ", ".join(m.cli_name for m in cls)
            raise ValueError(f"invalid method '{value}' (choose from {choices})") from None

    @property
    def cli_name(self) -> str:
        return _METHOD_CLI_NAMES[self]

    @property
    def allows_body(self) -> bool:
        return self in _BODY_METHODS

    def __str__(self) -> str:
        return self.value


_METHOD_CLI_NAMES = {
    HttpMethod.GET: "get",
    HttpMethod.POST: "post",
    HttpMethod.PUT: "put",
    HttpMethod.DELETE: "delete",
    HttpMethod.PATCH: "patch",
    HttpMethod.HEAD: "head",
    HttpMethod.OPTIONS: "options",
}

_BODY_METHODS = frozenset({HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH})


class RequestConfig(BaseModel):
    """
    What the user asked for. Header strings stay raw here; turning them into
    a mapping (and rejecting bad ones) is the template builder's job.
    """
    model_config = ConfigDict(frozen=True)

    address: str = Field(min_length=1)
    method: HttpMethod = HttpMethod.GET
    headers: Tuple[str, ...] = ()
    body: Optional[str] = None
    expected_status: int = Field(default=200, ge=100, le=599)
    count: int = Field(default=25, ge=1)
    delay_ms: int = Field(default=0, ge=0)

    @field_validator("address")
    @classmethod
    def validate_address(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("address cannot be empty")
        return v

    @field_validator("method", mode="before")
    @classmethod
    def validate_method(cls, v: Any) -> Any:
        if isinstance(v, str) and not isinstance(v, HttpMethod):
            return HttpMethod.parse(v)
        return v

    @classmethod
    def create(cls, **fields: Any) -> "RequestConfig":
        """Build a config, reporting field violations as ConfigError."""
        try:
            return cls(**fields)
        except ValidationError as e:
            problems = [
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
            raise ConfigError(
                ErrorCode.CONFIG_INVALID,
                "Invalid configuration: " + "; ".join(problems),
                details={"errors": problems},
            ) from e


@dataclass(frozen=True)
class RequestTemplate:
    """
    The executable request. Immutable; headers is a read-only mapping.
    """
    url: str
    method: HttpMethod
    headers: Mapping[str, str]
    body: Optional[bytes] = None


@dataclass(frozen=True)
class Responded:
    status_code: int
    reason: str = ""
    body: Optional[str] = None

    @property
    def status_line(self) -> str:
        return f"{self.status_code} {self.reason}".strip()


@dataclass(frozen=True)
class Failed:
    error: str


ExecutionOutcome = Union[Responded, Failed]


class VerdictKind(str, Enum):
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"


@dataclass(frozen=True)
class Verdict:
    kind: VerdictKind
    reason: Optional[str] = None

    @classmethod
    def success(cls) -> "Verdict":
        return cls(VerdictKind.SUCCESS)

    @classmethod
    def failure(cls, reason: str) -> "Verdict":
        return cls(VerdictKind.FAILURE, reason)

    @property
    def is_success(self) -> bool:
        return self.kind is VerdictKind.SUCCESS


class RunState(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


@dataclass(frozen=True)
class RunResult:
    successes: int
    failures: int
    elapsed_ms: float

    @property
    def total(self) -> int:
        return self.successes + self.failures
