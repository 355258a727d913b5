"""Structured error taxonomy for the burst engine."""
#
# PURPOSE:
# Error codes plus typed exceptions, so configuration problems can be told
# apart from engine faults by callers (the CLI maps ConfigError to exit 1).
#
# ERROR CODE FORMAT:
# - CONFIG_XXX: user configuration rejected before any request is sent
# - RUN_XXX: run lifecycle misuse
# - SYSTEM_XXX: internal faults
#
# Per-request failures (transport errors, unexpected status codes) are NOT
# exceptions here. They are outcomes, counted by the Aggregator.
#
# USAGE:
#   from burst.errors import ConfigError, ErrorCode
#
#   raise ConfigError(
#       ErrorCode.CONFIG_MALFORMED_HEADER,
#       "Invalid header format: 'X-Token'. Expected 'key: value'",
#       details={"header": "X-Token"}
#   )
#
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    # Config Errors
    CONFIG_INVALID = "CONFIG_001"
    CONFIG_INVALID_URL = "CONFIG_002"
    CONFIG_MALFORMED_HEADER = "CONFIG_003"
    CONFIG_BODY_NOT_ALLOWED = "CONFIG_004"

    # Run Errors
    RUN_INVALID_STATE = "RUN_001"

    # System Errors
    SYSTEM_INTERNAL_ERROR = "SYSTEM_001"


class BurstError(Exception):
    """
    Base exception class for burstforge with structured error information.

    Attributes:
        code: ErrorCode enum value (e.g., "CONFIG_002")
        message: Human-readable error message
        details: Optional dictionary with additional context
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.code = code
        self.message = message
        self.details = details or {}

        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for JSON serialization.

        Returns:
            Dictionary with code, message and details
        """
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class ConfigError(BurstError):
    """
    Raised when user configuration cannot produce a valid request.

    Fatal: raised before any request is issued.
    """

    def __init__(
        self,
        code: ErrorCode = ErrorCode.CONFIG_INVALID,
        message: str = "Invalid configuration",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(code, message, details)
