# ============================================================================
# burst/base/config.py
# Application Configuration Management
# ============================================================================
#
# PURPOSE:
# Settings that shape how the engine talks to the network and how it logs,
# read from BURST_* environment variables. Per-run knobs (address, count,
# delay, ...) are NOT here; they come from the command line as a
# RequestConfig.
#
# KEY CONCEPTS:
# 1. Frozen dataclasses: settings cannot change after creation
# 2. Environment Variables: e.g. BURST_VERIFY_TLS=false
# 3. Singleton: one shared config, replaceable in tests via set_config()
#
# ============================================================================

from __future__ import annotations

import os
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from burst import __version__

logger = logging.getLogger(__name__)


def _env_bool(name: str, default: bool) -> bool:
    return os.getenv(name, "true" if default else "false").lower() == "true"


# ============================================================================
# HTTP Client Configuration
# ============================================================================

@dataclass(frozen=True)
class HttpConfig:
    # Sent on every request unless the user overrides it with -H
    user_agent: str = f"burstforge/{__version__}"

    # Verify TLS certificates (turn off for self-signed test targets)
    verify_tls: bool = True

    # Redirects are followed, up to max_redirects hops
    follow_redirects: bool = True
    max_redirects: int = 10


# ============================================================================
# Logging Configuration
# ============================================================================

@dataclass(frozen=True)
class LogConfig:
    # Verbosity of the application logger (DEBUG, INFO, WARNING, ERROR)
    level: str = "WARNING"

    # Format of application log records on the console
    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    # Where the per-request run log goes when -l/--logs is given
    run_log_file: str = "http_stress_test.log"


# ============================================================================
# Master Configuration Container
# ============================================================================

@dataclass(frozen=True)
class BurstConfig:
    http: HttpConfig = field(default_factory=HttpConfig)
    log: LogConfig = field(default_factory=LogConfig)

    # Seconds counted down on the console before the burst starts
    countdown_seconds: int = 3

    @classmethod
    def from_env(cls) -> "BurstConfig":
        http = HttpConfig(
            user_agent=os.getenv("BURST_USER_AGENT", f"burstforge/{__version__}"),
            verify_tls=_env_bool("BURST_VERIFY_TLS", True),
            follow_redirects=_env_bool("BURST_FOLLOW_REDIRECTS", True),
            max_redirects=int(os.getenv("BURST_MAX_REDIRECTS", "10")),
        )

        log = LogConfig(
            level=os.getenv("BURST_LOG_LEVEL", "WARNING"),
            run_log_file=os.getenv("BURST_RUN_LOG_FILE", "http_stress_test.log"),
        )

        return cls(
            http=http,
            log=log,
            countdown_seconds=int(os.getenv("BURST_COUNTDOWN_SECONDS", "3")),
        )


# ============================================================================
# Global Configuration Singleton
# ============================================================================

_config: Optional[BurstConfig] = None


def get_config() -> BurstConfig:
    """
    Get the global configuration instance.

    Created from the environment on first use, then reused.
    """
    global _config
    if _config is None:
        _config = BurstConfig.from_env()
    return _config


def set_config(config: Optional[BurstConfig]) -> None:
    """
    Replace the global configuration (mainly used for testing).

    Passing None makes the next get_config() re-read the environment.
    """
    global _config
    _config = config


def setup_logging(config: Optional[BurstConfig] = None) -> None:
    """
    Configure Python's logging system for the application logger.

    Console only. The run log file is handled separately by
    burst.reporting.run_log so that its line format stays exact.
    """
    cfg = config or get_config()

    handlers: List[logging.Handler] = [logging.StreamHandler()]

    logging.basicConfig(
        level=getattr(logging, cfg.log.level.upper(), logging.WARNING),
        format=cfg.log.format,
        handlers=handlers,
        force=True,
    )
