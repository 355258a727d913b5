"""
burst/reporting/run_log.py

Purpose:
    The append-only plain-text run log written when -l/--logs is given.

Format:
    [2026-10-19 14:03:07.412 INFO] Got Response (as expected): 200 OK
    [2026-10-19 14:03:07.415 ERROR] Sending request failed: ConnectError: ...

    One line per execution. INFO for expected-status responses, ERROR for
    unexpected statuses and transport failures. The file is truncated when
    the log is opened at the start of a run.
"""

from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import Optional, Union

from burst.executor.models import ExecutionOutcome, Failed, Responded, Verdict

log = logging.getLogger(__name__)

LINE_FORMAT = "[%(asctime)s.%(msecs)03d %(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# One logger for every run; a RunLog attaches its file handler while open
_file_logger = logging.getLogger("burst.runlog")
_file_logger.propagate = False
_file_logger.setLevel(logging.INFO)


def _one_line(text: str) -> str:
    return " ".join(text.splitlines())


class RunLog:
    """
    Writes execution outcomes to a file through the shared, non-propagating
    "burst.runlog" logger. One run log is open at a time. When disabled,
    every method is a no-op.
    """

    def __init__(self, path: Union[str, Path], enabled: bool = True, expected_status: int = 200):
        self.path = Path(path)
        self.enabled = enabled
        self.expected_status = expected_status
        self._logger = _file_logger
        self._handler: Optional[logging.FileHandler] = None

    @property
    def is_open(self) -> bool:
        return self._handler is not None

    def open(self) -> None:
        """Truncate the file and start writing. Open failures disable the log."""
        if not self.enabled or self._handler is not None:
            return
        try:
            handler = logging.FileHandler(self.path, mode="w", encoding="utf-8")
        except OSError as e:
            print(f"Failed to clear log file: {e}", file=sys.stderr)
            log.warning(f"Run log disabled, cannot open {self.path}: {e}")
            self.enabled = False
            return
        handler.setFormatter(logging.Formatter(LINE_FORMAT, datefmt=DATE_FORMAT))
        self._logger.addHandler(handler)
        self._handler = handler

    def close(self) -> None:
        if self._handler is None:
            return
        self._logger.removeHandler(self._handler)
        self._handler.close()
        self._handler = None

    def info(self, message: str) -> None:
        if self._handler is not None:
            self._logger.info(_one_line(message))

    def error(self, message: str) -> None:
        if self._handler is not None:
            self._logger.error(_one_line(message))

    def record(self, outcome: ExecutionOutcome, verdict: Verdict) -> None:
        """Signal handler: one line per finished execution."""
        if isinstance(outcome, Failed):
            self.error(f"Sending request failed: {outcome.error}")
        elif isinstance(outcome, Responded):
            if verdict.is_success:
                self.info(f"Got Response (as expected): {outcome.status_line}")
            else:
                text = outcome.body if outcome.body else "None"
                self.error(
                    f"Got Unexpected Code (Expected: {self.expected_status}): "
                    f"{outcome.status_line}, text: {text}"
                )

    def __enter__(self) -> "RunLog":
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
