"""Fan-out of finished executions to the run log and the console."""
#
# PURPOSE:
# The Dispatcher emits Dispatcher.on_outcome once per finished execution with
# (outcome, verdict). RunLog.record and the CLI's failure notices subscribe to
# it; the engine itself never imports either of them.
#

import logging
from typing import Any, Callable, List

logger = logging.getLogger(__name__)


class Signal:
    """
    Outcome signal. Subscribers are called in the order they connected,
    from whichever task finished the execution.
    """
    def __init__(self):
        self._observers: List[Callable[..., Any]] = []

    def connect(self, callback: Callable[..., Any]):
        """Subscribe a listener; connecting the same one twice is a no-op."""
        if callback not in self._observers:
            self._observers.append(callback)

    def disconnect(self, callback: Callable[..., Any]):
        if callback in self._observers:
            self._observers.remove(callback)

    def emit(self, *args, **kwargs):
        """Deliver one execution's (outcome, verdict) to every listener."""
        for callback in list(self._observers):
            try:
                callback(*args, **kwargs)
            except Exception as e:
                # A failing listener must not cost the execution its count
                logger.error(f"[Signal] Error in outcome listener {callback!r}: {e}", exc_info=True)

    def __len__(self) -> int:
        return len(self._observers)
