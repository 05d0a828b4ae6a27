"""Processing status state machine: idle -> processing -> success | error.

``processing`` may carry a free-text phase label for presentation. A new
run re-arms ``success`` or ``error`` straight back to ``processing``.
"""

import threading
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import StrEnum

from app.logging.logger import Log
from app.processor.exceptions import StatusTransitionError


class ProcessingState(StrEnum):
    IDLE = "idle"
    PROCESSING = "processing"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class ProcessingStatus:
    """Immutable snapshot of the status cell."""

    state: ProcessingState = ProcessingState.IDLE
    phase: str | None = None
    message: str | None = None

    @property
    def is_processing(self) -> bool:
        return self.state is ProcessingState.PROCESSING


StatusListener = Callable[[ProcessingStatus], None]


class StatusTracker:
    """Single-writer status cell with snapshot and subscription access."""

    def __init__(self) -> None:
        self._status = ProcessingStatus()
        self._listeners: list[StatusListener] = []
        self._listeners_lock = threading.Lock()

    def snapshot(self) -> ProcessingStatus:
        return self._status

    def subscribe(self, listener: StatusListener) -> Callable[[], None]:
        """Register a listener called with every new snapshot.

        Returns:
            A callable that removes the listener.
        """
        with self._listeners_lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._listeners_lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def start(self) -> None:
        if self._status.is_processing:
            raise StatusTransitionError("A run is already processing")
        self._publish(ProcessingStatus(state=ProcessingState.PROCESSING))

    def set_phase(self, phase: str) -> None:
        self._require_processing("set a phase")
        self._publish(replace(self._status, phase=phase))

    def succeed(self) -> None:
        self._require_processing("succeed")
        self._publish(ProcessingStatus(state=ProcessingState.SUCCESS))

    def fail(self, message: str) -> None:
        self._require_processing("fail")
        self._publish(ProcessingStatus(state=ProcessingState.ERROR, message=message))

    def _require_processing(self, action: str) -> None:
        if not self._status.is_processing:
            raise StatusTransitionError(
                f"Cannot {action} while status is '{self._status.state}'"
            )

    def _publish(self, status: ProcessingStatus) -> None:
        """Store the snapshot, then notify listeners.

        A listener that raises is logged and skipped; the transition stands.
        """
        self._status = status
        with self._listeners_lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(status)
            except Exception:
                Log.exception("Status listener failed", state=status.state)
