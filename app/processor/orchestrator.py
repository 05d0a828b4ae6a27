import threading
from collections.abc import Sequence
from dataclasses import dataclass

from app.config.settings import Settings
from app.documents.models import InputDocument
from app.extraction.models import StructuredRecord
from app.logging.logger import Log
from app.processor.exceptions import EmptySelectionError, RunInProgressError
from app.processor.pipeline import PipelineContext
from app.processor.processor import Processor, build_processor
from app.processor.status import ProcessingState, ProcessingStatus, StatusTracker


@dataclass(frozen=True)
class RunResult:
    """Outcome of one run. ``record`` is only set when the run succeeded."""

    status: ProcessingStatus
    record: StructuredRecord | None = None


class Orchestrator:
    """Run one batch through the pipeline and settle its final status.

    Stage failures are caught here and surface only through the status;
    input errors are raised before the status changes.
    """

    def __init__(self, processor: Processor, status: StatusTracker) -> None:
        self._processor = processor
        self._status = status
        self._run_lock = threading.Lock()

    @property
    def status(self) -> StatusTracker:
        return self._status

    def run(self, documents: Sequence[InputDocument]) -> RunResult:
        """Process a batch of documents as one logical document.

        Raises:
            EmptySelectionError: if ``documents`` is empty.
            RunInProgressError: if another run has not finished yet.
        """
        if not documents:
            raise EmptySelectionError("Please upload files first")
        if not self._run_lock.acquire(blocking=False):
            raise RunInProgressError("A run is already processing")
        try:
            context = PipelineContext(documents=tuple(documents))
            try:
                context = self._processor.process(context)
            except Exception as exc:
                Log.exception(f"Run failed: {exc}", documents=len(documents))
                return RunResult(status=self._status.snapshot())
            status = self._status.snapshot()
            if status.state is not ProcessingState.SUCCESS:
                return RunResult(status=status)
            return RunResult(status=status, record=context.record)
        finally:
            self._run_lock.release()

    def close(self) -> None:
        """Release the pipeline's resources; call once on shutdown."""
        self._processor.close()


def build_orchestrator(settings: Settings) -> Orchestrator:
    status = StatusTracker()
    return Orchestrator(build_processor(settings, status), status)
