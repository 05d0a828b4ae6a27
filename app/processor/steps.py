from app.dispatch.base import BaseRecordDispatcher
from app.documents.normalizer import DocumentNormalizer
from app.extraction.base import BaseFieldExtractor
from app.logging.logger import Log
from app.processor.pipeline import PipelineContext, PipelineStep
from app.processor.status import StatusTracker

READING_PHASE = "Reading documents"
EXTRACTING_PHASE = "Extracting data via AI"
SAVING_PHASE = "Saving to server"


class MarkProcessingStep(PipelineStep):
    def __init__(self, status: StatusTracker) -> None:
        self._status = status

    def run(self, context: PipelineContext) -> PipelineContext:
        self._status.start()
        Log.info(f"Run started with {len(context.documents)} document(s)")
        return context


class MarkSucceededStep(PipelineStep):
    def __init__(self, status: StatusTracker) -> None:
        self._status = status

    def run(self, context: PipelineContext) -> PipelineContext:
        self._status.succeed()
        Log.info("Run completed successfully")
        return context


class MarkFailedStep(PipelineStep):
    def __init__(self, status: StatusTracker) -> None:
        self._status = status

    def run(self, context: PipelineContext) -> PipelineContext:
        self._status.fail(context.error_message)
        Log.error(f"Run marked as failed: {context.error_message}")
        return context


class NormalizeDocumentsStep(PipelineStep):
    def __init__(self, normalizer: DocumentNormalizer, status: StatusTracker) -> None:
        self._normalizer = normalizer
        self._status = status

    def run(self, context: PipelineContext) -> PipelineContext:
        self._status.set_phase(READING_PHASE)
        context.extracted_text = self._normalizer.normalize(context.documents)
        Log.info(f"Extracted {len(context.extracted_text)} chars of text")
        return context


class ExtractFieldsStep(PipelineStep):
    def __init__(self, extractor: BaseFieldExtractor, status: StatusTracker) -> None:
        self._extractor = extractor
        self._status = status

    def run(self, context: PipelineContext) -> PipelineContext:
        self._status.set_phase(EXTRACTING_PHASE)
        context.record = self._extractor.extract(context.extracted_text)
        return context


class DispatchRecordStep(PipelineStep):
    def __init__(self, dispatcher: BaseRecordDispatcher, status: StatusTracker) -> None:
        self._dispatcher = dispatcher
        self._status = status

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.record is None:
            raise ValueError("PipelineContext.record must be set before dispatch")
        self._status.set_phase(SAVING_PHASE)
        self._dispatcher.dispatch(context.record)
        return context

    def close(self) -> None:
        self._dispatcher.close()
