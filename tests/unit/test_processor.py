from unittest.mock import MagicMock

import pytest

from app.dispatch.base import BaseRecordDispatcher
from app.dispatch.exceptions import DispatchError
from app.documents.models import InputDocument
from app.documents.normalizer import DocumentNormalizer
from app.extraction.base import BaseFieldExtractor
from app.extraction.exceptions import ExtractionError
from app.extraction.models import Category, StructuredRecord
from app.processor.pipeline import PipelineContext
from app.processor.processor import Processor
from app.processor.status import ProcessingState, StatusTracker
from app.processor.steps import (
    EXTRACTING_PHASE,
    READING_PHASE,
    SAVING_PHASE,
    DispatchRecordStep,
    ExtractFieldsStep,
    MarkFailedStep,
    MarkProcessingStep,
    MarkSucceededStep,
    NormalizeDocumentsStep,
)

RECORD = StructuredRecord(payee="Acme Corp", category=Category.OTHERS, amount=120.0)


def _make_context() -> PipelineContext:
    return PipelineContext(
        documents=(InputDocument("invoice.png", b"png", "image/png"),),
    )


def _make_pipeline() -> tuple[Processor, StatusTracker, MagicMock, MagicMock, MagicMock]:
    status = StatusTracker()
    normalizer = MagicMock(spec=DocumentNormalizer)
    extractor = MagicMock(spec=BaseFieldExtractor)
    dispatcher = MagicMock(spec=BaseRecordDispatcher)

    normalizer.normalize.return_value = "ACME CORP\nTotal 120.00\n"
    extractor.extract.return_value = RECORD

    steps = [
        MarkProcessingStep(status),
        NormalizeDocumentsStep(normalizer, status),
        ExtractFieldsStep(extractor, status),
        DispatchRecordStep(dispatcher, status),
        MarkSucceededStep(status),
    ]
    processor = Processor(steps=steps, failed_step=MarkFailedStep(status))
    return processor, status, normalizer, extractor, dispatcher


class TestProcessorPipeline:
    def test_runs_all_steps_and_dispatches_record(self) -> None:
        processor, status, normalizer, extractor, dispatcher = _make_pipeline()
        context = _make_context()

        result = processor.process(context)

        normalizer.normalize.assert_called_once_with(context.documents)
        extractor.extract.assert_called_once_with("ACME CORP\nTotal 120.00\n")
        dispatcher.dispatch.assert_called_once_with(RECORD)
        assert result.record == RECORD
        assert status.snapshot().state is ProcessingState.SUCCESS

    def test_phases_follow_pipeline_order(self) -> None:
        processor, status, *_ = _make_pipeline()
        phases: list[str | None] = []
        status.subscribe(lambda snapshot: phases.append(snapshot.phase))

        processor.process(_make_context())

        assert phases == [None, READING_PHASE, EXTRACTING_PHASE, SAVING_PHASE, None]

    def test_extraction_failure_marks_error_and_skips_dispatch(self) -> None:
        processor, status, _normalizer, extractor, dispatcher = _make_pipeline()
        extractor.extract.side_effect = ExtractionError("Invalid JSON response")

        with pytest.raises(ExtractionError, match="Invalid JSON response"):
            processor.process(_make_context())

        dispatcher.dispatch.assert_not_called()
        snapshot = status.snapshot()
        assert snapshot.state is ProcessingState.ERROR
        assert snapshot.message == "Invalid JSON response"

    def test_dispatch_failure_marks_error(self) -> None:
        processor, status, _normalizer, _extractor, dispatcher = _make_pipeline()
        dispatcher.dispatch.side_effect = DispatchError("Server failed: Internal Server Error")

        with pytest.raises(DispatchError):
            processor.process(_make_context())

        assert status.snapshot().message == "Server failed: Internal Server Error"

    def test_normalize_failure_skips_extraction(self) -> None:
        processor, status, normalizer, extractor, dispatcher = _make_pipeline()
        normalizer.normalize.side_effect = RuntimeError("tesseract crashed")

        with pytest.raises(RuntimeError):
            processor.process(_make_context())

        extractor.extract.assert_not_called()
        dispatcher.dispatch.assert_not_called()
        assert status.snapshot().state is ProcessingState.ERROR

    def test_exception_without_message_uses_class_name(self) -> None:
        processor, status, normalizer, *_ = _make_pipeline()
        normalizer.normalize.side_effect = KeyError()

        with pytest.raises(KeyError):
            processor.process(_make_context())

        assert status.snapshot().message == "KeyError"

    def test_raising_listener_on_success_keeps_run_successful(self) -> None:
        processor, status, _normalizer, _extractor, dispatcher = _make_pipeline()

        def broken(snapshot: object) -> None:
            if getattr(snapshot, "state", None) is ProcessingState.SUCCESS:
                raise RuntimeError("display gone")

        status.subscribe(broken)
        result = processor.process(_make_context())

        dispatcher.dispatch.assert_called_once_with(RECORD)
        assert result.record == RECORD
        assert status.snapshot().state is ProcessingState.SUCCESS


class TestProcessorClose:
    def test_close_releases_dispatcher(self) -> None:
        processor, _status, _normalizer, _extractor, dispatcher = _make_pipeline()

        processor.close()

        dispatcher.close.assert_called_once_with()


class TestDispatchRecordStep:
    def test_requires_record(self) -> None:
        status = StatusTracker()
        status.start()
        step = DispatchRecordStep(MagicMock(spec=BaseRecordDispatcher), status)

        with pytest.raises(ValueError, match="record"):
            step.run(_make_context())
