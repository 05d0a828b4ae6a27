from app.config.settings import Settings
from app.dispatch.factory import RecordDispatcherFactory
from app.documents.normalizer import DocumentNormalizer
from app.extraction.factory import FieldExtractorFactory
from app.ocr.factory import OcrEngineFactory
from app.pdf.factory import PdfRendererFactory
from app.processor.pipeline import PipelineContext, PipelineStep
from app.processor.status import StatusTracker
from app.processor.steps import (
    DispatchRecordStep,
    ExtractFieldsStep,
    MarkFailedStep,
    MarkProcessingStep,
    MarkSucceededStep,
    NormalizeDocumentsStep,
)


class Processor:
    """Runs pipeline steps in order.

    Pipeline: mark processing -> normalize -> extract -> dispatch -> mark success.
    Any step failure records the message, runs the failed step, and re-raises.
    """

    def __init__(self, steps: list[PipelineStep], failed_step: PipelineStep) -> None:
        self._steps = steps
        self._failed_step = failed_step

    def process(self, context: PipelineContext) -> PipelineContext:
        try:
            for step in self._steps:
                context = step.run(context)
        except Exception as exc:
            context.error_message = str(exc) or type(exc).__name__
            self._failed_step.run(context)
            raise
        return context

    def close(self) -> None:
        for step in [*self._steps, self._failed_step]:
            step.close()


def build_processor(settings: Settings, status: StatusTracker) -> Processor:
    """Build a Processor with all adapters configured from settings."""
    normalizer = DocumentNormalizer(
        ocr_engine=OcrEngineFactory.create(settings),
        pdf_renderer=PdfRendererFactory.create(settings),
        render_scale=settings.pdf_render_scale,
    )
    extractor = FieldExtractorFactory.create(settings)
    dispatcher = RecordDispatcherFactory.create(settings)
    steps: list[PipelineStep] = [
        MarkProcessingStep(status),
        NormalizeDocumentsStep(normalizer, status),
        ExtractFieldsStep(extractor, status),
        DispatchRecordStep(dispatcher, status),
        MarkSucceededStep(status),
    ]
    return Processor(steps=steps, failed_step=MarkFailedStep(status))
