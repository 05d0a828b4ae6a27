import json
from collections.abc import Callable
from unittest.mock import MagicMock

import httpx
import pytest

from app.dispatch.http_dispatcher import HttpRecordDispatcher
from app.documents.normalizer import DocumentNormalizer
from app.extraction.contract import ExtractionContract, SelfEntity
from app.extraction.extractor import FieldExtractor
from app.ocr.base import BaseOcrEngine
from app.pdf.pymupdf_adapter import PyMuPdfAdapter
from app.processor.orchestrator import Orchestrator
from app.processor.processor import Processor
from app.processor.status import StatusTracker
from app.processor.steps import (
    DispatchRecordStep,
    ExtractFieldsStep,
    MarkFailedStep,
    MarkProcessingStep,
    MarkSucceededStep,
    NormalizeDocumentsStep,
)

ENDPOINT = "http://records.test/rfp/save"

MODEL_RESPONSE = {
    "payee": "Acme Corp",
    "tin": "123-456-789-000",
    "address": "123 Rizal St, Pasig",
    "purpose": "IT consulting services",
    "category": "Manpower / Consultant",
    "currency": "P",
    "amount": "1,500.00",
    "amountinwords": "One thousand five hundred pesos",
    "accountnum": None,
    "mobilenum": None,
    "sib": "12345",
}


class RecordingServer:
    """In-process stand-in for the records endpoint."""

    def __init__(self, status_code: int = 200) -> None:
        self.status_code = status_code
        self.payloads: list[dict[str, object]] = []

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.payloads.append(json.loads(request.content))
        return httpx.Response(self.status_code)


@pytest.fixture
def ocr_engine() -> MagicMock:
    engine = MagicMock(spec=BaseOcrEngine)
    engine.recognize.return_value = "From: Acme Corp\nInvoice No: 12345\nTotal PHP 1,500.00"
    return engine


@pytest.fixture
def ai_client() -> MagicMock:
    client = MagicMock()
    client.create_chat_completion.return_value = json.dumps(MODEL_RESPONSE)
    return client


@pytest.fixture
def build_orchestrator(
    ocr_engine: MagicMock, ai_client: MagicMock
) -> Callable[[RecordingServer], Orchestrator]:
    def build(server: RecordingServer) -> Orchestrator:
        status = StatusTracker()
        normalizer = DocumentNormalizer(
            ocr_engine=ocr_engine,
            pdf_renderer=PyMuPdfAdapter(),
            render_scale=1.0,
        )
        extractor = FieldExtractor(
            client=ai_client,
            model="test-model",
            contract=ExtractionContract(self_entity=SelfEntity(name="Equicom Services, Inc.")),
        )
        dispatcher = HttpRecordDispatcher(
            endpoint_url=ENDPOINT,
            client=httpx.Client(transport=httpx.MockTransport(server.handle)),
        )
        steps = [
            MarkProcessingStep(status),
            NormalizeDocumentsStep(normalizer, status),
            ExtractFieldsStep(extractor, status),
            DispatchRecordStep(dispatcher, status),
            MarkSucceededStep(status),
        ]
        processor = Processor(steps=steps, failed_step=MarkFailedStep(status))
        return Orchestrator(processor, status)

    return build


@pytest.fixture
def server() -> RecordingServer:
    return RecordingServer()
