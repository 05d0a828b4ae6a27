from abc import ABC, abstractmethod
from dataclasses import dataclass

from app.documents.models import InputDocument
from app.extraction.models import StructuredRecord


@dataclass(slots=True)
class PipelineContext:
    documents: tuple[InputDocument, ...]
    extracted_text: str = ""
    record: StructuredRecord | None = None
    error_message: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError

    def close(self) -> None:
        """Release resources held by the step's collaborators."""
