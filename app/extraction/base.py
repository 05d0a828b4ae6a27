from abc import ABC, abstractmethod

from app.extraction.models import StructuredRecord


class BaseFieldExtractor(ABC):
    """Contract for all field extraction adapters."""

    @abstractmethod
    def extract(self, text: str) -> StructuredRecord:
        """Map OCR text from a whole batch onto one structured record.

        Args:
            text: Concatenated OCR output of every uploaded page.

        Returns:
            StructuredRecord with null for every field that could not be
            determined with confidence.

        Raises:
            ExtractionError: on any failure.
        """
