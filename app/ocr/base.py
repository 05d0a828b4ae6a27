from abc import ABC, abstractmethod

from PIL import Image


class BaseOcrEngine(ABC):
    """Contract for all OCR adapters."""

    @abstractmethod
    def recognize(self, image: Image.Image) -> str:
        """Recognize text in a single page raster.

        Args:
            image: Page image, either decoded from an uploaded image file
                   or rendered from a PDF page.

        Returns:
            Recognized text exactly as produced by the engine.

        Raises:
            OcrError: if recognition fails for any reason.
        """
