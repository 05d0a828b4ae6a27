import pytesseract
from PIL import Image

from app.ocr.base import BaseOcrEngine
from app.ocr.exceptions import OcrError


class TesseractAdapter(BaseOcrEngine):
    """Recognizes text with the Tesseract binary through pytesseract."""

    def __init__(self, tesseract_cmd: str | None = None) -> None:
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    def recognize(self, image: Image.Image) -> str:
        try:
            return pytesseract.image_to_string(image)
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError) as exc:
            raise OcrError(f"tesseract recognition failed: {exc}") from exc
        except OSError as exc:
            raise OcrError(f"tesseract could not read image: {exc}") from exc
