class OcrError(Exception):
    """Raised when the OCR engine cannot recognize text in an image."""
