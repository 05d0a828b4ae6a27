from unittest.mock import MagicMock, patch

import pytesseract
import pytest
from PIL import Image

from app.ocr.exceptions import OcrError
from app.ocr.tesseract_adapter import TesseractAdapter


def _image() -> Image.Image:
    return Image.new("RGB", (10, 10), "white")


class TestTesseractAdapter:
    @patch("app.ocr.tesseract_adapter.pytesseract.image_to_string")
    def test_returns_recognized_text(self, mock_to_string: MagicMock) -> None:
        mock_to_string.return_value = "Invoice No: 12345\n"
        adapter = TesseractAdapter()
        assert adapter.recognize(_image()) == "Invoice No: 12345\n"

    @patch("app.ocr.tesseract_adapter.pytesseract.image_to_string")
    def test_passes_image_through(self, mock_to_string: MagicMock) -> None:
        mock_to_string.return_value = ""
        image = _image()
        TesseractAdapter().recognize(image)
        mock_to_string.assert_called_once_with(image)

    @patch("app.ocr.tesseract_adapter.pytesseract.image_to_string")
    def test_wraps_tesseract_error(self, mock_to_string: MagicMock) -> None:
        mock_to_string.side_effect = pytesseract.TesseractError(1, "bad image")
        with pytest.raises(OcrError, match="tesseract recognition failed"):
            TesseractAdapter().recognize(_image())

    @patch("app.ocr.tesseract_adapter.pytesseract.image_to_string")
    def test_wraps_missing_binary(self, mock_to_string: MagicMock) -> None:
        mock_to_string.side_effect = pytesseract.TesseractNotFoundError()
        with pytest.raises(OcrError):
            TesseractAdapter().recognize(_image())

    def test_sets_custom_binary_path(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(pytesseract.pytesseract, "tesseract_cmd", "tesseract")
        TesseractAdapter(tesseract_cmd="/opt/tesseract/bin/tesseract")
        assert pytesseract.pytesseract.tesseract_cmd == "/opt/tesseract/bin/tesseract"
