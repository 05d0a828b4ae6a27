import io
from collections.abc import Iterator

import pdfplumber
from PIL import Image

from app.pdf.base import BasePdfRenderer
from app.pdf.exceptions import PdfRenderError

_POINTS_PER_INCH = 72


class PdfPlumberAdapter(BasePdfRenderer):
    """Renders PDF pages using pdfplumber's page imaging."""

    def page_count(self, pdf_bytes: bytes) -> int:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                return len(pdf.pages)
        except Exception as exc:
            raise PdfRenderError(f"pdfplumber could not open document: {exc}") from exc

    def render_pages(self, pdf_bytes: bytes, scale: float) -> Iterator[Image.Image]:
        try:
            pdf = pdfplumber.open(io.BytesIO(pdf_bytes))
        except Exception as exc:
            raise PdfRenderError(f"pdfplumber could not open document: {exc}") from exc

        resolution = _POINTS_PER_INCH * scale
        with pdf:
            for page in pdf.pages:
                try:
                    image = page.to_image(resolution=resolution).original.convert("RGB")
                except Exception as exc:
                    raise PdfRenderError(
                        f"pdfplumber failed to render page {page.page_number}: {exc}"
                    ) from exc
                yield image
