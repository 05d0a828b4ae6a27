from collections.abc import Iterator

import pymupdf
from PIL import Image

from app.pdf.base import BasePdfRenderer
from app.pdf.exceptions import PdfRenderError


class PyMuPdfAdapter(BasePdfRenderer):
    """Renders PDF pages using PyMuPDF."""

    def page_count(self, pdf_bytes: bytes) -> int:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                return doc.page_count
        except Exception as exc:
            raise PdfRenderError(f"pymupdf could not open document: {exc}") from exc

    def render_pages(self, pdf_bytes: bytes, scale: float) -> Iterator[Image.Image]:
        try:
            doc = pymupdf.open(stream=pdf_bytes, filetype="pdf")  # type: ignore[no-untyped-call]
        except Exception as exc:
            raise PdfRenderError(f"pymupdf could not open document: {exc}") from exc

        matrix = pymupdf.Matrix(scale, scale)
        with doc:
            for index, page in enumerate(doc, start=1):
                try:
                    pix = page.get_pixmap(matrix=matrix, alpha=False)
                    image = Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
                except Exception as exc:
                    raise PdfRenderError(
                        f"pymupdf failed to render page {index}: {exc}"
                    ) from exc
                yield image
