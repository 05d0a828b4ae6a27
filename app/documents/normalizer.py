"""Turns a batch of uploaded documents into one OCR text stream."""

import io
from collections.abc import Sequence

from PIL import Image, UnidentifiedImageError

from app.documents.exceptions import DocumentDecodeError
from app.documents.models import InputDocument
from app.logging.logger import Log
from app.ocr.base import BaseOcrEngine
from app.pdf.base import BasePdfRenderer

DEFAULT_RENDER_SCALE = 2.0


class DocumentNormalizer:
    """Runs OCR over every page of every document, in upload order.

    PDFs are rasterized page by page at ``render_scale`` before OCR; image
    files go to the OCR engine directly. Each page's text is followed by a
    newline. The first failure aborts the whole batch.
    """

    def __init__(
        self,
        *,
        ocr_engine: BaseOcrEngine,
        pdf_renderer: BasePdfRenderer,
        render_scale: float = DEFAULT_RENDER_SCALE,
    ) -> None:
        self._ocr_engine = ocr_engine
        self._pdf_renderer = pdf_renderer
        self._render_scale = render_scale

    def normalize(self, documents: Sequence[InputDocument]) -> str:
        parts: list[str] = []
        for document in documents:
            if document.is_pdf:
                page_texts = self._recognize_pdf(document)
            else:
                page_texts = [self._recognize_image(document)]
            parts.extend(text + "\n" for text in page_texts)
            Log.info(
                f"Recognized {len(page_texts)} page(s) from {document.filename}",
                media_type=document.media_type,
            )
        return "".join(parts)

    def _recognize_pdf(self, document: InputDocument) -> list[str]:
        page_total = self._pdf_renderer.page_count(document.content)
        Log.info(f"Rendering {page_total} page(s) from {document.filename}")
        texts: list[str] = []
        for page_number, image in enumerate(
            self._pdf_renderer.render_pages(document.content, self._render_scale),
            start=1,
        ):
            Log.debug(
                f"Rendered page {page_number}/{page_total} of {document.filename}",
                width=image.width,
                height=image.height,
            )
            texts.append(self._ocr_engine.recognize(image))
        return texts

    def _recognize_image(self, document: InputDocument) -> str:
        try:
            image = Image.open(io.BytesIO(document.content))
            image.load()
        except (UnidentifiedImageError, OSError) as exc:
            raise DocumentDecodeError(
                f"Could not decode image '{document.filename}': {exc}"
            ) from exc
        with image:
            return self._ocr_engine.recognize(image)
