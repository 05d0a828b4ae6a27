from abc import ABC, abstractmethod
from collections.abc import Iterator

from PIL import Image


class BasePdfRenderer(ABC):
    """Contract for all PDF rasterization adapters."""

    @abstractmethod
    def page_count(self, pdf_bytes: bytes) -> int:
        """Return the number of pages in the PDF.

        Raises:
            PdfRenderError: if the document cannot be opened.
        """

    @abstractmethod
    def render_pages(self, pdf_bytes: bytes, scale: float) -> Iterator[Image.Image]:
        """Render every page of a PDF, one at a time.

        Args:
            pdf_bytes: Raw PDF file content.
            scale: Zoom factor relative to the page's 72 dpi viewport.

        Yields:
            One RGB raster per page in ascending page order, sized to the
            scaled viewport.

        Raises:
            PdfRenderError: if the document or any page fails to render.
        """
