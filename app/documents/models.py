import mimetypes
from dataclasses import dataclass
from pathlib import PurePath
from typing import ClassVar

from app.documents.exceptions import UnsupportedDocumentError

PDF_MEDIA_TYPE = "application/pdf"

ALLOWED_EXTENSIONS: frozenset[str] = frozenset(
    {".png", ".jpg", ".jpeg", ".tif", ".tiff", ".pdf"}
)


@dataclass(frozen=True)
class InputDocument:
    """One user-supplied file, consumed once by the document normalizer."""

    _EXTENSION_MEDIA_TYPES: ClassVar[dict[str, str]] = {
        ".png": "image/png",
        ".jpg": "image/jpeg",
        ".jpeg": "image/jpeg",
        ".tif": "image/tiff",
        ".tiff": "image/tiff",
        ".pdf": PDF_MEDIA_TYPE,
    }

    filename: str
    content: bytes
    media_type: str

    @property
    def is_pdf(self) -> bool:
        return self.media_type == PDF_MEDIA_TYPE

    @classmethod
    def from_upload(
        cls,
        filename: str,
        content: bytes,
        media_type: str | None = None,
    ) -> "InputDocument":
        """Build a document from an upload, resolving its media type.

        The reported media type wins when it is a PDF or image type;
        otherwise the type is derived from the file extension.

        Raises:
            UnsupportedDocumentError: if the extension is not accepted.
        """
        extension = PurePath(filename).suffix.lower()
        if extension not in ALLOWED_EXTENSIONS:
            raise UnsupportedDocumentError(
                f"Unsupported file '{filename}'. Accepted: {sorted(ALLOWED_EXTENSIONS)}"
            )
        reported = (media_type or "").split(";")[0].strip().lower()
        if reported == PDF_MEDIA_TYPE or reported.startswith("image/"):
            resolved = reported
        else:
            resolved = (
                cls._EXTENSION_MEDIA_TYPES.get(extension)
                or mimetypes.guess_type(filename)[0]
                or "application/octet-stream"
            )
        return cls(filename=filename, content=content, media_type=resolved)
