class DocumentError(Exception):
    """Base exception for input document handling."""


class UnsupportedDocumentError(DocumentError):
    """Raised when an uploaded file has an extension outside the accepted set."""


class DocumentDecodeError(DocumentError):
    """Raised when an image document cannot be decoded into a raster."""
