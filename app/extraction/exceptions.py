class ExtractionError(Exception):
    """Raised when field extraction fails."""


class ExtractionValidationError(ExtractionError):
    """Raised when the model's record fails shape or type validation."""


class ExtractionNetworkError(ExtractionError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
