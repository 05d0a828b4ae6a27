class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class EmptySelectionError(ProcessorError):
    """Raised when a run is requested without any documents."""


class RunInProgressError(ProcessorError):
    """Raised when a run is requested while another one is still processing."""


class StatusTransitionError(ProcessorError):
    """Raised when a status change is not allowed from the current state."""
