class ProcessorError(Exception):
    """Base exception for all request processing errors."""


class InvalidInputError(ProcessorError):
    """Raised when a request carries a missing file, an empty query or an unknown mode."""
