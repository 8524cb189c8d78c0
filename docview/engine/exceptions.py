class EngineError(Exception):
    """Raised when the document engine fails to decode, render or search."""


class EngineNotReadyError(EngineError):
    """Raised when the document engine is used before it finished initializing."""
