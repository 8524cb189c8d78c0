from docview.worker.protocol import ErrorKind, ResponseError


class RequestFailedError(Exception):
    """Raised from an awaited request whose response reported a failure."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    @classmethod
    def from_response_error(cls, error: ResponseError) -> "RequestFailedError":
        return cls(error.kind, error.message)


class GatewayClosedError(RequestFailedError):
    """Raised for requests sent after, or still pending when, the gateway is closed."""

    def __init__(self, message: str = "Request gateway is closed") -> None:
        super().__init__(ErrorKind.ENGINE_FAILURE, message)
