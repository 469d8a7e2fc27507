"""
Exceptions surfaced to HTTP clients as a JSON ``{"error": ...}`` envelope.
"""


class RenderError(Exception):
    """A render request failed; ``status_code`` is the HTTP status to return."""

    status_code = 400

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def __str__(self) -> str:
        return self.message


class NegotiationError(RenderError):
    """No supported output type could be negotiated."""

    status_code = 406


class PayloadTooLargeError(RenderError):
    status_code = 413
