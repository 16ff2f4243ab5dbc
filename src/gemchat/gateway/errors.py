"""Errors raised by the chat gateway.

Each error carries the HTTP status and the message shown to clients, so
the transport layer maps them without knowing why they were raised.
"""


class GatewayError(Exception):
    """Base class for gateway failures surfaced to clients."""

    status_code = 500
    public_message = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.public_message)


class ValidationError(GatewayError):
    """The request carried no usable message."""

    status_code = 400
    public_message = "Message is required"


class UpstreamError(GatewayError):
    """The completion service failed to produce a reply."""

    status_code = 500
    public_message = "Failed to get a response from AI"
