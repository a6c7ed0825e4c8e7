"""Error taxonomy shared by the board client and its callers."""

from __future__ import annotations


class BoardError(Exception):
    """Base class for every failure surfaced by the board client."""


class ConfigurationError(BoardError):
    """Raised when the client cannot be constructed (e.g. missing token)."""


class ValidationError(BoardError, ValueError):
    """Caller-side input problem; no request was attempted."""


class TransportError(BoardError):
    """The remote service could not be reached (connect, timeout, I/O)."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ProtocolError(BoardError):
    """The remote service answered with a non-success status."""

    def __init__(self, service: str, status: int, body: str) -> None:
        self.service = service
        self.status = status
        self.body = body
        super().__init__(f"{service} API returned {status}: {body}")


class DecodeError(BoardError):
    """The service answered OK but the body was not usable."""
