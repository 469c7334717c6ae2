"""Error types raised or reported by the Mailjet sender.

``InvalidArgument`` is raised synchronously when a sender is built with bad
credentials or options.  The other three are never raised out of
:meth:`MailjetSender.send`; they are handed to the completion callback.
"""

from __future__ import annotations

from typing import Optional


class MailerError(Exception):
    """Base class for every error produced by this package."""


class InvalidArgument(MailerError, ValueError):
    """Constructor input is missing or of the wrong type."""


class ValidationError(MailerError, ValueError):
    """A message lacks a required field (sender, recipient, subject or body)."""


class TransportError(MailerError):
    """The request failed before any HTTP response was received."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Email could not be delivered to the API: {cause}")
        self.cause = cause
        self.__cause__ = cause


class ApiError(MailerError):
    """Mailjet answered with a status code other than 200."""

    def __init__(self, status_code: int, body: str, message: Optional[str] = None) -> None:
        super().__init__(message or "Email could not be sent")
        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        return f"{self.args[0]} (HTTP {self.status_code})"


__all__ = [
    "MailerError",
    "InvalidArgument",
    "ValidationError",
    "TransportError",
    "ApiError",
]
