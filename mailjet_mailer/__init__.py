"""Top-level package for mailjet-mailer.

A small client for the Mailjet ``/v3/send/message`` API.  Messages are
validated, encoded as ``multipart/form-data`` and posted with HTTP Basic
authentication; the outcome is reported to a completion callback::

    sender = MailjetSender("api-key", "api-secret")
    sender.send(
        {"from": "me@example.com", "to": ["you@example.com"],
         "subject": "Hi", "textBody": "Hello"},
        lambda error: print(error or "sent"),
    )
"""

from __future__ import annotations

from mailjet_mailer.config import ConnectionOptions
from mailjet_mailer.errors import (
    ApiError,
    InvalidArgument,
    MailerError,
    TransportError,
    ValidationError,
)
from mailjet_mailer.mailer import EmailSender
from mailjet_mailer.mailer.mailjet_sender import MailjetSender, form_for_message
from mailjet_mailer.message import Message

__all__ = [
    "ApiError",
    "ConnectionOptions",
    "EmailSender",
    "InvalidArgument",
    "MailerError",
    "MailjetSender",
    "Message",
    "TransportError",
    "ValidationError",
    "form_for_message",
]

# SemVer version of the package
__version__: str = "0.1.0"
