"""Mailjet-based email sender implementation.

This module defines ``MailjetSender``, which submits a message to the
Mailjet ``/v3/send/message`` endpoint as ``multipart/form-data`` with HTTP
Basic authentication.  Exactly one request is made per call; nothing is
retried.

Connection options (``secure``, ``hostname``, ``port``, ``timeout``) are
described in :mod:`mailjet_mailer.config`.  ``timeout`` defaults to ``None``:
if the API never answers, the send (and its completion handler) waits
forever.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Tuple, Union

import requests
from requests.auth import HTTPBasicAuth

from mailjet_mailer.config import ConnectionOptions, load_from_env, resolve_options
from mailjet_mailer.errors import (
    ApiError,
    InvalidArgument,
    MailerError,
    TransportError,
    ValidationError,
)
from mailjet_mailer.mailer import CompletionHandler, EmailSender
from mailjet_mailer.message import MessageLike, coerce_message

LOGGER = logging.getLogger(__name__)

SEND_PATH = "/v3/send/message"


def form_for_message(message: MessageLike) -> List[Tuple[str, str]]:
    """Build the ordered form fields Mailjet expects for ``message``.

    Optional fields are left out entirely when empty.

    Raises:
        ValidationError: If the sender, recipients, subject or both bodies
            are missing.  Mailjet would answer 400 for such a message.
    """
    msg = coerce_message(message)
    missing = msg.missing_fields()
    if missing:
        raise ValidationError(f"Message is missing required field(s): {', '.join(missing)}")

    fields = [
        ("from", msg.sender),
        ("to", ",".join(msg.to)),
        ("subject", msg.subject),
    ]
    if msg.reply_to:
        fields.append(("header", f"Reply-To: {msg.reply_to}"))
    if msg.cc:
        fields.append(("cc", ",".join(msg.cc)))
    if msg.bcc:
        fields.append(("bcc", ",".join(msg.bcc)))
    if msg.text_body:
        fields.append(("text", msg.text_body))
    if msg.html_body:
        fields.append(("html", msg.html_body))
    return fields


def _body_text(response: requests.Response) -> str:
    """Decode the raw body with the declared charset, UTF-8 when none or unknown."""
    raw = response.content
    try:
        return raw.decode(response.encoding or "utf-8", errors="replace")
    except LookupError:
        return raw.decode("utf-8", errors="replace")


class MailjetSender(EmailSender):
    """Mailjet implementation of the ``EmailSender`` interface."""

    def __init__(
        self,
        api_key: Any = None,
        api_secret: Any = None,
        options: Union[None, ConnectionOptions, Mapping[str, Any]] = None,
    ) -> None:
        if not isinstance(api_key, str) or not isinstance(api_secret, str):
            raise InvalidArgument("api_key and api_secret must be strings")
        if not api_key or not api_secret:
            raise InvalidArgument("api_key and api_secret must not be empty")

        self._api_key = api_key
        self._api_secret = api_secret
        self._options = resolve_options(options)

    @classmethod
    def from_env(cls) -> "MailjetSender":
        """Build a sender from ``MAILJET_*`` environment variables."""
        api_key, api_secret, options = load_from_env()
        return cls(api_key, api_secret, options)

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def options(self) -> ConnectionOptions:
        return self._options

    @property
    def base_url(self) -> str:
        return self._options.base_url

    def __repr__(self) -> str:
        return f"MailjetSender(base_url={self.base_url!r})"

    def send(
        self,
        message: MessageLike,
        on_complete: Optional[CompletionHandler] = None,
    ) -> None:
        """Send ``message`` through the Mailjet API.

        The outcome goes to ``on_complete``: ``None`` for HTTP 200, otherwise
        a :class:`ValidationError`, :class:`TransportError` or
        :class:`ApiError`.  Without ``on_complete`` the request is still made
        but every failure is discarded.
        """
        try:
            fields = form_for_message(message)
        except ValidationError as exc:
            LOGGER.warning("Mailjet message rejected before sending: %s", exc)
            if on_complete is not None:
                on_complete(exc)
            return

        error = self._post(fields)
        if on_complete is not None:
            on_complete(error)

    def _post(self, fields: List[Tuple[str, str]]) -> Optional[MailerError]:
        url = f"{self.base_url}{SEND_PATH}"
        # (None, value) parts are plain form fields without a filename.
        files = [(name, (None, value)) for name, value in fields]

        LOGGER.debug("POST %s with fields %s", url, [name for name, _ in fields])
        with requests.Session() as session:
            try:
                response = session.post(
                    url,
                    auth=HTTPBasicAuth(self._api_key, self._api_secret),
                    files=files,
                    stream=True,
                    allow_redirects=False,
                    timeout=self._options.timeout,
                )
            except requests.RequestException as exc:
                LOGGER.warning("Mailjet request to %s failed: %s", url, exc)
                return TransportError(exc)

            with response:
                if response.status_code == 200:
                    # Body is not needed; closing drops the connection unread.
                    LOGGER.info("Mailjet accepted message")
                    return None
                try:
                    body = _body_text(response)
                except requests.RequestException as exc:
                    LOGGER.warning("Mailjet response from %s was cut off: %s", url, exc)
                    return TransportError(exc)

        LOGGER.warning("Mailjet rejected message with HTTP %s", response.status_code)
        return ApiError(response.status_code, body)


__all__ = ["MailjetSender", "SEND_PATH", "form_for_message"]
