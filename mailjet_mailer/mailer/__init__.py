"""Abstract interface for sending email messages.

This subpackage defines the ``EmailSender`` interface shared by senders:
``send`` takes a message and an optional completion handler and reports the
outcome through that handler instead of raising.  The Mailjet HTTP API
implementation lives in :mod:`mailjet_mailer.mailer.mailjet_sender`.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Callable, Optional

from mailjet_mailer.errors import MailerError
from mailjet_mailer.message import MessageLike

CompletionHandler = Callable[[Optional[MailerError]], None]


class EmailSender(ABC):
    """Abstract base class for email senders.

    Implementations must provide a ``send`` method.  Send-time failures are
    passed to ``on_complete`` and never raised.  When ``on_complete`` is
    omitted the caller has opted out of the outcome, so failures (including
    an invalid message) are silently dropped.  This is surprising but kept
    for compatibility with existing callers.
    """

    @abstractmethod
    def send(
        self,
        message: MessageLike,
        on_complete: Optional[CompletionHandler] = None,
    ) -> None:
        """Send a single email message.

        Args:
            message: A :class:`~mailjet_mailer.message.Message` or a mapping
                with the same fields.
            on_complete: Called exactly once with ``None`` on success or a
                :class:`~mailjet_mailer.errors.MailerError` on failure.
        """
        raise NotImplementedError

    def send_in_background(
        self,
        message: MessageLike,
        on_complete: Optional[CompletionHandler] = None,
    ) -> threading.Thread:
        """Run :meth:`send` on a daemon thread and return the started thread.

        ``on_complete`` runs on that thread.
        """
        thread = threading.Thread(
            target=self.send,
            args=(message, on_complete),
            name="mailjet-send",
            daemon=True,
        )
        thread.start()
        return thread


__all__ = ["CompletionHandler", "EmailSender"]
