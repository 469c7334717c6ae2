"""Message model accepted by the senders.

Callers may pass a :class:`Message` or a plain mapping.  Mappings use the
camelCase keys of the Mailjet integration (``from``, ``replyTo``,
``textBody``, ``htmlBody``); snake_case attribute names are accepted as
well, as is the lowercase ``replyto``.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Union

import pydantic
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from mailjet_mailer.errors import ValidationError


class Message(BaseModel):
    """A single outgoing email."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    sender: str = Field("", validation_alias=AliasChoices("from", "sender"))
    to: List[str] = Field(default_factory=list)
    cc: List[str] = Field(default_factory=list)
    bcc: List[str] = Field(default_factory=list)
    reply_to: Optional[str] = Field(
        None, validation_alias=AliasChoices("replyTo", "replyto", "reply_to")
    )
    subject: str = ""
    text_body: Optional[str] = Field(
        None, validation_alias=AliasChoices("textBody", "text_body")
    )
    html_body: Optional[str] = Field(
        None, validation_alias=AliasChoices("htmlBody", "html_body")
    )

    @field_validator("to", "cc", "bcc", mode="before")
    @classmethod
    def _as_address_list(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("sender", "subject", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    def missing_fields(self) -> List[str]:
        """Return the required fields that are empty, in a stable order."""
        missing = []
        if not self.sender:
            missing.append("from")
        if not self.to:
            missing.append("to")
        if not self.subject:
            missing.append("subject")
        if not self.text_body and not self.html_body:
            missing.append("textBody/htmlBody")
        return missing


MessageLike = Union[None, Message, Mapping[str, Any]]


def coerce_message(message: MessageLike) -> Message:
    """Turn ``message`` into a :class:`Message`.

    Raises:
        ValidationError: If ``message`` is not a mapping or a field has the
            wrong type.
    """
    if message is None:
        return Message()
    if isinstance(message, Message):
        return message
    if not isinstance(message, Mapping):
        raise ValidationError(f"message must be a mapping, got {type(message).__name__}")
    try:
        return Message.model_validate(dict(message))
    except pydantic.ValidationError as exc:
        raise ValidationError(f"Invalid message: {exc.error_count()} field error(s)") from exc


__all__ = ["Message", "MessageLike", "coerce_message"]
