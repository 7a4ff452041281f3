"""Translate messages into Mailgun request payloads.

Mailgun accepts a message either as a pre-rendered MIME upload
(``/messages.mime``, single ``message`` file field) or as discrete form
fields (``/messages``: ``from``, ``subject``, ``text``, ``html``,
``attachment[i]``, ``inline[i]``). This module builds the transient
:class:`OutboundPayload` for one ``send`` call; it performs no I/O besides
checking that attachment files exist.
"""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from pathlib import Path
from types import MappingProxyType

from mailgun_agent.domain.enums import Disposition
from mailgun_agent.domain.errors import ComposeError
from mailgun_agent.domain.message import CompiledMimeMessage, Message, mime_bytes, resolve_disposition

MESSAGES_ENDPOINT = "/messages"
MIME_ENDPOINT = "/messages.mime"

FieldValue = str | list[str]


@dataclass(frozen=True, slots=True)
class FileField:
    """One file part of a multipart request.

    Exactly one of ``path`` (opened lazily by the transport) or ``content``
    is set.
    """

    name: str
    filename: str
    content_type: str
    path: Path | None = None
    content: bytes | None = None


@dataclass(frozen=True, slots=True)
class OutboundPayload:
    """Form fields and files for a single API call.

    Attributes:
        fields: Text fields in insertion order. A list value is sent as a
            repeated key.
        files: File parts; only sent when ``multipart`` is true.
        multipart: Encode as ``multipart/form-data`` rather than
            ``application/x-www-form-urlencoded``.
        mime: The payload carries a pre-rendered MIME message.
    """

    fields: Mapping[str, FieldValue]
    files: tuple[FileField, ...] = ()
    multipart: bool = False
    mime: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @property
    def endpoint(self) -> str:
        return MIME_ENDPOINT if self.mime else MESSAGES_ENDPOINT

    def with_recipient(self, recipient: str) -> OutboundPayload:
        """Return a copy addressed to a single recipient via one ``to`` field."""
        return replace(self, fields={**self.fields, "to": recipient})

    def with_recipients(self, recipients: Sequence[str]) -> OutboundPayload:
        """Return a copy addressed to all *recipients* in one request.

        Multipart payloads get indexed ``to[0]``, ``to[1]``, ... fields;
        url-encoded payloads get a single ``to`` field holding the list.

        Example:
            >>> payload = OutboundPayload({"subject": "Hi"})
            >>> dict(payload.with_recipients(["a@x.io", "b@x.io"]).fields)
            {'subject': 'Hi', 'to': ['a@x.io', 'b@x.io']}
            >>> payload = OutboundPayload({"subject": "Hi"}, multipart=True)
            >>> dict(payload.with_recipients(["a@x.io", "b@x.io"]).fields)
            {'subject': 'Hi', 'to[0]': 'a@x.io', 'to[1]': 'b@x.io'}
        """
        fields = dict(self.fields)
        if self.multipart:
            for index, recipient in enumerate(recipients):
                fields[f"to[{index}]"] = recipient
        else:
            fields["to"] = list(recipients)
        return replace(self, fields=fields)


def build_mime_payload(message: Message | CompiledMimeMessage) -> OutboundPayload:
    """Wrap the message's MIME blob as the single ``message`` file field."""
    blob = mime_bytes(message)
    return OutboundPayload(
        fields={},
        files=(FileField(name="message", filename="message", content_type="message/rfc822", content=blob),),
        multipart=True,
        mime=True,
    )


def build_fields_payload(message: Message) -> OutboundPayload:
    """Build discrete form fields for the ``/messages`` endpoint.

    Attachments keep their given order and are indexed separately per
    disposition: the first inline file is ``inline[0]`` regardless of how
    many regular attachments precede it.

    Raises:
        ComposeError: An attachment has an illegal disposition or its file
            does not exist.
    """
    fields: dict[str, FieldValue] = {
        "from": message.sender.formatted(),
        "subject": message.subject,
    }
    if message.body.plain_text:
        fields["text"] = message.body.plain_text
    if message.body.html:
        fields["html"] = message.body.html

    counters = {Disposition.ATTACHMENT: 0, Disposition.INLINE: 0}
    files: list[FileField] = []
    for attachment in message.get_attachments():
        disposition = resolve_disposition(attachment.disposition)
        if not attachment.file_path.is_file():
            raise ComposeError(f"Attachment file does not exist: {attachment.file_path}")
        if not os.access(attachment.file_path, os.R_OK):
            raise ComposeError(f"Attachment file is not readable: {attachment.file_path}")
        index = counters[disposition]
        counters[disposition] += 1
        files.append(
            FileField(
                name=f"{disposition.value}[{index}]",
                filename=attachment.display_name,
                content_type=attachment.content_type,
                path=attachment.file_path,
            )
        )

    return OutboundPayload(fields=fields, files=tuple(files), multipart=bool(files))


def build_payload(message: Message | CompiledMimeMessage, *, built_in_mime: bool) -> OutboundPayload:
    """Choose the MIME or structured encoding for *message*.

    Pre-compiled messages always take the MIME route, since they carry no
    discrete fields.
    """
    if built_in_mime or isinstance(message, CompiledMimeMessage):
        return build_mime_payload(message)
    return build_fields_payload(message)


__all__ = [
    "MESSAGES_ENDPOINT",
    "MIME_ENDPOINT",
    "FileField",
    "OutboundPayload",
    "build_fields_payload",
    "build_mime_payload",
    "build_payload",
]
