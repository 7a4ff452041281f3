"""In-memory message model handed to mailer agents.

Contents:
    * :class:`Sender` - display name and address of the originator.
    * :class:`Body` - optional plain-text and HTML parts.
    * :class:`Attachment` - file on disk with content type and disposition.
    * :class:`Message` - uncompiled message that can build its own MIME blob.
    * :class:`CompiledMimeMessage` - message already rendered to MIME bytes.
    * :func:`mime_bytes` - uniform accessor over both message variants.
    * :func:`resolve_disposition` - strict disposition parsing.

System Role:
    Pure domain types. MIME compilation uses the standard library ``email``
    package; no network or configuration access happens here.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from email import policy
from email.message import EmailMessage
from email.utils import formataddr, formatdate, make_msgid
from pathlib import Path

from .enums import Disposition
from .errors import ComposeError


@dataclass(frozen=True, slots=True)
class Sender:
    """Originator of a message.

    Example:
        >>> Sender("news@example.com", "Example News").formatted()
        'Example News <news@example.com>'
        >>> Sender("news@example.com").formatted()
        'news@example.com'
    """

    email: str
    name: str = ""

    def formatted(self) -> str:
        """Return ``Name <email>``, or the bare address when no name is set.

        Names containing specials such as commas are quoted.

        Example:
            >>> Sender("john@example.com", "Doe, John").formatted()
            '"Doe, John" <john@example.com>'
        """
        if self.name:
            return formataddr((self.name, self.email))
        return self.email

    @property
    def domain(self) -> str | None:
        _, _, domain = self.email.partition("@")
        return domain or None


@dataclass(frozen=True, slots=True)
class Body:
    """Plain-text and HTML alternatives; either may be absent."""

    plain_text: str | None = None
    html: str | None = None


@dataclass(frozen=True, slots=True)
class Attachment:
    """A file to upload with the message.

    ``disposition`` is kept as a plain string so that any value coming from
    callers can be represented; it is checked with :func:`resolve_disposition`
    when the message is compiled or turned into a request.

    Example:
        >>> Attachment(Path("/tmp/report.pdf"), "application/pdf").name
        'report.pdf'
    """

    file_path: Path
    content_type: str = "application/octet-stream"
    name: str | None = None
    disposition: str = Disposition.ATTACHMENT.value

    def __post_init__(self) -> None:
        if not isinstance(self.file_path, Path):
            object.__setattr__(self, "file_path", Path(self.file_path))
        if not self.name:
            object.__setattr__(self, "name", self.file_path.name)

    @property
    def display_name(self) -> str:
        return self.name or self.file_path.name


def resolve_disposition(value: str) -> Disposition:
    """Return the :class:`Disposition` for *value* or raise ComposeError.

    Example:
        >>> resolve_disposition("inline")
        <Disposition.INLINE: 'inline'>
        >>> resolve_disposition("embedded")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ComposeError: Illegal value for attachment disposition: 'embedded'
    """
    try:
        return Disposition(value)
    except ValueError as exc:
        raise ComposeError(f"Illegal value for attachment disposition: {value!r}") from exc


@dataclass(frozen=True, slots=True)
class CompiledMimeMessage:
    """A message already rendered to its RFC 5322 byte form."""

    compiled_mime_body: bytes


@dataclass(frozen=True, slots=True)
class Message:
    """Uncompiled message: sender, subject, body and ordered attachments."""

    sender: Sender
    subject: str
    body: Body = field(default_factory=Body)
    attachments: Sequence[Attachment] = ()

    def get_attachments(self) -> tuple[Attachment, ...]:
        return tuple(self.attachments)

    def compile(self) -> CompiledMimeMessage:
        """Render the message to MIME bytes.

        Plain text and HTML become ``multipart/alternative`` parts when both
        are present. Attachments are added in order with their disposition;
        inline parts receive a ``Content-ID`` equal to their name so HTML can
        reference them as ``cid:<name>``.

        Raises:
            ComposeError: An attachment has an illegal disposition or its
                file cannot be read.
        """
        mime = EmailMessage()
        mime["From"] = self.sender.formatted()
        mime["Subject"] = self.subject
        mime["Date"] = formatdate(localtime=True)
        mime["Message-ID"] = make_msgid(domain=self.sender.domain)

        plain = self.body.plain_text
        html = self.body.html
        if plain and html:
            mime.set_content(plain)
            mime.add_alternative(html, subtype="html")
        elif html:
            mime.set_content(html, subtype="html")
        else:
            mime.set_content(plain or "")

        for attachment in self.attachments:
            disposition = resolve_disposition(attachment.disposition)
            try:
                data = attachment.file_path.read_bytes()
            except OSError as exc:
                raise ComposeError(f"Attachment file is not readable: {attachment.file_path}") from exc

            maintype, _, subtype = attachment.content_type.partition("/")
            if not maintype or not subtype:
                maintype, subtype = "application", "octet-stream"

            if disposition is Disposition.INLINE:
                mime.add_attachment(
                    data,
                    maintype=maintype,
                    subtype=subtype,
                    disposition=disposition.value,
                    filename=attachment.display_name,
                    cid=f"<{attachment.display_name}>",
                )
            else:
                mime.add_attachment(
                    data,
                    maintype=maintype,
                    subtype=subtype,
                    disposition=disposition.value,
                    filename=attachment.display_name,
                )

        return CompiledMimeMessage(mime.as_bytes(policy=policy.SMTP))


def mime_bytes(message: Message | CompiledMimeMessage) -> bytes:
    """Return the MIME blob of either message variant, compiling lazily."""
    if isinstance(message, CompiledMimeMessage):
        return message.compiled_mime_body
    return message.compile().compiled_mime_body


__all__ = [
    "Attachment",
    "Body",
    "CompiledMimeMessage",
    "Message",
    "Sender",
    "mime_bytes",
    "resolve_disposition",
]
