"""Type-safe domain enums for attachment dispositions and API regions."""

from __future__ import annotations

from enum import Enum


class Disposition(str, Enum):
    """Content-Disposition values Mailgun accepts for uploaded files.

    Inherits from str so plain strings taken from attachments compare equal.

    Attributes:
        ATTACHMENT: Separate, downloadable file.
        INLINE: Rendered inside the HTML body (referenced by ``cid:``).

    Example:
        >>> Disposition.INLINE.value
        'inline'
        >>> Disposition.ATTACHMENT == "attachment"
        True
    """

    ATTACHMENT = "attachment"
    INLINE = "inline"


class Region(str, Enum):
    """Mailgun API regions and their base hosts.

    Example:
        >>> Region.EU.host
        'api.eu.mailgun.net'
    """

    US = "us"
    EU = "eu"

    @property
    def host(self) -> str:
        return "api.eu.mailgun.net" if self is Region.EU else "api.mailgun.net"


__all__ = [
    "Disposition",
    "Region",
]
