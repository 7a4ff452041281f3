"""Domain layer - message model and error types with no network dependencies.

Contents:
    * :mod:`.message` - Sender, Body, Attachment, Message, CompiledMimeMessage
    * :mod:`.enums` - Domain enumerations (Disposition, Region)
    * :mod:`.errors` - Domain exception types
"""

from __future__ import annotations

from .enums import Disposition, Region
from .errors import (
    ApiError,
    ComposeError,
    ConfigurationError,
    DecodeError,
    DeliveryError,
    InvalidRecipientError,
    MailerError,
    TransportError,
)
from .message import (
    Attachment,
    Body,
    CompiledMimeMessage,
    Message,
    Sender,
    mime_bytes,
    resolve_disposition,
)

__all__ = [
    # Message model
    "Attachment",
    "Body",
    "CompiledMimeMessage",
    "Message",
    "Sender",
    "mime_bytes",
    "resolve_disposition",
    # Enums
    "Disposition",
    "Region",
    # Errors
    "ApiError",
    "ComposeError",
    "ConfigurationError",
    "DecodeError",
    "DeliveryError",
    "InvalidRecipientError",
    "MailerError",
    "TransportError",
]
