"""Public package surface for the Mailgun mailer agent.

Routes imports through the architectural layers:
- Domain exports: message model and error types
- Adapter exports: the Mailgun adapter and its settings
- Composition exports: configuration-driven wiring
"""

from __future__ import annotations

# Adapter exports
from .adapters.mailgun import (
    MailgunAdapter,
    MailgunConfig,
    SendOptions,
    create_mailgun_adapter,
)

# Application ports
from .application.ports import MailerAgent

# Composition exports (wired adapters)
from .composition import get_config, get_mailer

# Domain exports
from .domain import (
    ApiError,
    Attachment,
    Body,
    CompiledMimeMessage,
    ComposeError,
    ConfigurationError,
    DecodeError,
    DeliveryError,
    Disposition,
    InvalidRecipientError,
    MailerError,
    Message,
    Sender,
    TransportError,
)

__all__ = [
    "ApiError",
    "Attachment",
    "Body",
    "CompiledMimeMessage",
    "ComposeError",
    "ConfigurationError",
    "DecodeError",
    "DeliveryError",
    "Disposition",
    "InvalidRecipientError",
    "MailerAgent",
    "MailerError",
    "MailgunAdapter",
    "MailgunConfig",
    "Message",
    "SendOptions",
    "Sender",
    "TransportError",
    "create_mailgun_adapter",
    "get_config",
    "get_mailer",
]
