"""Mailgun adapter - HTTP API email sending.

Structure:
    * :mod:`.config` - Connection settings, send options and their loaders
    * :mod:`.validation` - Recipient validation
    * :mod:`.payload` - Message to request payload translation
    * :mod:`.transport` - Authenticated HTTP calls and error classification
    * :mod:`.adapter` - Mailer agent implementation

Contents:
    * :class:`.adapter.MailgunAdapter` - Primary sending interface
    * :func:`.adapter.create_mailgun_adapter` - Build an adapter from plain arguments
    * :class:`.config.MailgunConfig` - Immutable connection settings
    * :class:`.config.SendOptions` - Mutable behaviour flags
"""

from __future__ import annotations

from .adapter import MailgunAdapter, create_mailgun_adapter
from .config import (
    MailgunConfig,
    SendOptions,
    load_mailgun_config_from_dict,
    load_send_options_from_dict,
)
from .payload import FileField, OutboundPayload, build_payload
from .transport import MailgunTransport

__all__ = [
    "FileField",
    "MailgunAdapter",
    "MailgunConfig",
    "MailgunTransport",
    "OutboundPayload",
    "SendOptions",
    "build_payload",
    "create_mailgun_adapter",
    "load_mailgun_config_from_dict",
    "load_send_options_from_dict",
]
