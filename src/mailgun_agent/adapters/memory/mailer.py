"""In-memory mailer adapter for testing.

Provides a mailer agent that satisfies the same contract as
:class:`~mailgun_agent.adapters.mailgun.MailgunAdapter` but performs no HTTP
calls.

Contents:
    * :class:`MailerSpy` - Captures send calls for test assertions.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from ...domain.message import CompiledMimeMessage, Message
from ..mailgun.config import MailgunConfig, SendOptions
from ..mailgun.validation import normalize_recipients


def _empty_send_list() -> list[dict[str, Any]]:
    """Create an empty typed list for send records."""
    return []


@dataclass
class MailerSpy:
    """Captures mailer operations for test assertions.

    Each test should create its own MailerSpy instance to avoid cross-test
    pollution. Recipients are validated exactly like the Mailgun adapter
    does, and the return value follows the same counting rule.

    Attributes:
        sent: Captured send calls.
        options: Flags consulted for the return value.
        config: Configuration passed to :meth:`create_mailer`, if any.
        raise_exception: When set, send raises this exception after recording.

    Example:
        >>> from mailgun_agent.domain.message import Message, Sender
        >>> spy = MailerSpy()
        >>> spy.send(Message(Sender("a@example.com"), "Hi"), ["b@example.com", "c@example.com"])
        1
        >>> len(spy.sent)
        1
    """

    sent: list[dict[str, Any]] = field(default_factory=_empty_send_list)
    options: SendOptions = field(default_factory=SendOptions)
    config: MailgunConfig | None = None
    raise_exception: Exception | None = None

    def clear(self) -> None:
        """Reset captured data for next test."""
        self.sent.clear()
        self.raise_exception = None

    def create_mailer(self, config: MailgunConfig, *, options: SendOptions | None = None) -> MailerSpy:
        """Record the settings and return this spy as the mailer."""
        self.config = config
        if options is not None:
            self.options = options
        return self

    def send(self, message: Message | CompiledMimeMessage, recipients: str | Sequence[str]) -> int:
        """Record the call and return the count a real send would report.

        Raises:
            InvalidRecipientError: When recipients have invalid email format.
            ComposeError: When no recipients are given.
            Exception: If raise_exception is set, raises that exception.
        """
        recipient_list = normalize_recipients(recipients)
        self.sent.append(
            {
                "message": message,
                "recipients": recipient_list,
                "individually": self.options.send_individually,
            }
        )
        if self.raise_exception is not None:
            raise self.raise_exception
        return len(recipient_list) if self.options.send_individually else 1


__all__ = ["MailerSpy"]
