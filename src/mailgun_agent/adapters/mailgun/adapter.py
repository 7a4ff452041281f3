"""Mailgun implementation of the mailer agent contract.

Provides :class:`MailgunAdapter`, whose :meth:`~MailgunAdapter.send` has the
same signature as every other mailer agent, and
:func:`create_mailgun_adapter` for building one from plain arguments.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import httpx

from mailgun_agent.domain.errors import MailerError
from mailgun_agent.domain.message import CompiledMimeMessage, Message

from .config import MailgunConfig, SendOptions
from .payload import OutboundPayload, build_payload
from .transport import MailgunTransport
from .validation import normalize_recipients

logger = logging.getLogger(__name__)


class MailgunAdapter:
    """Send messages through the Mailgun HTTP API.

    Args:
        config: Immutable credentials and connection settings.
        options: Behaviour flags; the adapter owns the instance and the owner
            may toggle its attributes between calls. Defaults to ``SendOptions()``.
        transport: Optional ``httpx`` transport replacing the TLS connection.

    Attributes:
        options: The mutable :class:`SendOptions` in effect for the next send.
    """

    def __init__(
        self,
        config: MailgunConfig,
        *,
        options: SendOptions | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config
        self.options = options if options is not None else SendOptions()
        self._transport = MailgunTransport(config, transport=transport)

    @property
    def config(self) -> MailgunConfig:
        return self._config

    @property
    def api_server_url(self) -> str:
        return self._config.api_server_url

    def __repr__(self) -> str:
        return (
            f"MailgunAdapter(domain={self._config.domain!r}, api_key='**********', "
            f"api_server={self._config.api_server_url!r})"
        )

    def api_call(
        self,
        method: str,
        endpoint: str,
        payload: OutboundPayload | None = None,
    ) -> Any:
        """Perform one raw API call with this adapter's credentials.

        Useful for endpoints beyond message sending (for example
        ``api_call("GET", "/events")``).
        """
        if payload is None:
            return self._transport.call(method, endpoint)
        return self._transport.call(
            method,
            endpoint,
            payload.fields,
            files=payload.files,
            multipart=payload.multipart,
        )

    def send(self, message: Message | CompiledMimeMessage, recipients: str | Sequence[str]) -> int:
        """Send *message* to *recipients*.

        Args:
            message: Uncompiled or pre-compiled message.
            recipients: Address strings in delivery order. A bare string is a
                single recipient.

        Returns:
            In individual mode, the number of recipients whose call
            succeeded. Otherwise ``1`` for the single request that covered
            every recipient.

        Raises:
            ComposeError: Invalid recipient or attachment, before any request.
            DeliveryError: A request failed. In individual mode only when
                ``options.throw_on_individual_send`` is set.
        """
        recipient_list = normalize_recipients(recipients)
        options = self.options
        payload = build_payload(message, built_in_mime=options.built_in_mime)
        # MIME payloads always go to /messages.mime.
        endpoint = payload.endpoint

        logger.info(
            "Sending email via Mailgun",
            extra={
                "domain": self._config.domain,
                "recipient_count": len(recipient_list),
                "endpoint": endpoint,
                "multipart": payload.multipart,
                "individually": options.send_individually,
            },
        )

        if options.send_individually:
            return self._send_individually(payload, endpoint, recipient_list, throw=options.throw_on_individual_send)

        self.api_call("POST", endpoint, payload.with_recipients(recipient_list))
        return 1

    def _send_individually(
        self,
        payload: OutboundPayload,
        endpoint: str,
        recipients: Sequence[str],
        *,
        throw: bool,
    ) -> int:
        sent_count = 0
        for recipient in recipients:
            try:
                self.api_call("POST", endpoint, payload.with_recipient(recipient))
            except MailerError:
                if throw:
                    raise
                logger.warning(
                    "Skipping recipient after failed send",
                    extra={"domain": self._config.domain, "recipient": recipient},
                    exc_info=True,
                )
                continue
            sent_count += 1
        return sent_count


def create_mailgun_adapter(
    domain: str,
    api_key: str,
    eu_server: bool,
    ca_root_file: str | Path,
    timeout: float = 3.0,
    connect_timeout: float = 3.0,
    *,
    options: SendOptions | None = None,
    transport: httpx.BaseTransport | None = None,
) -> MailgunAdapter:
    """Validate settings and build a :class:`MailgunAdapter`.

    Raises:
        ConfigurationError: The CA root file is missing or unreadable.
        pydantic.ValidationError: The domain is blank or a timeout is not positive.
    """
    config = MailgunConfig(
        domain=domain,
        api_key=api_key,
        eu_server=eu_server,
        ca_root_file=Path(ca_root_file),
        timeout=timeout,
        connect_timeout=connect_timeout,
    )
    return MailgunAdapter(config, options=options, transport=transport)


__all__ = ["MailgunAdapter", "create_mailgun_adapter"]
