"""Recipient validation shared between the Mailgun adapter and the test spy.

Raises domain exceptions (InvalidRecipientError, ComposeError) rather than
library-specific exceptions.
"""

from __future__ import annotations

from collections.abc import Sequence
from email.utils import parseaddr

from btx_lib_mail import validate_email_address

from mailgun_agent.domain.errors import ComposeError, InvalidRecipientError


def validate_recipient(recipient: str) -> None:
    """Validate a single recipient, with or without a display name.

    ``"Jane <jane@example.com>"`` and ``"jane@example.com"`` are both
    accepted; only the address part is checked.

    Raises:
        InvalidRecipientError: When the address part is missing or invalid.

    Example:
        >>> validate_recipient("Jane <jane@example.com>")  # no exception
        >>> validate_recipient("invalid")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        InvalidRecipientError: Invalid recipient: invalid
    """
    _, address = parseaddr(recipient)
    if not address:
        raise InvalidRecipientError(f"Invalid recipient: {recipient}")
    try:
        validate_email_address(address)
    except ValueError as e:
        raise InvalidRecipientError(f"Invalid recipient: {recipient}") from e


def normalize_recipients(recipients: str | Sequence[str]) -> list[str]:
    """Return recipients as a validated, non-empty list.

    A bare string is treated as a single recipient.

    Raises:
        ComposeError: When no recipients are given.
        InvalidRecipientError: When a recipient has invalid email format.

    Example:
        >>> normalize_recipients("a@example.com")
        ['a@example.com']
        >>> normalize_recipients(["a@example.com", "b@example.com"])
        ['a@example.com', 'b@example.com']
    """
    recipient_list = [recipients] if isinstance(recipients, str) else list(recipients)
    if not recipient_list:
        raise ComposeError("No recipients given")
    for recipient in recipient_list:
        validate_recipient(recipient)
    return recipient_list


__all__ = ["normalize_recipients", "validate_recipient"]
