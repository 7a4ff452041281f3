"""Mailgun configuration models and loaders.

Provides the frozen :class:`MailgunConfig` model for credentials and
connection settings, the mutable :class:`SendOptions` model for per-adapter
behaviour flags, and loaders that build both from configuration
dictionaries.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, PrivateAttr, SecretStr, field_validator, model_validator

from mailgun_agent.domain.enums import Region
from mailgun_agent.domain.errors import ConfigurationError

API_BASE_TEMPLATE = "https://{host}/v3/{domain}"

# Fixed width so the mask reveals nothing about the key.
_SECRET_MASK = "**********"

_REQUIRED_KEYS = ("domain", "api_key", "ca_root_file")


class MailgunConfig(BaseModel):
    """Validated, immutable Mailgun connection settings.

    The CA root file is checked when the model is built; an unreadable file
    raises :class:`ConfigurationError` directly instead of a pydantic
    ``ValidationError`` so that callers can handle it like any other mailer
    failure.

    Example:
        >>> config = MailgunConfig(
        ...     domain="mg.example.com",
        ...     api_key="key-123",
        ...     ca_root_file="/etc/ssl/certs/ca-certificates.crt",
        ... )  # doctest: +SKIP
        >>> config.api_server_url  # doctest: +SKIP
        'https://api.mailgun.net/v3/mg.example.com'
    """

    model_config = ConfigDict(frozen=True)

    domain: str
    api_key: SecretStr
    eu_server: bool = False
    ca_root_file: Path
    timeout: float = 3.0
    connect_timeout: float = 3.0

    _api_server_url: str = PrivateAttr(default="")

    @field_validator("domain", mode="before")
    @classmethod
    def _strip_domain(cls, v: Any) -> Any:
        """Strip surrounding whitespace and reject blank domains."""
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("domain must not be empty")
        return v

    @model_validator(mode="after")
    def _validate_config(self) -> MailgunConfig:
        """Check timeouts and the CA root file.

        Raises:
            ValueError: When a timeout is not positive (surfaces as ValidationError).
            ConfigurationError: When the CA root file is missing or unreadable.
        """
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.connect_timeout <= 0:
            raise ValueError(f"connect_timeout must be positive, got {self.connect_timeout}")

        if not self.ca_root_file.is_file() or not os.access(self.ca_root_file, os.R_OK):
            raise ConfigurationError("SSL/TLS CA root file is not readable or does not exist")

        self._api_server_url = API_BASE_TEMPLATE.format(host=self.region.host, domain=self.domain)
        return self

    @property
    def region(self) -> Region:
        return Region.EU if self.eu_server else Region.US

    @property
    def api_server_url(self) -> str:
        """Base URL for every API call, fixed when the model is built."""
        return self._api_server_url

    def __repr__(self) -> str:
        """Return string representation with the API key masked.

        Example:
            >>> config = MailgunConfig(domain="mg.example.com", api_key="key-123", ca_root_file=ca)  # doctest: +SKIP
            >>> "key-123" in repr(config)  # doctest: +SKIP
            False
        """
        fields: list[str] = []
        for name, value in self:
            if name == "api_key":
                fields.append(f"{name}='{_SECRET_MASK}'")
            else:
                fields.append(f"{name}={value!r}")
        return f"MailgunConfig({', '.join(fields)})"

    def __str__(self) -> str:
        return self.__repr__()


class SendOptions(BaseModel):
    """Mutable behaviour flags owned by a single adapter.

    Attributes:
        built_in_mime: Compile the message locally and upload it to the
            ``/messages.mime`` endpoint instead of sending discrete fields.
        send_individually: Issue one API call per recipient.
        throw_on_individual_send: In individual mode, re-raise the first
            per-recipient failure instead of skipping it.

    Example:
        >>> options = SendOptions()
        >>> options.built_in_mime, options.send_individually
        (True, False)
        >>> options.send_individually = True
        >>> options.send_individually
        True
    """

    model_config = ConfigDict(validate_assignment=True)

    built_in_mime: bool = True
    send_individually: bool = False
    throw_on_individual_send: bool = False


def _mailgun_section(config_dict: Mapping[str, Any]) -> dict[str, Any]:
    section: Any = config_dict.get("mailgun", {})
    if not isinstance(section, Mapping):
        raise ConfigurationError("[mailgun] configuration section must be a table")
    return dict(cast(Mapping[str, Any], section))


def load_mailgun_config_from_dict(config_dict: Mapping[str, Any]) -> MailgunConfig:
    """Load MailgunConfig from a configuration dictionary.

    Bridges lib_layered_config's dictionary output with the typed
    MailgunConfig model. The nested ``[mailgun.options]`` table is ignored
    here; see :func:`load_send_options_from_dict`.

    Args:
        config_dict: Configuration dictionary, typically from lib_layered_config.
            Expected to have a ``mailgun`` section.

    Returns:
        Validated Mailgun settings.

    Raises:
        ConfigurationError: When a required key is missing or empty, or the
            CA root file is unreadable.

    Example:
        >>> load_mailgun_config_from_dict({"mailgun": {}})  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ConfigurationError: Missing Mailgun configuration: mailgun.domain, mailgun.api_key, mailgun.ca_root_file
    """
    mailgun_raw = _mailgun_section(config_dict)
    mailgun_raw.pop("options", None)

    missing = [key for key in _REQUIRED_KEYS if not str(mailgun_raw.get(key) or "").strip()]
    if missing:
        raise ConfigurationError("Missing Mailgun configuration: " + ", ".join(f"mailgun.{key}" for key in missing))

    return MailgunConfig.model_validate(mailgun_raw)


def load_send_options_from_dict(config_dict: Mapping[str, Any]) -> SendOptions:
    """Load SendOptions from the ``[mailgun.options]`` table.

    Example:
        >>> options = load_send_options_from_dict({"mailgun": {"options": {"send_individually": True}}})
        >>> options.send_individually
        True
        >>> load_send_options_from_dict({}).built_in_mime
        True
    """
    options_raw: Any = _mailgun_section(config_dict).get("options", {})
    if not isinstance(options_raw, Mapping):
        raise ConfigurationError("[mailgun.options] configuration section must be a table")
    return SendOptions.model_validate(dict(cast(Mapping[str, Any], options_raw)))


__all__ = [
    "API_BASE_TEMPLATE",
    "MailgunConfig",
    "SendOptions",
    "load_mailgun_config_from_dict",
    "load_send_options_from_dict",
]
