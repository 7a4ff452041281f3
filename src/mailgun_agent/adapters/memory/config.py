"""In-memory configuration adapters for testing.

Provide configuration functions that satisfy the same Protocols as
production adapters but operate entirely in memory -- no filesystem,
no lib_layered_config file discovery.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from lib_layered_config import Config

from ..mailgun.config import (
    MailgunConfig,
    SendOptions,
    load_mailgun_config_from_dict,
    load_send_options_from_dict,
)


def get_config_in_memory(
    *,
    profile: str | None = None,
    start_dir: str | None = None,
) -> Config:
    """Return an empty in-memory Config."""
    return Config({}, {})


def load_mailgun_config_from_dict_in_memory(config_dict: Mapping[str, Any]) -> MailgunConfig:
    """Parse Mailgun settings with the real model; the CA file must still exist."""
    return load_mailgun_config_from_dict(config_dict)


def load_send_options_from_dict_in_memory(config_dict: Mapping[str, Any]) -> SendOptions:
    """Parse send options with the real model."""
    return load_send_options_from_dict(config_dict)


__all__ = [
    "get_config_in_memory",
    "load_mailgun_config_from_dict_in_memory",
    "load_send_options_from_dict_in_memory",
]
