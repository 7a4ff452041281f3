"""In-memory adapter implementations for testing.

Provides lightweight implementations of the application ports that operate
entirely in memory -- no filesystem discovery, no HTTP, no logging framework.

Contents:
    * :mod:`.config` - In-memory configuration adapters
    * :mod:`.mailer` - In-memory mailer agent (MailerSpy class)
    * :mod:`.logging` - In-memory logging adapter
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import (
    get_config_in_memory,
    load_mailgun_config_from_dict_in_memory,
    load_send_options_from_dict_in_memory,
)
from .logging import init_logging_in_memory
from .mailer import MailerSpy

# Static conformance assertions
if TYPE_CHECKING:
    from mailgun_agent.application.ports import (
        GetConfig,
        InitLogging,
        LoadMailgunConfigFromDict,
        LoadSendOptionsFromDict,
        MailerAgent,
    )

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_load_mailgun_config: LoadMailgunConfigFromDict = load_mailgun_config_from_dict_in_memory
    _assert_load_send_options: LoadSendOptionsFromDict = load_send_options_from_dict_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory
    _assert_mailer: MailerAgent = MailerSpy()

__all__ = [
    "MailerSpy",
    "get_config_in_memory",
    "init_logging_in_memory",
    "load_mailgun_config_from_dict_in_memory",
    "load_send_options_from_dict_in_memory",
]
