"""Application layer - port definitions.

Contents:
    * :mod:`.ports` - Mailer agent contract and callable Protocols for adapters
"""

from __future__ import annotations

from .ports import (
    CreateMailer,
    GetConfig,
    InitLogging,
    LoadMailgunConfigFromDict,
    LoadSendOptionsFromDict,
    MailerAgent,
)

__all__ = [
    "CreateMailer",
    "GetConfig",
    "InitLogging",
    "LoadMailgunConfigFromDict",
    "LoadSendOptionsFromDict",
    "MailerAgent",
]
