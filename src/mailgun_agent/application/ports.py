"""Application ports - Protocol definitions for adapters.

``MailerAgent`` is the provider-neutral sending contract; calling code
depends on it instead of a concrete adapter so providers can be swapped.
The remaining ports are callable Protocols whose ``__call__`` signatures
match the corresponding adapter functions, satisfied via structural
subtyping (PEP 544).

System Role:
    Sits between domain and adapters. Adapter types (``Config``,
    ``MailgunConfig``, ``SendOptions``) are imported under ``TYPE_CHECKING``
    only so the layer stays free of runtime infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol

from ..domain.message import CompiledMimeMessage, Message

if TYPE_CHECKING:
    from lib_layered_config import Config

    from ..adapters.mailgun.config import MailgunConfig, SendOptions


class MailerAgent(Protocol):
    """Send a message to recipients and report how many sends were accepted."""

    def send(self, message: Message | CompiledMimeMessage, recipients: str | Sequence[str]) -> int: ...


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class LoadMailgunConfigFromDict(Protocol):
    """Load MailgunConfig from a configuration dictionary."""

    def __call__(self, config_dict: Mapping[str, Any]) -> MailgunConfig: ...


class LoadSendOptionsFromDict(Protocol):
    """Load SendOptions from a configuration dictionary."""

    def __call__(self, config_dict: Mapping[str, Any]) -> SendOptions: ...


class CreateMailer(Protocol):
    """Build a mailer agent from validated settings."""

    def __call__(self, config: MailgunConfig, *, options: SendOptions | None = ...) -> MailerAgent: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


__all__ = [
    "CreateMailer",
    "GetConfig",
    "InitLogging",
    "LoadMailgunConfigFromDict",
    "LoadSendOptionsFromDict",
    "MailerAgent",
]
