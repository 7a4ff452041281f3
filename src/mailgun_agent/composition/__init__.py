"""Composition root wiring adapters to application ports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

# Configuration services
from ..adapters.config.loader import get_config

# Logging services
from ..adapters.logging.setup import init_logging

# Mailgun services
from ..adapters.mailgun import (
    MailgunAdapter,
    load_mailgun_config_from_dict,
    load_send_options_from_dict,
)

if TYPE_CHECKING:
    from lib_layered_config import Config

    from ..adapters.memory.mailer import MailerSpy
    from ..application.ports import (
        CreateMailer,
        GetConfig,
        InitLogging,
        LoadMailgunConfigFromDict,
        LoadSendOptionsFromDict,
        MailerAgent,
    )

    # Static conformance assertions, checked by pyright.
    _assert_get_config: GetConfig = get_config
    _assert_load_mailgun_config: LoadMailgunConfigFromDict = load_mailgun_config_from_dict
    _assert_load_send_options: LoadSendOptionsFromDict = load_send_options_from_dict
    _assert_create_mailer: CreateMailer = MailgunAdapter
    _assert_init_logging: InitLogging = init_logging


@dataclass(frozen=True, slots=True)
class AppServices:
    """Frozen container holding all application port implementations."""

    get_config: GetConfig
    load_mailgun_config_from_dict: LoadMailgunConfigFromDict
    load_send_options_from_dict: LoadSendOptionsFromDict
    create_mailer: CreateMailer
    init_logging: InitLogging


def build_production() -> AppServices:
    """Wire production adapters into an AppServices container."""
    return AppServices(
        get_config=get_config,
        load_mailgun_config_from_dict=load_mailgun_config_from_dict,
        load_send_options_from_dict=load_send_options_from_dict,
        create_mailer=MailgunAdapter,
        init_logging=init_logging,
    )


def build_testing(*, spy: MailerSpy | None = None) -> AppServices:
    """Wire in-memory adapters into an AppServices container.

    Args:
        spy: Optional MailerSpy for capturing send operations. When None, a
            fresh MailerSpy is created.

    Returns:
        AppServices container with in-memory adapters.
    """
    from ..adapters.memory import (
        MailerSpy,
        get_config_in_memory,
        init_logging_in_memory,
        load_mailgun_config_from_dict_in_memory,
        load_send_options_from_dict_in_memory,
    )

    mailer_spy = spy if spy is not None else MailerSpy()

    return AppServices(
        get_config=get_config_in_memory,
        load_mailgun_config_from_dict=load_mailgun_config_from_dict_in_memory,
        load_send_options_from_dict=load_send_options_from_dict_in_memory,
        create_mailer=mailer_spy.create_mailer,
        init_logging=init_logging_in_memory,
    )


def create_mailer_from_config(services: AppServices, config: Config) -> MailerAgent:
    """Build a mailer from the ``[mailgun]`` and ``[mailgun.options]`` sections.

    Raises:
        ConfigurationError: When required Mailgun settings are missing or
            the CA root file is unreadable.
    """
    config_dict = config.as_dict()
    mailgun_config = services.load_mailgun_config_from_dict(config_dict)
    options = services.load_send_options_from_dict(config_dict)
    return services.create_mailer(mailgun_config, options=options)


def get_mailer(*, profile: str | None = None, services: AppServices | None = None) -> MailerAgent:
    """Load configuration, initialize logging and return a ready mailer.

    Args:
        profile: Optional configuration profile, e.g. 'production'.
        services: Service container; defaults to :func:`build_production`.
    """
    wired = services if services is not None else build_production()
    config = wired.get_config(profile=profile)
    wired.init_logging(config)
    return create_mailer_from_config(wired, config)


__all__ = [
    # Configuration
    "get_config",
    # Mailgun
    "MailgunAdapter",
    "load_mailgun_config_from_dict",
    "load_send_options_from_dict",
    # Logging
    "init_logging",
    # Composition
    "AppServices",
    "build_production",
    "build_testing",
    "create_mailer_from_config",
    "get_mailer",
]
