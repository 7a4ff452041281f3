"""Port behavioral contract tests and composition wiring.

In-memory adapters are checked against the same contracts as the
production ones; static conformance is enforced by pyright.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from lib_layered_config import Config

from mailgun_agent.adapters.mailgun import MailgunAdapter, MailgunConfig, SendOptions
from mailgun_agent.adapters.memory import (
    MailerSpy,
    get_config_in_memory,
    init_logging_in_memory,
    load_mailgun_config_from_dict_in_memory,
    load_send_options_from_dict_in_memory,
)
from mailgun_agent.composition import (
    AppServices,
    build_production,
    build_testing,
    create_mailer_from_config,
    get_mailer,
)
from mailgun_agent.domain.errors import ConfigurationError, DeliveryError, InvalidRecipientError
from mailgun_agent.domain.message import Body, Message, Sender


def _mailgun_section(ca_root_file: Path, **options: bool) -> dict[str, Any]:
    return {
        "mailgun": {
            "domain": "mg.example.com",
            "api_key": "key-1",
            "eu_server": False,
            "ca_root_file": str(ca_root_file),
            "options": options,
        }
    }


@pytest.fixture
def message() -> Message:
    return Message(Sender("a@example.com"), "Contract test", Body(plain_text="Hello"))


# ======================== MailerSpy ========================


@pytest.mark.os_agnostic
def test_spy_batch_send_returns_one(message: Message) -> None:
    spy = MailerSpy()

    assert spy.send(message, ["b@example.com", "c@example.com"]) == 1
    assert spy.sent[0]["recipients"] == ["b@example.com", "c@example.com"]


@pytest.mark.os_agnostic
def test_spy_individual_send_returns_recipient_count(message: Message) -> None:
    spy = MailerSpy(options=SendOptions(send_individually=True))

    assert spy.send(message, ["b@example.com", "c@example.com"]) == 2


@pytest.mark.os_agnostic
def test_spy_validates_recipients_like_the_adapter(message: Message) -> None:
    spy = MailerSpy()

    with pytest.raises(InvalidRecipientError):
        spy.send(message, ["not-an-address"])

    assert spy.sent == []


@pytest.mark.os_agnostic
def test_spy_raises_configured_exception_after_recording(message: Message) -> None:
    spy = MailerSpy(raise_exception=DeliveryError("boom"))

    with pytest.raises(DeliveryError, match="boom"):
        spy.send(message, "b@example.com")

    assert len(spy.sent) == 1
    spy.clear()
    assert spy.sent == []
    assert spy.raise_exception is None


# ======================== In-memory config and logging ========================


@pytest.mark.os_agnostic
def test_get_config_in_memory_returns_empty_config() -> None:
    config = get_config_in_memory()

    assert isinstance(config, Config)
    assert config.as_dict() == {}


@pytest.mark.os_agnostic
def test_in_memory_loaders_use_real_models(ca_root_file: Path) -> None:
    data = _mailgun_section(ca_root_file, throw_on_individual_send=True)

    assert isinstance(load_mailgun_config_from_dict_in_memory(data), MailgunConfig)
    assert load_send_options_from_dict_in_memory(data).throw_on_individual_send is True


@pytest.mark.os_agnostic
def test_init_logging_in_memory_does_not_raise() -> None:
    init_logging_in_memory(Config({}, {}))


# ======================== Composition wiring ========================


@pytest.mark.os_agnostic
@pytest.mark.parametrize("factory", [build_production, build_testing])
def test_builders_return_fully_populated_callable_services(factory: Callable[[], AppServices]) -> None:
    services = factory()

    assert isinstance(services, AppServices)
    for field_obj in dataclasses.fields(services):
        assert callable(getattr(services, field_obj.name))


@pytest.mark.os_agnostic
def test_production_create_mailer_builds_mailgun_adapter(mailgun_config: MailgunConfig) -> None:
    mailer = build_production().create_mailer(mailgun_config, options=SendOptions(built_in_mime=False))

    assert isinstance(mailer, MailgunAdapter)
    assert mailer.options.built_in_mime is False


@pytest.mark.os_agnostic
def test_create_mailer_from_config_wires_settings_and_options(ca_root_file: Path) -> None:
    spy = MailerSpy()
    services = build_testing(spy=spy)
    config = Config(_mailgun_section(ca_root_file, send_individually=True), {})

    mailer = create_mailer_from_config(services, config)

    assert mailer is spy
    assert spy.config is not None
    assert spy.config.api_server_url == "https://api.mailgun.net/v3/mg.example.com"
    assert spy.options.send_individually is True


@pytest.mark.os_agnostic
def test_get_mailer_with_empty_config_reports_missing_settings() -> None:
    with pytest.raises(ConfigurationError, match="Missing Mailgun configuration"):
        get_mailer(services=build_testing())


@pytest.mark.os_agnostic
def test_get_mailer_passes_profile_and_returns_usable_mailer(ca_root_file: Path, message: Message) -> None:
    captured: list[str | None] = []
    spy = MailerSpy()

    def _capturing_get_config(*, profile: str | None = None, **_kwargs: Any) -> Config:
        captured.append(profile)
        return Config(_mailgun_section(ca_root_file), {})

    services = dataclasses.replace(build_testing(spy=spy), get_config=_capturing_get_config)

    mailer = get_mailer(profile="staging", services=services)

    assert captured == ["staging"]
    assert mailer.send(message, ["b@example.com"]) == 1
    assert len(spy.sent) == 1
