"""Shared pytest fixtures for Mailgun adapter tests.

Centralizes test infrastructure:
- CA bundle and attachment files live in session-scoped temp directories so
  hypothesis tests can use them.
- HTTP traffic goes through ``httpx.MockTransport``; every request the
  adapter makes is recorded for assertions.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import parse_qs

import httpx
import orjson
import pytest
from lib_layered_config import Config

from mailgun_agent.adapters.mailgun import MailgunAdapter, MailgunConfig, SendOptions
from mailgun_agent.domain.message import Attachment, Body, Message, Sender

TEST_DOMAIN = "mg.example.com"
TEST_API_KEY = "key-3ax6xnjp29jd6fds4gc373sgvjxteol0"

_MULTIPART_NAME = re.compile(rb'Content-Disposition: form-data; name="([^"]+)"')


def json_response(status: int, payload: Any) -> httpx.Response:
    """Build a Mailgun-style JSON response."""
    return httpx.Response(status, content=orjson.dumps(payload), headers={"content-type": "application/json"})


def multipart_field_names(request: httpx.Request) -> list[str]:
    """Return the form field names of a multipart request, in order."""
    return [match.decode() for match in _MULTIPART_NAME.findall(request.content)]


def urlencoded_fields(request: httpx.Request) -> dict[str, list[str]]:
    """Decode an ``application/x-www-form-urlencoded`` request body."""
    return parse_qs(request.content.decode(), keep_blank_values=True)


@dataclass
class RecordingTransport:
    """MockTransport wrapper that records requests and answers via *responder*.

    Attributes:
        requests: Every request received, in order.
        responder: Called per request; defaults to a 200 "Queued" reply.
    """

    responder: Callable[[httpx.Request], httpx.Response] | None = None
    requests: list[httpx.Request] = field(default_factory=lambda: [])

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.responder is None:
            return json_response(200, {"id": "<20240101.1@mg.example.com>", "message": "Queued. Thank you."})
        return self.responder(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    @property
    def call_count(self) -> int:
        return len(self.requests)


@pytest.fixture(scope="session")
def ca_root_file(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Provide a readable (placeholder) CA bundle path."""
    path = tmp_path_factory.mktemp("certs") / "cacert.pem"
    path.write_text("-----BEGIN CERTIFICATE-----\nplaceholder\n-----END CERTIFICATE-----\n")
    return path


@pytest.fixture(scope="session")
def attachment_dir(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Provide a directory holding a PDF-ish file and a PNG-ish file."""
    directory = tmp_path_factory.mktemp("attachments")
    (directory / "report.pdf").write_bytes(b"%PDF-1.4 test report")
    (directory / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\nlogo")
    return directory


@pytest.fixture(scope="session")
def mailgun_config(ca_root_file: Path) -> MailgunConfig:
    """Provide a valid US-region configuration."""
    return MailgunConfig(domain=TEST_DOMAIN, api_key=TEST_API_KEY, ca_root_file=ca_root_file)


@pytest.fixture
def recorder() -> RecordingTransport:
    """Provide a fresh recording transport answering 200 to everything."""
    return RecordingTransport()


@pytest.fixture
def make_adapter(
    mailgun_config: MailgunConfig, recorder: RecordingTransport
) -> Callable[..., MailgunAdapter]:
    """Return a factory building adapters wired to the ``recorder`` transport.

    Keyword arguments become SendOptions fields.

    Example:
        def test_batch(make_adapter, recorder):
            adapter = make_adapter(built_in_mime=False)
            adapter.send(message, ["a@example.com"])
            assert recorder.call_count == 1
    """

    def _factory(**option_values: bool) -> MailgunAdapter:
        return MailgunAdapter(mailgun_config, options=SendOptions(**option_values), transport=recorder.transport)

    return _factory


@pytest.fixture
def plain_message() -> Message:
    """Provide a message with both text and HTML bodies and no attachments."""
    return Message(
        sender=Sender("news@example.com", "Example News"),
        subject="Monthly update",
        body=Body(plain_text="Hello in plain text", html="<p>Hello in HTML</p>"),
    )


@pytest.fixture
def message_with_files(attachment_dir: Path) -> Message:
    """Provide a message with one regular attachment and one inline image."""
    return Message(
        sender=Sender("news@example.com", "Example News"),
        subject="Report attached",
        body=Body(plain_text="See attachment", html='<p><img src="cid:logo.png"></p>'),
        attachments=(
            Attachment(attachment_dir / "report.pdf", "application/pdf"),
            Attachment(attachment_dir / "logo.png", "image/png", disposition="inline"),
        ),
    )


@pytest.fixture
def recipients() -> list[str]:
    return ["alice@example.com", "bob@example.com", "carol@example.com"]


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from test data dicts."""

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config lru_cache before the test."""
    from mailgun_agent.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield
