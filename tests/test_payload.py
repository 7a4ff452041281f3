"""Behaviour tests for payload construction, independent of HTTP."""

from __future__ import annotations

import os
import sys
from email.utils import getaddresses
from pathlib import Path

import pytest

from mailgun_agent.adapters.mailgun.payload import (
    MESSAGES_ENDPOINT,
    MIME_ENDPOINT,
    OutboundPayload,
    build_fields_payload,
    build_payload,
)
from mailgun_agent.domain.errors import ComposeError
from mailgun_agent.domain.message import Attachment, Body, CompiledMimeMessage, Message, Sender


@pytest.mark.os_agnostic
def test_fields_payload_contains_both_bodies(plain_message: Message) -> None:
    payload = build_fields_payload(plain_message)

    assert payload.fields["text"] == "Hello in plain text"
    assert payload.fields["html"] == "<p>Hello in HTML</p>"
    assert payload.multipart is False
    assert payload.endpoint == MESSAGES_ENDPOINT


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("body", "present", "absent"),
    [
        (Body(plain_text="only text"), "text", "html"),
        (Body(html="<i>only html</i>"), "html", "text"),
    ],
)
def test_fields_payload_omits_absent_body(body: Body, present: str, absent: str) -> None:
    payload = build_fields_payload(Message(Sender("a@example.com"), "Hi", body))

    assert present in payload.fields
    assert absent not in payload.fields


@pytest.mark.os_agnostic
def test_single_attachment_forces_multipart(attachment_dir: Path) -> None:
    message = Message(
        Sender("a@example.com"), "Hi", Body(plain_text="x"), (Attachment(attachment_dir / "report.pdf"),)
    )

    payload = build_fields_payload(message)

    assert payload.multipart is True
    assert [file.name for file in payload.files] == ["attachment[0]"]


@pytest.mark.os_agnostic
def test_dispositions_are_indexed_independently(attachment_dir: Path) -> None:
    message = Message(
        Sender("a@example.com"),
        "Hi",
        attachments=(
            Attachment(attachment_dir / "report.pdf"),
            Attachment(attachment_dir / "logo.png", "image/png", disposition="inline"),
            Attachment(attachment_dir / "report.pdf", name="copy.pdf"),
            Attachment(attachment_dir / "logo.png", "image/png", name="logo2.png", disposition="inline"),
        ),
    )

    payload = build_fields_payload(message)

    assert [(file.name, file.filename) for file in payload.files] == [
        ("attachment[0]", "report.pdf"),
        ("inline[0]", "logo.png"),
        ("attachment[1]", "copy.pdf"),
        ("inline[1]", "logo2.png"),
    ]
    assert payload.files[1].content_type == "image/png"


@pytest.mark.os_agnostic
def test_missing_attachment_file_is_compose_error(tmp_path: Path) -> None:
    message = Message(Sender("a@example.com"), "Hi", attachments=(Attachment(tmp_path / "gone.pdf"),))

    with pytest.raises(ComposeError, match="does not exist"):
        build_fields_payload(message)


@pytest.mark.os_agnostic
def test_built_in_mime_payload_is_single_message_file(plain_message: Message) -> None:
    payload = build_payload(plain_message, built_in_mime=True)

    assert payload.mime is True
    assert payload.multipart is True
    assert payload.endpoint == MIME_ENDPOINT
    assert dict(payload.fields) == {}
    assert [(file.name, file.filename) for file in payload.files] == [("message", "message")]
    assert payload.files[0].content is not None
    assert b"Subject: Monthly update" in payload.files[0].content


@pytest.mark.os_agnostic
def test_precompiled_message_always_uses_mime_payload() -> None:
    payload = build_payload(CompiledMimeMessage(b"raw"), built_in_mime=False)

    assert payload.mime is True
    assert payload.files[0].content == b"raw"


@pytest.mark.os_agnostic
def test_with_recipient_clones_without_mutating() -> None:
    original = OutboundPayload({"subject": "Hi"})

    clone = original.with_recipient("a@example.com")

    assert clone.fields["to"] == "a@example.com"
    assert "to" not in original.fields


@pytest.mark.os_agnostic
def test_with_recipients_indexes_only_multipart_payloads() -> None:
    recipients = ["a@example.com", "b@example.com", "c@example.com"]

    flat = OutboundPayload({}).with_recipients(recipients)
    indexed = OutboundPayload({}, multipart=True).with_recipients(recipients)

    assert dict(flat.fields) == {"to": recipients}
    assert dict(indexed.fields) == {"to[0]": recipients[0], "to[1]": recipients[1], "to[2]": recipients[2]}


@pytest.mark.os_agnostic
def test_payload_fields_are_read_only() -> None:
    payload = OutboundPayload({"subject": "Hi"})

    with pytest.raises(TypeError):
        payload.fields["subject"] = "changed"  # type: ignore[index]


@pytest.mark.os_agnostic
def test_fields_payload_quotes_sender_display_name() -> None:
    payload = build_fields_payload(Message(Sender("john@example.com", "Doe, John"), "Hi", Body(plain_text="x")))

    assert getaddresses([str(payload.fields["from"])]) == [("Doe, John", "john@example.com")]


@pytest.mark.skipif(sys.platform == "win32" or os.geteuid() == 0, reason="needs POSIX permissions as non-root")
def test_unreadable_attachment_file_is_compose_error(tmp_path: Path) -> None:
    path = tmp_path / "locked.pdf"
    path.write_bytes(b"%PDF")
    path.chmod(0)
    try:
        with pytest.raises(ComposeError, match="not readable"):
            build_fields_payload(Message(Sender("a@example.com"), "Hi", attachments=(Attachment(path),)))
    finally:
        path.chmod(0o600)
