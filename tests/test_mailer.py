from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence

import pytest

from mailsmith.composer import MessageComposer
from mailsmith.config import MailerSettings
from mailsmith.errors import MissingSender, TransportFailed
from mailsmith.mailer import Mailer, build_mailer
from mailsmith.models import EmailMessage


class RecordingTransport:
    provider = "fake"

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.sent: list[tuple[str, list[str], bytes]] = []

    def send(self, envelope_from: str, recipients: Sequence[str], payload: bytes) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append((envelope_from, list(recipients), payload))


def _mailer(transport: RecordingTransport, username: str = "account@example.com") -> Mailer:
    settings = MailerSettings(host="smtp.gmail.com", username=username, password="secret")
    composer = MessageComposer(
        host=settings.host,
        account=settings.username,
        boundary_factory=lambda: "BOUNDARY",
        clock=lambda: datetime(2024, 12, 7, tzinfo=timezone.utc),
    )
    return Mailer(settings, transport=transport, composer=composer)


def test_send_mail_hands_composed_bytes_to_transport():
    transport = RecordingTransport()
    message = EmailMessage(
        to=["bob@example.com"],
        cc=["carol@example.com"],
        bcc=["Dave <dave@example.com>"],
        subject="Hi",
        body=b"Hello Bob",
        from_email="ada@example.com",
        from_name="Ada",
    )
    _mailer(transport).send_mail(message)

    envelope_from, recipients, payload = transport.sent[0]
    assert envelope_from == "ada@example.com"
    assert recipients == ["bob@example.com", "carol@example.com", "dave@example.com"]
    assert b"From: Ada <ada@example.com>\r\n" in payload
    assert b"X-Mailer: Google Gmail\r\n" in payload


def test_send_mail_defaults_sender_to_account():
    transport = RecordingTransport()
    _mailer(transport).send_mail(EmailMessage(to=["bob@example.com"], subject="Hi", body=b"x"))
    assert transport.sent[0][0] == "account@example.com"


def test_composition_failure_sends_nothing():
    transport = RecordingTransport()
    with pytest.raises(MissingSender):
        _mailer(transport, username="").send_mail(EmailMessage(to=["bob@example.com"], body=b"x"))
    assert transport.sent == []


def test_transport_failure_reaches_caller():
    error = TransportFailed("server said no")
    with pytest.raises(TransportFailed) as excinfo:
        _mailer(RecordingTransport(error=error)).send_mail(
            EmailMessage(to=["bob@example.com"], body=b"x", from_email="ada@example.com")
        )
    assert excinfo.value is error


def test_build_mailer_uses_configured_transport():
    mailer = build_mailer(MailerSettings(host="smtp.example.com", username="ada@example.com"))
    assert mailer.provider == "smtp"
    payload = mailer.compose(EmailMessage(to=["bob@example.com"], subject="Hi", body=b"Hello"))
    assert b"From: ada@example.com\r\n" in payload
