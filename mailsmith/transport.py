from __future__ import annotations

import logging
import smtplib
import ssl
from typing import Any, Callable, Optional, Protocol, Sequence

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .config import MailerSettings
from .errors import MailError, TransportFailed

logger = logging.getLogger(__name__)


class MailTransport(Protocol):
    provider: str

    def send(self, envelope_from: str, recipients: Sequence[str], payload: bytes) -> None: ...


class SMTPTransport:
    """Deliver composed bytes over SMTP.

    ``secure`` selects implicit TLS (usually port 465). Otherwise the
    connection is upgraded with STARTTLS whenever the server offers it.
    """

    provider = "smtp"

    def __init__(
        self,
        *,
        host: str,
        port: int,
        username: str = "",
        password: str = "",
        secure: bool = False,
        timeout: float = 30.0,
        smtp_factory: Optional[Callable[..., smtplib.SMTP]] = None,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._secure = secure
        self._timeout = timeout
        self._smtp_factory = smtp_factory

    def _connect(self) -> smtplib.SMTP:
        if self._smtp_factory is not None:
            return self._smtp_factory(self._host, self._port, timeout=self._timeout)
        if self._secure:
            return smtplib.SMTP_SSL(
                self._host, self._port, timeout=self._timeout, context=ssl.create_default_context()
            )
        return smtplib.SMTP(self._host, self._port, timeout=self._timeout)

    def send(self, envelope_from: str, recipients: Sequence[str], payload: bytes) -> None:
        try:
            with self._connect() as smtp:
                smtp.ehlo()
                if not self._secure and smtp.has_extn("starttls"):
                    smtp.starttls(context=ssl.create_default_context())
                    smtp.ehlo()
                if self._username:
                    smtp.login(self._username, self._password)
                refused = smtp.sendmail(envelope_from, list(recipients), payload)
        except (smtplib.SMTPException, OSError) as exc:
            raise TransportFailed(f"Failed to send email via {self._host}:{self._port}: {exc}") from exc
        if refused:
            logger.warning("SMTP server refused recipients: %s", ", ".join(sorted(refused)))
        logger.info("Mail sent via smtp host=%s recipients=%s", self._host, len(recipients) - len(refused))


class SESRawTransport:
    """Deliver composed bytes verbatim through the SES v2 raw content API."""

    provider = "ses"

    def __init__(
        self,
        *,
        aws_region: str,
        aws_access_key_id: str | None = None,
        aws_secret_access_key: str | None = None,
        aws_session_token: str | None = None,
        client: Any = None,
    ) -> None:
        if client is not None:
            self._client = client
            return
        client_kwargs = {"region_name": aws_region}
        if aws_access_key_id and aws_secret_access_key:
            client_kwargs["aws_access_key_id"] = aws_access_key_id
            client_kwargs["aws_secret_access_key"] = aws_secret_access_key
            if aws_session_token:
                client_kwargs["aws_session_token"] = aws_session_token
        self._client = boto3.client("sesv2", **client_kwargs)

    def send(self, envelope_from: str, recipients: Sequence[str], payload: bytes) -> None:
        request = {
            "FromEmailAddress": envelope_from,
            "Destination": {"ToAddresses": list(recipients)},
            "Content": {"Raw": {"Data": payload}},
        }
        try:
            response = self._client.send_email(**request)
        except ClientError as exc:
            status_code = exc.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
            raise TransportFailed(f"SES rejected the message (status={status_code}): {exc}") from exc
        except BotoCoreError as exc:
            raise TransportFailed(f"Failed to send email via SES: {exc}") from exc
        status_code = response.get("ResponseMetadata", {}).get("HTTPStatusCode")
        if isinstance(status_code, int) and status_code >= 400:
            raise TransportFailed(f"SES returned error status: {status_code}")
        logger.info("Mail sent via ses message_id=%s", response.get("MessageId"))


def build_transport(settings: MailerSettings) -> MailTransport:
    if settings.transport == "smtp":
        return SMTPTransport(
            host=settings.host,
            port=settings.port,
            username=settings.username,
            password=settings.password,
            secure=settings.secure,
            timeout=settings.timeout,
        )
    if settings.transport == "ses":
        if not settings.aws_region or not settings.aws_region.strip():
            raise MailError("No AWS region configured: set AWS_REGION or AWS_DEFAULT_REGION.")
        return SESRawTransport(aws_region=settings.aws_region.strip())
    raise MailError(f"Unknown mail transport: {settings.transport}")
