from __future__ import annotations

import logging
from typing import Optional

from .attachments import DefaultAttachmentSource
from .composer import MessageComposer
from .config import MailerSettings
from .models import EmailMessage
from .templates import Jinja2TemplateRenderer
from .transport import MailTransport, build_transport

logger = logging.getLogger(__name__)


class Mailer:
    """Compose a message and hand the bytes to the configured transport."""

    def __init__(
        self,
        settings: MailerSettings,
        *,
        transport: Optional[MailTransport] = None,
        composer: Optional[MessageComposer] = None,
    ):
        self.settings = settings
        self._transport = transport or build_transport(settings)
        self._composer = composer or MessageComposer(
            host=settings.host,
            account=settings.username,
            renderer=Jinja2TemplateRenderer(settings.template_dir),
            attachment_source=DefaultAttachmentSource(base_dir=settings.attachment_dir),
        )

    @property
    def provider(self) -> str:
        return self._transport.provider

    def compose(self, message: EmailMessage) -> bytes:
        return self._composer.compose(message)

    def send_mail(self, message: EmailMessage) -> None:
        composed = self._composer.build(message)
        logger.info(
            "Sending mail via %s from=%s recipients=%s bytes=%s",
            self._transport.provider,
            composed.envelope_from,
            len(composed.envelope_recipients),
            len(composed.payload),
        )
        self._transport.send(composed.envelope_from, composed.envelope_recipients, composed.payload)


def build_mailer(settings: MailerSettings) -> Mailer:
    return Mailer(settings)
