from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from .addresses import extract_bare_address, format_address
from .attachments import AttachmentSource, DefaultAttachmentSource, encode_attachment
from .boundary import choose_boundary, generate_boundary
from .content_type import sniff_content_type
from .errors import MissingRecipients, MissingSender, MissingTemplateData
from .headers import assemble_headers
from .mime import MultipartPayload, Part
from .models import EmailMessage
from .templates import Jinja2TemplateRenderer, TemplateRenderer
from .utils import dedupe, utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComposedMail:
    payload: bytes
    envelope_from: str
    envelope_recipients: List[str]


class MessageComposer:
    """Turn an ``EmailMessage`` into one ``multipart/mixed`` byte sequence.

    The composer keeps only configuration. Header table, boundary and output
    buffer are created inside each ``compose`` call, so one instance can be
    shared between threads. Any failure raises before bytes are produced.
    """

    def __init__(
        self,
        *,
        host: str,
        account: str = "",
        renderer: Optional[TemplateRenderer] = None,
        attachment_source: Optional[AttachmentSource] = None,
        boundary_factory: Callable[[], str] = generate_boundary,
        clock: Callable[[], datetime] = utc_now,
        encode_attachments: bool = True,
    ):
        self._host = host
        self._account = account
        self._renderer = renderer or Jinja2TemplateRenderer()
        self._attachment_source = attachment_source or DefaultAttachmentSource()
        self._boundary_factory = boundary_factory
        self._clock = clock
        self._encode_attachments = encode_attachments

    def compose(self, message: EmailMessage) -> bytes:
        return self.build(message).payload

    def build(self, message: EmailMessage) -> ComposedMail:
        resolved = self._resolve(message)

        content_type = sniff_content_type(resolved.body, used_template=message.uses_template())
        parts = [
            Part(
                headers={
                    "Content-Type": f"{content_type}; charset=utf-8",
                    "Content-Transfer-Encoding": "8bit",
                },
                body=resolved.body,
            )
        ]
        for attachment in resolved.attachments:
            parts.append(encode_attachment(attachment, self._attachment_source, self._encode_attachments))

        boundary = choose_boundary((part.body for part in parts), self._boundary_factory)
        headers = assemble_headers(resolved, boundary, host=self._host, now=self._clock())
        payload = MultipartPayload(boundary=boundary, parts=parts).to_bytes(headers)
        logger.debug(
            "Composed message subject=%r parts=%s bytes=%s",
            resolved.subject,
            len(parts),
            len(payload),
        )
        return ComposedMail(
            payload=payload,
            envelope_from=extract_bare_address(resolved.from_email),
            envelope_recipients=dedupe(
                extract_bare_address(address) for address in [*resolved.to, *resolved.cc, *resolved.bcc]
            ),
        )

    def _resolve(self, message: EmailMessage) -> EmailMessage:
        """Return a copy with sender, body and display From filled in."""
        from_email = message.from_email or self._account
        if not from_email:
            raise MissingSender("No From address on the message and no account address configured.")
        if not message.to:
            raise MissingRecipients("At least one To recipient is required.")

        body = message.body.encode("utf-8") if isinstance(message.body, str) else message.body
        if message.uses_template():
            template = message.template
            if template.data is None:
                raise MissingTemplateData("Template data is required when using a template.")
            body = self._renderer.render(template.path, template.data)

        if message.from_name:
            from_email = format_address(message.from_name, from_email)

        return dataclasses.replace(message, from_email=from_email, body=body)
