"""Compose multipart e-mail messages and hand them to a mail transport."""

from .composer import ComposedMail, MessageComposer
from .errors import (
    AttachmentReadFailed,
    MailError,
    MissingRecipients,
    MissingSender,
    MissingTemplateData,
    TemplateRenderFailed,
    TransportFailed,
)
from .mailer import Mailer, build_mailer
from .models import Attachment, EmailMessage, TemplateRequest

__all__ = [
    "Attachment",
    "AttachmentReadFailed",
    "ComposedMail",
    "EmailMessage",
    "MailError",
    "Mailer",
    "MessageComposer",
    "MissingRecipients",
    "MissingSender",
    "MissingTemplateData",
    "TemplateRenderFailed",
    "TemplateRequest",
    "TransportFailed",
    "build_mailer",
]
