from __future__ import annotations


class MailError(Exception):
    """Base class for every composition and delivery failure."""


class MissingSender(MailError):
    """Raised when neither the message nor the account provides a From address."""


class MissingRecipients(MailError):
    """Raised when a message has no To recipients."""


class MissingTemplateData(MailError):
    """Raised when a template is requested without data to bind."""


class TemplateRenderFailed(MailError):
    """Raised when the template renderer cannot produce a body."""


class AttachmentReadFailed(MailError):
    """Raised when an attachment source cannot be read."""

    def __init__(self, path: str, reason: object = None):
        self.path = path
        self.reason = reason
        message = f"Failed to read attachment {path}"
        if reason is not None:
            message += f": {reason}"
        super().__init__(message)


class TransportFailed(MailError):
    """Raised when the transport rejects or cannot deliver a message."""
