from __future__ import annotations

from datetime import datetime
from email.utils import format_datetime

from .mime import HeaderTable
from .models import EmailMessage

DEFAULT_MAILER = "mailsmith"

# Sending host domain -> X-Mailer label.
KNOWN_MAILERS = {
    "gmail.com": "Google Gmail",
    "yahoo.com": "Yahoo Mail",
    "outlook.com": "Microsoft Outlook",
}


def mailer_name_for_host(host: str) -> str:
    """Map a sending host such as ``smtp.gmail.com`` to its X-Mailer label."""
    normalized = host.lower().rstrip(".")
    for domain, label in KNOWN_MAILERS.items():
        if normalized == domain or normalized.endswith("." + domain):
            return label
    return DEFAULT_MAILER


def build_message_id(now: datetime, host: str) -> str:
    seconds = int(now.timestamp())
    nanos = now.microsecond * 1000
    return f"<{seconds}.{nanos}.{seconds * 1_000_000_000 + nanos}@{host}>"


def assemble_headers(message: EmailMessage, boundary: str, *, host: str, now: datetime) -> HeaderTable:
    """Build the top-level header table in transmission order.

    ``message.from_email`` must already carry its display form. Reply-To
    starts out as the sender and is overwritten in place by an explicit
    reply-to address.
    """
    headers: HeaderTable = {}
    headers["MIME-Version"] = "1.0"
    headers["From"] = message.from_email
    headers["To"] = ", ".join(message.to)
    headers["Subject"] = message.subject
    headers["Content-Type"] = f'multipart/mixed; boundary="{boundary}"'
    headers["Content-Transfer-Encoding"] = "8bit"
    headers["X-Mailer"] = mailer_name_for_host(host)
    headers["Date"] = format_datetime(now)
    headers["Message-ID"] = build_message_id(now, host)
    headers["List-Id"] = message.from_email
    headers["Reply-To"] = message.from_email
    if message.cc:
        headers["Cc"] = ", ".join(message.cc)
    if message.bcc:
        headers["Bcc"] = ", ".join(message.bcc)
    if message.reply_to:
        headers["Reply-To"] = message.reply_to
    return headers
