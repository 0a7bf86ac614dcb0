from __future__ import annotations

import os
from dataclasses import dataclass

# --------------------------------
# Defaults

# Transport used when MAIL_TRANSPORT is not set
DEFAULT_TRANSPORT = "smtp"

# Submission port (STARTTLS)
DEFAULT_SMTP_PORT = 587

# Seconds to wait on the SMTP server
DEFAULT_SMTP_TIMEOUT = 30.0

SUPPORTED_TRANSPORTS = ("smtp", "ses")

_TRUTHY = {"1", "true", "yes", "on"}
# --------------------------------


@dataclass(frozen=True)
class MailerSettings:
    host: str
    port: int = DEFAULT_SMTP_PORT
    username: str = ""
    password: str = ""
    secure: bool = False
    transport: str = DEFAULT_TRANSPORT
    timeout: float = DEFAULT_SMTP_TIMEOUT
    aws_region: str | None = None
    attachment_dir: str | None = None
    template_dir: str | None = None

    @staticmethod
    def from_env() -> "MailerSettings":
        def require(name: str) -> str:
            value = os.getenv(name)
            if value is None or not value.strip():
                raise ValueError(f"Environment variable {name} is required.")
            return value.strip()

        def optional_with_default(name: str, default: str) -> str:
            value = os.getenv(name)
            if value is None or not value.strip():
                return default
            return value.strip()

        def optional(name: str) -> str | None:
            value = os.getenv(name)
            if value is None or not value.strip():
                return None
            return value.strip()

        transport = optional_with_default("MAIL_TRANSPORT", DEFAULT_TRANSPORT).lower()
        if transport not in SUPPORTED_TRANSPORTS:
            raise ValueError(f"MAIL_TRANSPORT must be one of {', '.join(SUPPORTED_TRANSPORTS)}, got {transport!r}.")

        aws_region = optional("AWS_REGION") or optional("AWS_DEFAULT_REGION")
        if transport == "ses" and aws_region is None:
            raise ValueError("Either AWS_REGION or AWS_DEFAULT_REGION is required for the ses transport.")

        port_value = optional_with_default("SMTP_PORT", str(DEFAULT_SMTP_PORT))
        timeout_value = optional_with_default("SMTP_TIMEOUT", str(DEFAULT_SMTP_TIMEOUT))
        try:
            port = int(port_value)
            timeout = float(timeout_value)
        except ValueError as exc:
            raise ValueError(f"Invalid SMTP_PORT or SMTP_TIMEOUT: {exc}") from exc

        return MailerSettings(
            host=require("SMTP_HOST") if transport == "smtp" else optional_with_default("SMTP_HOST", "localhost"),
            port=port,
            username=optional_with_default("SMTP_USERNAME", ""),
            password=optional_with_default("SMTP_PASSWORD", ""),
            secure=optional_with_default("SMTP_SECURE", "false").lower() in _TRUTHY,
            transport=transport,
            timeout=timeout,
            aws_region=aws_region,
            attachment_dir=optional("MAIL_ATTACHMENT_DIR"),
            template_dir=optional("MAIL_TEMPLATE_DIR"),
        )
