from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from mailsmith import config
from mailsmith.errors import MailError
from mailsmith.mailer import build_mailer
from mailsmith.models import Attachment, EmailMessage, TemplateRequest


def _parse_attachment(value: str) -> Attachment:
    name, sep, path = value.partition("=")
    if not sep:
        return Attachment(name=Path(value).name, path=value)
    if not name or not path:
        raise argparse.ArgumentTypeError(f"Expected NAME=PATH, got {value!r}")
    return Attachment(name=name, path=path)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compose a multipart email and send it.")
    parser.add_argument("--to", action="append", required=True, help="recipient address (repeatable)")
    parser.add_argument("--from", dest="from_email", default="", help="sender address (default: SMTP_USERNAME)")
    parser.add_argument("--from-name", default="", help="sender display name")
    parser.add_argument("--subject", default="")
    body = parser.add_mutually_exclusive_group()
    body.add_argument("--body", default=None, help="literal body text")
    body.add_argument("--body-file", default=None, help="file whose bytes become the body")
    parser.add_argument("--template", default=None, help="template file rendered into the body")
    parser.add_argument("--data", default=None, help="JSON file with the template data (requires --template)")
    parser.add_argument(
        "--attach",
        action="append",
        default=[],
        type=_parse_attachment,
        help="NAME=PATH attachment (repeatable); PATH may be a file, http(s) URL or base64: payload",
    )
    parser.add_argument("--cc", action="append", default=[])
    parser.add_argument("--bcc", action="append", default=[])
    parser.add_argument("--reply-to", default=None)
    parser.add_argument("--dry-run", action="store_true", help="write the composed message to stdout instead of sending")
    parser.add_argument("--log-level", default="INFO")
    return parser


def build_message(args: argparse.Namespace) -> EmailMessage:
    if args.body_file:
        body = Path(args.body_file).read_bytes()
    else:
        body = (args.body or "").encode("utf-8")

    template = None
    if args.template:
        data = json.loads(Path(args.data).read_text(encoding="utf-8")) if args.data else None
        template = TemplateRequest(path=args.template, data=data)

    return EmailMessage(
        to=args.to,
        subject=args.subject,
        body=body,
        from_email=args.from_email,
        from_name=args.from_name,
        cc=args.cc,
        bcc=args.bcc,
        reply_to=args.reply_to,
        attachments=args.attach,
        template=template,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.data and not args.template:
        parser.error("--data requires --template")
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    try:
        settings = config.MailerSettings.from_env()
    except ValueError as exc:
        logging.error("Missing configuration: %s", exc)
        return 1

    try:
        message = build_message(args)
        mailer = build_mailer(settings)
        if args.dry_run:
            sys.stdout.buffer.write(mailer.compose(message))
            sys.stdout.buffer.flush()
        else:
            mailer.send_mail(message)
    except (MailError, OSError, ValueError) as exc:
        logging.exception("Sending mail failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
