from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

TEXT_PLAIN = "text/plain"
TEXT_HTML = "text/html"

_HTML_MARKER = b"html"


def sniff_content_type(body: bytes, used_template: bool = False) -> str:
    """Guess whether a body is HTML or plain text.

    This is a substring heuristic, not HTML detection: any body containing
    ``html`` (case-sensitive) is sent as ``text/html``. Rendered templates go
    through the same check, so a template without the marker is sent as
    plain text.
    """
    content_type = TEXT_HTML if _HTML_MARKER in body else TEXT_PLAIN
    logger.debug("Sniffed body content type=%s template=%s", content_type, used_template)
    return content_type
