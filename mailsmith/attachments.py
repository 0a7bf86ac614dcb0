"""Attachment retrieval and encoding.

Attachment paths are resolved by an ``AttachmentSource``. The default source
infers the backend from the path form:

- ``base64:...`` prefix -> inline base64 content (prefix is stripped)
- ``http://`` or ``https://`` prefix -> fetched over HTTP
- anything else -> local filesystem path (relative to ``base_dir`` when set)
"""

from __future__ import annotations

import base64
import binascii
import logging
import mimetypes
from pathlib import Path
from typing import Optional, Protocol

import httpx

from .errors import AttachmentReadFailed
from .mime import Part, encode_base64_lines
from .models import Attachment

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"
BASE64_PREFIX = "base64:"


class AttachmentSource(Protocol):
    def read(self, path: str) -> bytes: ...


class FilesystemSource:
    """Read local files. With ``base_dir`` every path, absolute or relative, must resolve inside it."""

    def __init__(self, base_dir: str | Path | None = None):
        self._base_dir = Path(base_dir).resolve() if base_dir else None

    def read(self, path: str) -> bytes:
        if not path:
            raise AttachmentReadFailed(path, "empty path")
        resolved = self._resolve(path)
        try:
            return resolved.read_bytes()
        except OSError as exc:
            raise AttachmentReadFailed(path, exc) from exc

    def _resolve(self, path: str) -> Path:
        candidate = Path(path)
        if self._base_dir is None:
            return candidate
        if candidate.is_absolute():
            resolved = candidate.resolve()
        else:
            resolved = (self._base_dir / candidate).resolve()
        if not resolved.is_relative_to(self._base_dir):
            raise AttachmentReadFailed(path, f"path escapes base directory {self._base_dir}")
        return resolved


class HttpSource:
    """Fetch attachments over HTTP(S), following redirects on owned and injected clients alike."""

    def __init__(self, *, client: httpx.Client | None = None, timeout: float = 20.0):
        self._client = client
        self._timeout = timeout

    def read(self, path: str) -> bytes:
        try:
            if self._client is not None:
                response = self._client.get(path, follow_redirects=True)
            else:
                with httpx.Client(timeout=self._timeout, follow_redirects=True) as client:
                    response = client.get(path)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise AttachmentReadFailed(path, f"HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise AttachmentReadFailed(path, exc) from exc
        return response.content


class Base64Source:
    def read(self, path: str) -> bytes:
        content = path[len(BASE64_PREFIX) :] if path.startswith(BASE64_PREFIX) else path
        content = content.strip()
        padding_needed = -len(content) % 4
        try:
            return base64.b64decode(content + "=" * padding_needed, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise AttachmentReadFailed(path, f"invalid base64 content: {exc}") from exc


class DefaultAttachmentSource:
    """Dispatch each path to the filesystem, HTTP or inline base64 source."""

    def __init__(
        self,
        *,
        base_dir: str | Path | None = None,
        http: Optional[HttpSource] = None,
    ):
        self._filesystem = FilesystemSource(base_dir)
        self._http = http or HttpSource()
        self._base64 = Base64Source()

    def read(self, path: str) -> bytes:
        if path.startswith(BASE64_PREFIX):
            return self._base64.read(path)
        if path.startswith(("http://", "https://")):
            return self._http.read(path)
        return self._filesystem.read(path)


def guess_content_type(attachment: Attachment) -> str:
    for candidate in (attachment.path, attachment.name):
        if not candidate or candidate.startswith(BASE64_PREFIX):
            continue
        content_type, _ = mimetypes.guess_type(candidate)
        if content_type:
            return content_type
    return DEFAULT_CONTENT_TYPE


def encode_attachment(attachment: Attachment, source: AttachmentSource, encode: bool = True) -> Part:
    """Read an attachment and build its multipart section.

    With ``encode`` the bytes are base64 encoded and declared as such;
    otherwise they are appended verbatim with no transfer encoding header.
    """
    data = source.read(attachment.path)
    headers = {
        "Content-Type": guess_content_type(attachment),
        "Content-Disposition": f'attachment; filename="{attachment.name}"',
    }
    if encode:
        headers["Content-Transfer-Encoding"] = "base64"
        body = encode_base64_lines(data)
    else:
        body = data
    logger.debug("Encoded attachment name=%s bytes=%s", attachment.name, len(data))
    return Part(headers=headers, body=body)
