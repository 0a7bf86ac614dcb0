from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Dict, List

CRLF = b"\r\n"
BASE64_LINE_LENGTH = 76

HeaderTable = Dict[str, str]


@dataclass
class Part:
    headers: HeaderTable
    body: bytes


@dataclass
class MultipartPayload:
    boundary: str
    parts: List[Part] = field(default_factory=list)

    def to_bytes(self, headers: HeaderTable) -> bytes:
        """Serialize the top-level headers followed by every part.

        The CRLF written after each part body belongs to the next delimiter,
        so a part body is recovered byte for byte by a MIME parser.
        """
        delimiter = b"--" + self.boundary.encode("ascii")
        chunks: List[bytes] = [render_headers(headers), CRLF]
        for part in self.parts:
            chunks.append(delimiter + CRLF)
            chunks.append(render_headers(part.headers))
            chunks.append(CRLF)
            chunks.append(part.body)
            chunks.append(CRLF)
        chunks.append(delimiter + b"--" + CRLF)
        return b"".join(chunks)


def render_headers(headers: HeaderTable) -> bytes:
    return b"".join(f"{name}: {value}".encode("utf-8") + CRLF for name, value in headers.items())


def encode_base64_lines(data: bytes) -> bytes:
    encoded = base64.b64encode(data)
    lines = [encoded[i : i + BASE64_LINE_LENGTH] for i in range(0, len(encoded), BASE64_LINE_LENGTH)]
    return CRLF.join(lines)
