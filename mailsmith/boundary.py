from __future__ import annotations

import secrets
from typing import Callable, Iterable

from .errors import MailError

MAX_BOUNDARY_ATTEMPTS = 10


def generate_boundary() -> str:
    """Return a fresh random boundary token (60 hex characters)."""
    return secrets.token_hex(30)


def choose_boundary(
    contents: Iterable[bytes],
    factory: Callable[[], str] = generate_boundary,
) -> str:
    """Pick a boundary that does not occur inside any of ``contents``.

    Candidates that collide are discarded and a new one is requested from
    ``factory``.
    """
    bodies = list(contents)
    for _ in range(MAX_BOUNDARY_ATTEMPTS):
        candidate = factory()
        if not candidate:
            continue
        marker = candidate.encode("ascii")
        if not any(marker in body for body in bodies):
            return candidate
    raise MailError(f"Could not find a boundary absent from the message after {MAX_BOUNDARY_ATTEMPTS} attempts")
