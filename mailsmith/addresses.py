from __future__ import annotations

import re

_BRACKETS_RE = re.compile(r"[<>]")


def format_address(name: str, address: str) -> str:
    """Return ``Name <address>``, or the bare address when there is no name.

    The display name is not quoted or escaped.
    """
    if not name:
        return address
    return f"{name} <{address}>"


def extract_bare_address(formatted: str) -> str:
    """Recover the routable address from ``addr`` or ``Name <addr>``."""
    tokens = formatted.split()
    if not tokens:
        return ""
    return _BRACKETS_RE.sub("", tokens[-1])
