from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, List


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def dedupe(values: Iterable[str]) -> List[str]:
    """Drop repeated values while keeping first-seen order."""
    seen: set[str] = set()
    result: List[str] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        result.append(value)
    return result
