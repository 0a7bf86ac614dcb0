from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass(frozen=True)
class TemplateRequest:
    path: str
    data: Any = None


@dataclass(frozen=True)
class Attachment:
    name: str
    path: str


@dataclass
class EmailMessage:
    """One outbound message as supplied by the caller.

    ``body`` is used as-is unless ``template`` names a template, in which case
    the rendered template replaces it.
    """

    to: List[str]
    subject: str = ""
    body: bytes = b""
    from_email: str = ""
    from_name: str = ""
    cc: List[str] = field(default_factory=list)
    bcc: List[str] = field(default_factory=list)
    reply_to: Optional[str] = None
    attachments: List[Attachment] = field(default_factory=list)
    template: Optional[TemplateRequest] = None

    def uses_template(self) -> bool:
        return self.template is not None and bool(self.template.path)
