from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, TemplateNotFound, select_autoescape

from .errors import TemplateRenderFailed

logger = logging.getLogger(__name__)


class TemplateRenderer(Protocol):
    def render(self, identifier: str, data: Any) -> bytes: ...


class Jinja2TemplateRenderer:
    """Render a template file with Jinja2 into UTF-8 bytes.

    ``identifier`` is a path to the template file, relative paths being
    resolved against ``base_dir`` when one is given. Mapping data is bound as
    template variables; any other value is available as ``data``.
    """

    def __init__(self, base_dir: str | Path | None = None, *, strict: bool = False):
        self._base_dir = Path(base_dir) if base_dir else None
        self._strict = strict

    def _environment(self, directory: Path) -> Environment:
        options: dict[str, Any] = {
            "loader": FileSystemLoader(directory),
            "autoescape": select_autoescape(["html", "htm", "xml"]),
        }
        if self._strict:
            options["undefined"] = StrictUndefined
        return Environment(**options)

    def render(self, identifier: str, data: Any) -> bytes:
        path = Path(identifier)
        if not path.is_absolute() and self._base_dir is not None:
            path = self._base_dir / path
        context = dict(data) if isinstance(data, Mapping) else {"data": data}
        try:
            template = self._environment(path.parent).get_template(path.name)
            rendered = template.render(**context)
        except TemplateNotFound as exc:
            raise TemplateRenderFailed(f"Email template '{identifier}' not found") from exc
        except TemplateError as exc:
            raise TemplateRenderFailed(f"Failed to render template '{identifier}': {exc}") from exc
        except (UnicodeDecodeError, OSError) as exc:
            raise TemplateRenderFailed(f"Failed to read template '{identifier}': {exc}") from exc
        logger.debug("Rendered template %s (%s chars)", identifier, len(rendered))
        return rendered.encode("utf-8")
