from __future__ import annotations

from dataclasses import dataclass

import pytest

from mailsmith.errors import TemplateRenderFailed
from mailsmith.templates import Jinja2TemplateRenderer


@dataclass
class Recipient:
    name: str


def test_renders_mapping_data(tmp_path):
    template = tmp_path / "email.html"
    template.write_text("<html><body>Hello {{ name }}</body></html>", encoding="utf-8")
    rendered = Jinja2TemplateRenderer().render(str(template), {"name": "Patrick"})
    assert rendered == b"<html><body>Hello Patrick</body></html>"


def test_non_mapping_data_is_bound_as_data(tmp_path):
    template = tmp_path / "email.txt"
    template.write_text("Hello {{ data.name }}", encoding="utf-8")
    assert Jinja2TemplateRenderer().render(str(template), Recipient(name="Patrick")) == b"Hello Patrick"


def test_html_templates_are_autoescaped(tmp_path):
    template = tmp_path / "email.html"
    template.write_text("<p>{{ name }}</p>", encoding="utf-8")
    assert Jinja2TemplateRenderer().render(str(template), {"name": "<b>x</b>"}) == b"<p>&lt;b&gt;x&lt;/b&gt;</p>"


def test_relative_identifier_uses_base_dir(tmp_path):
    (tmp_path / "welcome.txt").write_text("Welcome {{ name }}", encoding="utf-8")
    assert Jinja2TemplateRenderer(tmp_path).render("welcome.txt", {"name": "Ada"}) == b"Welcome Ada"


def test_missing_template_raises(tmp_path):
    with pytest.raises(TemplateRenderFailed):
        Jinja2TemplateRenderer().render(str(tmp_path / "missing.html"), {})


def test_syntax_error_raises(tmp_path):
    template = tmp_path / "broken.html"
    template.write_text("{% if %}", encoding="utf-8")
    with pytest.raises(TemplateRenderFailed):
        Jinja2TemplateRenderer().render(str(template), {})


def test_strict_mode_rejects_undefined_variables(tmp_path):
    template = tmp_path / "email.txt"
    template.write_text("Hello {{ missing }}", encoding="utf-8")
    with pytest.raises(TemplateRenderFailed):
        Jinja2TemplateRenderer(strict=True).render(str(template), {})


def test_undecodable_template_raises(tmp_path):
    template = tmp_path / "binary.html"
    template.write_bytes(b"\xff\xfe")
    with pytest.raises(TemplateRenderFailed) as excinfo:
        Jinja2TemplateRenderer().render(str(template), {})
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


def test_template_path_that_is_a_directory_raises(tmp_path):
    (tmp_path / "folder.html").mkdir()
    with pytest.raises(TemplateRenderFailed):
        Jinja2TemplateRenderer().render(str(tmp_path / "folder.html"), {})
