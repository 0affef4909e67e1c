"""Tests for the Jinja2 TemplateRenderer."""

from __future__ import annotations

from pathlib import Path

import pytest
from jinja2 import UndefinedError

from sitesmith.compiler.artifacts import ArtifactKind
from sitesmith.compiler.templates import TemplateRenderer

pytestmark = pytest.mark.unit


class TestBundledTemplates:
    def test_lists_expected_templates(self, renderer: TemplateRenderer):
        templates = renderer.list_templates()
        assert "pages/page.js.j2" in templates
        assert "admin/admin_page.js.j2" in templates
        assert "components/Layout/Header.js.j2" in templates

    def test_list_with_prefix(self, renderer: TemplateRenderer):
        assert renderer.list_templates("config") == [
            "config/globals.css.j2",
            "config/next.config.js.j2",
            "config/postcss.config.js.j2",
            "config/tailwind.config.js.j2",
        ]

    def test_missing_prefix(self, renderer: TemplateRenderer):
        assert renderer.list_templates("nope") == []
        assert renderer.render_tree("nope", ArtifactKind.COMPONENT, {}) == []


class TestFilters:
    @pytest.fixture
    def write_template(self, tmp_path: Path):
        def _write(name: str, source: str) -> TemplateRenderer:
            (tmp_path / name).write_text(source, encoding="utf-8")
            return TemplateRenderer(tmp_path)

        return _write

    def test_filters_registered(self, write_template):
        renderer = write_template(
            "filters.js.j2", "{{ a | jsx_text }}|{{ b | jsx_attr }}|{{ c | js_string }}"
        )
        out = renderer.render("filters.js.j2", {"a": "x<y", "b": "cls", "c": "q"})
        assert out == '{"x<y"}|"cls"|"q"'

    def test_no_html_autoescape(self, write_template):
        renderer = write_template("raw.js.j2", "{{ v }}")
        assert renderer.render("raw.js.j2", {"v": "<b>"}) == "<b>"

    def test_strict_undefined(self, write_template):
        renderer = write_template("missing.js.j2", "{{ missing }}")
        with pytest.raises(UndefinedError):
            renderer.render("missing.js.j2", {})


class TestRenderTree:
    def test_output_paths_drop_j2(self, renderer: TemplateRenderer):
        artifacts = renderer.render_tree(
            "components",
            ArtifactKind.COMPONENT,
            {
                "site_title": "Acme",
                "company_description": "Anvils",
                "nav_links": [{"href": "/", "label": "Home"}],
                "generator_name": "sitesmith",
            },
        )
        paths = [a.path for a in artifacts]
        assert paths == sorted(paths)
        assert "components/Layout/Header.js" in paths
        assert "components/Modules/HeroSection.js" in paths
        assert all(a.kind == ArtifactKind.COMPONENT for a in artifacts)

    def test_skip_patterns(self, tmp_path: Path):
        (tmp_path / "x").mkdir()
        (tmp_path / "x" / "a.txt.j2").write_text("A{{ n }}", encoding="utf-8")
        (tmp_path / "x" / "b.txt.j2").write_text("B", encoding="utf-8")
        renderer = TemplateRenderer(tmp_path)

        artifacts = renderer.render_tree("x", ArtifactKind.CONFIG, {"n": 1}, skip_patterns=["b.txt"])
        assert [(a.path, a.content) for a in artifacts] == [("x/a.txt", "A1")]

    def test_custom_template_dir_render_artifact(self, tmp_path: Path):
        (tmp_path / "hello.j2").write_text("Hello {{ name }}\n", encoding="utf-8")
        artifact = TemplateRenderer(tmp_path).render_artifact(
            "hello.j2", "out/hello.txt", ArtifactKind.LIBRARY, {"name": "Acme"}
        )
        assert artifact.path == "out/hello.txt"
        assert artifact.content == "Hello Acme\n"
