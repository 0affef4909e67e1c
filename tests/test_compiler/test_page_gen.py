"""Tests for page and component emission."""

from __future__ import annotations

import pytest

from sitesmith.compiler.artifacts import ArtifactKind
from sitesmith.compiler.page_gen import (
    NAV_LINKS,
    PageEmitter,
    page_title,
)
from sitesmith.compiler.substitution import ContentContext
from sitesmith.compiler.templates import TemplateRenderer
from sitesmith.descriptor.models import Page, ProjectDescriptor, page_file_name
from sitesmith.exceptions import DescriptorSchemaError

pytestmark = pytest.mark.unit

API_URL = "http://localhost:3201/api/content"


@pytest.fixture
def emitter(renderer: TemplateRenderer) -> PageEmitter:
    return PageEmitter(renderer, API_URL, "sitesmith")


class TestHelpers:
    def test_page_file_name(self):
        assert page_file_name("home") == "index.js"
        assert page_file_name("about") == "about.js"

    def test_page_title_default(self, rich_context: ContentContext):
        page = Page(route="/about")
        assert page_title("about", page, rich_context) == "About - Dubois Plomberie"

    def test_page_title_substituted(self, rich_context: ContentContext):
        page = Page.model_validate({"route": "/", "meta": {"title": "{{site.title}} - Home"}})
        assert page_title("home", page, rich_context) == "Dubois Plomberie - Home"


class TestEmitPages:
    def test_one_artifact_per_page_in_order(
        self, emitter: PageEmitter, rich: ProjectDescriptor, rich_context: ContentContext
    ):
        artifacts = emitter.emit_pages(rich, rich_context)
        assert [a.path for a in artifacts] == [
            "pages/index.js",
            "pages/services.js",
            "pages/contact.js",
        ]
        assert all(a.kind == ArtifactKind.PAGE for a in artifacts)

    def test_home_page_content(
        self, emitter: PageEmitter, rich: ProjectDescriptor, rich_context: ContentContext
    ):
        home = emitter.emit_pages(rich, rich_context)[0].content
        assert "export default function HomePage({ content })" in home
        assert "<title>Dubois Plomberie - Home</title>" in home
        assert '<meta name="description" content="Plumbing in Lyon since 1987" />' in home
        assert 'data-route="/"' in home
        assert f'fetch("{API_URL}")' in home
        assert "<h1>Dubois Plomberie</h1>" in home
        assert "ignored because children win" not in home

    def test_page_shell_leaves_main_landmark_to_layout(
        self, emitter: PageEmitter, rich: ProjectDescriptor, rich_context: ContentContext
    ):
        home = emitter.emit_pages(rich, rich_context)[0].content
        assert "<main" not in home
        assert '<div className="min-h-screen" data-route="/">' in home
        layout = next(
            a for a in emitter.emit_components(rich, rich_context) if a.path == "components/Layout/Layout.js"
        )
        assert layout.content.count("<main") == 1

    def test_nested_modules_keep_order(
        self, emitter: PageEmitter, rich: ProjectDescriptor, rich_context: ContentContext
    ):
        home = emitter.emit_pages(rich, rich_context)[0].content
        assert home.index("<li>Repairs</li>") < home.index("<li>Installation</li>")
        assert '<section className="hero py-20">' in home

    def test_page_description_and_unknown_placeholder(
        self, emitter: PageEmitter, rich: ProjectDescriptor, rich_context: ContentContext
    ):
        services = emitter.emit_pages(rich, rich_context)[1].content
        assert 'content="What we do"' in services
        assert "<title>Services - Dubois Plomberie</title>" in services
        assert '{"Our {{unknown.value}} services"}' in services

    def test_empty_page_gets_fallback(
        self, emitter: PageEmitter, rich: ProjectDescriptor, rich_context: ContentContext
    ):
        contact = emitter.emit_pages(rich, rich_context)[2].content
        assert "Site generated by sitesmith" in contact
        assert "ContactPage" in contact

    def test_route_without_slash_rejected(
        self, emitter: PageEmitter, rich_context: ContentContext
    ):
        page = Page.model_construct(route="about", modules=[])
        with pytest.raises(DescriptorSchemaError) as exc_info:
            emitter.emit_page("about", page, rich_context)
        assert exc_info.value.errors[0].startswith("structure.pages.about.route:")

    def test_app_shell(self, emitter: PageEmitter):
        app = emitter.emit_app()
        assert app.path == "pages/_app.js"
        assert app.kind == ArtifactKind.APP
        assert "import '../styles/globals.css'" in app.content


class TestEmitComponents:
    def test_shared_and_module_components(
        self, emitter: PageEmitter, rich: ProjectDescriptor, rich_context: ContentContext
    ):
        paths = [a.path for a in emitter.emit_components(rich, rich_context)]
        for expected in (
            "components/Layout/Layout.js",
            "components/Layout/Header.js",
            "components/Layout/Footer.js",
            "components/Modules/HeroSection.js",
            "components/Modules/ServicesPreview.js",
            "components/Modules/HeroModule.js",
            "components/Modules/ServicesListModule.js",
        ):
            assert expected in paths
        assert len(paths) == len(set(paths))

    def test_header_has_title_and_nav(
        self, emitter: PageEmitter, rich: ProjectDescriptor, rich_context: ContentContext
    ):
        artifacts = emitter.emit_components(rich, rich_context)
        header = next(a for a in artifacts if a.path.endswith("Header.js")).content
        assert "Dubois Plomberie" in header
        for link in NAV_LINKS:
            assert f'href="{link["href"]}"' in header

    def test_module_component_body(
        self, emitter: PageEmitter, rich: ProjectDescriptor, rich_context: ContentContext
    ):
        artifacts = emitter.emit_components(rich, rich_context)
        hero = next(a for a in artifacts if a.path.endswith("HeroModule.js")).content
        assert "export default function HeroModule()" in hero
        assert '// Generated from module "hero"' in hero
        assert "<p>Plumbing in Lyon since 1987</p>" in hero

    def test_duplicate_module_ids_emitted_once(
        self, emitter: PageEmitter, acme_data, renderer: TemplateRenderer
    ):
        acme_data["structure"]["pages"]["home"]["modules"] = [
            {"id": "hero", "tag": "h1", "content": "one"},
            {"id": "hero", "tag": "h1", "content": "two"},
        ]
        descriptor = ProjectDescriptor.model_validate(acme_data)
        context = ContentContext.from_meta(descriptor.meta)
        paths = [a.path for a in emitter.emit_components(descriptor, context)]
        assert paths.count("components/Modules/HeroModule.js") == 1

    def test_modules_without_id_get_no_component(
        self, emitter: PageEmitter, acme: ProjectDescriptor
    ):
        context = ContentContext.from_meta(acme.meta)
        artifacts = emitter.emit_components(acme, context)
        assert len(artifacts) == 5
