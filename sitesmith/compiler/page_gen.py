"""Page and shared component emission.

Generates:
- ``pages/index.js`` / ``pages/<key>.js``  -- one file per descriptor page
- ``pages/_app.js``                        -- app shell importing global styles
- ``components/Layout/*``                  -- layout wrapper, header, footer
- ``components/Modules/*``                 -- content-driven module stubs plus
  one component per top-level module that carries an ``id``
"""

from __future__ import annotations

from typing import Any

from sitesmith.descriptor.models import ModuleNode, Page, ProjectDescriptor, page_file_name
from sitesmith.exceptions import DescriptorSchemaError
from sitesmith.utils import capitalize, to_component_name

from .artifacts import ArtifactKind, GeneratedArtifact
from .renderer import PAGE_BODY_DEPTH, render_module, render_modules
from .substitution import ContentContext, substitute
from .templates import TemplateRenderer

# Static header navigation entries.
NAV_LINKS: list[dict[str, str]] = [
    {"href": "/", "label": "Home"},
    {"href": "/services", "label": "Services"},
    {"href": "/contact", "label": "Contact"},
]

# Module components sit inside ``return ( ... )``.
MODULE_COMPONENT_DEPTH = 2


def page_title(page_key: str, page: Page, context: ContentContext) -> str:
    """Per-page title, else ``"<Key> - <site title>"``."""
    if page.meta.title:
        return substitute(page.meta.title, context)
    return f"{capitalize(page_key)} - {context.site_title}"


class PageEmitter:
    """Emits page files and the shared component files."""

    def __init__(
        self,
        renderer: TemplateRenderer,
        content_api_url: str,
        generator_name: str = "sitesmith",
    ) -> None:
        self.renderer = renderer
        self.content_api_url = content_api_url
        self.generator_name = generator_name

    # -- Pages -------------------------------------------------------------

    def emit_pages(
        self, descriptor: ProjectDescriptor, context: ContentContext
    ) -> list[GeneratedArtifact]:
        """One artifact per page, in descriptor order."""
        return [
            self.emit_page(key, page, context)
            for key, page in descriptor.structure.pages.items()
        ]

    def emit_page(
        self, page_key: str, page: Page, context: ContentContext
    ) -> GeneratedArtifact:
        """Render a single page into its shell.

        Raises:
            DescriptorSchemaError: If the page route does not start with ``/``
                (only reachable with models built via ``model_construct``).
        """
        if not page.route.startswith("/"):
            raise DescriptorSchemaError(
                [f"structure.pages.{page_key}.route: route {page.route!r} must start with '/'"]
            )

        description = substitute(page.meta.description, context) or context.company_description
        page_ctx: dict[str, Any] = {
            "component_name": to_component_name(page_key, "Page"),
            "title": page_title(page_key, page, context),
            "description": description,
            "route": page.route,
            "content_api_url": self.content_api_url,
            "body": render_modules(
                page.modules, context, PAGE_BODY_DEPTH, self.generator_name
            ),
        }
        return self.renderer.render_artifact(
            "pages/page.js.j2",
            f"pages/{page_file_name(page_key)}",
            ArtifactKind.PAGE,
            page_ctx,
        )

    def emit_app(self) -> GeneratedArtifact:
        return self.renderer.render_artifact(
            "pages/_app.js.j2", "pages/_app.js", ArtifactKind.APP, {}
        )

    # -- Components --------------------------------------------------------

    def emit_components(
        self, descriptor: ProjectDescriptor, context: ContentContext
    ) -> list[GeneratedArtifact]:
        """Shared layout files, fixed module stubs and per-module components."""
        shared_ctx = {
            "site_title": context.site_title,
            "company_description": context.company_description,
            "nav_links": NAV_LINKS,
            "generator_name": self.generator_name,
        }
        artifacts = self.renderer.render_tree("components", ArtifactKind.COMPONENT, shared_ctx)
        taken = {artifact.path for artifact in artifacts}

        for module in _top_level_modules_with_id(descriptor):
            artifact = self.emit_module_component(module, context)
            if artifact.path in taken:
                continue
            taken.add(artifact.path)
            artifacts.append(artifact)

        return artifacts

    def emit_module_component(
        self, module: ModuleNode, context: ContentContext
    ) -> GeneratedArtifact:
        """Standalone component rendering one module subtree."""
        name = to_component_name(module.id or module.tag, "Module")
        return self.renderer.render_artifact(
            "modules/module_component.js.j2",
            f"components/Modules/{name}.js",
            ArtifactKind.COMPONENT,
            {
                "module_id": module.id,
                "component_name": name,
                "body": render_module(module, context, MODULE_COMPONENT_DEPTH),
            },
        )


def _top_level_modules_with_id(descriptor: ProjectDescriptor) -> list[ModuleNode]:
    return [
        module
        for page in descriptor.structure.pages.values()
        for module in page.modules
        if module.id
    ]
