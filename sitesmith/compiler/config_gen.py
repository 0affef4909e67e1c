"""Build configuration, package manifest and generation metadata.

Everything here is derived from the descriptor's ``config`` and ``meta``
with a default for every missing field; nothing is validated beyond that.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sitesmith.config import ThemeDefaults
from sitesmith.descriptor.models import ProjectDescriptor, SiteConfig
from sitesmith.utils import dump_json

from .artifacts import ArtifactKind, GeneratedArtifact
from .templates import TemplateRenderer

MANIFEST_PATH = "package.json"

RUNTIME_DEPENDENCIES: dict[str, str] = {
    "next": "^14.1.0",
    "react": "^18.2.0",
    "react-dom": "^18.2.0",
}

DEV_DEPENDENCIES: dict[str, str] = {
    "autoprefixer": "^10.4.17",
    "eslint": "^8.56.0",
    "eslint-config-next": "^14.1.0",
    "postcss": "^8.4.33",
    "tailwindcss": "^3.4.1",
}

SCRIPTS: dict[str, str] = {
    "dev": "next dev",
    "build": "next build",
    "start": "next start",
    "lint": "next lint",
}

# Template -> (output path, kind)
_CONFIG_FILES: dict[str, tuple[str, ArtifactKind]] = {
    "config/next.config.js.j2": ("next.config.js", ArtifactKind.CONFIG),
    "config/tailwind.config.js.j2": ("tailwind.config.js", ArtifactKind.CONFIG),
    "config/postcss.config.js.j2": ("postcss.config.js", ArtifactKind.CONFIG),
}


def format_timestamp(moment: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a ``Z`` suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    utc = moment.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def resolve_theme(config: SiteConfig, defaults: ThemeDefaults) -> ThemeDefaults:
    """Fill every missing color/font in *config* from *defaults*."""
    return ThemeDefaults(
        primary=config.colors.primary or defaults.primary,
        secondary=config.colors.secondary or defaults.secondary,
        accent=config.colors.accent or defaults.accent,
        heading_font=config.fonts.heading or defaults.heading_font,
        body_font=config.fonts.body or defaults.body_font,
    )


def site_url(config: SiteConfig) -> str | None:
    """Public URL of the site, when a domain is configured."""
    if not config.domain:
        return None
    scheme = "https" if config.tls_enabled else "http"
    return f"{scheme}://{config.domain}"


class ConfigEmitter:
    """Emits build configuration, styling, manifest and metadata artifacts."""

    def __init__(
        self,
        renderer: TemplateRenderer,
        theme_defaults: ThemeDefaults,
        generator_name: str,
        generator_version: str,
    ) -> None:
        self.renderer = renderer
        self.theme_defaults = theme_defaults
        self.generator_name = generator_name
        self.generator_version = generator_version

    def emit_configs(self, descriptor: ProjectDescriptor) -> list[GeneratedArtifact]:
        """``next.config.js``, ``tailwind.config.js`` and ``postcss.config.js``."""
        ctx = {"theme": resolve_theme(descriptor.config, self.theme_defaults)}
        return [
            self.renderer.render_artifact(template, output, kind, ctx)
            for template, (output, kind) in _CONFIG_FILES.items()
        ]

    def emit_styles(self, descriptor: ProjectDescriptor) -> GeneratedArtifact:
        ctx = {"theme": resolve_theme(descriptor.config, self.theme_defaults)}
        return self.renderer.render_artifact(
            "config/globals.css.j2", "styles/globals.css", ArtifactKind.STYLE, ctx
        )

    # -- Manifest ----------------------------------------------------------

    def build_manifest(
        self,
        descriptor: ProjectDescriptor,
        generated_at: datetime,
        extra_dependencies: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """The ``package.json`` payload as a dict."""
        meta = descriptor.meta
        display_name = meta.title or meta.project_id
        manifest: dict[str, Any] = {
            "name": meta.project_id,
            "version": meta.version,
            "private": True,
            "description": f"Site generated by {self.generator_name} - {display_name}",
            "scripts": dict(SCRIPTS),
            "dependencies": {**RUNTIME_DEPENDENCIES, **(extra_dependencies or {})},
            "devDependencies": dict(DEV_DEPENDENCIES),
        }
        url = site_url(descriptor.config)
        if url:
            manifest["homepage"] = url
        manifest[self.generator_name] = {
            "generated": format_timestamp(generated_at),
            "version": self.generator_version,
            "originalProject": f"{meta.project_id}.json",
        }
        return manifest

    def emit_manifest(
        self,
        descriptor: ProjectDescriptor,
        generated_at: datetime,
        extra_dependencies: dict[str, str] | None = None,
    ) -> GeneratedArtifact:
        manifest = self.build_manifest(descriptor, generated_at, extra_dependencies)
        return GeneratedArtifact(
            path=MANIFEST_PATH, content=dump_json(manifest), kind=ArtifactKind.MANIFEST
        )

    # -- Metadata ----------------------------------------------------------

    @property
    def metadata_path(self) -> str:
        return f"{self.generator_name}.json"

    def build_metadata(
        self, descriptor: ProjectDescriptor, generated_at: datetime
    ) -> dict[str, Any]:
        """Provenance record written next to the manifest."""
        meta = descriptor.meta
        metadata: dict[str, Any] = {
            "projectId": meta.project_id,
            "version": meta.version,
            "generated": format_timestamp(generated_at),
            "generator": {
                "name": self.generator_name,
                "version": self.generator_version,
                "parser": "json-to-react",
                "originalFile": f"{meta.project_id}.json",
            },
        }
        url = site_url(descriptor.config)
        if url:
            metadata["site"] = {"domain": descriptor.config.domain, "url": url}
        return metadata

    def emit_metadata(
        self, descriptor: ProjectDescriptor, generated_at: datetime
    ) -> GeneratedArtifact:
        return GeneratedArtifact(
            path=self.metadata_path,
            content=dump_json(self.build_metadata(descriptor, generated_at)),
            kind=ArtifactKind.METADATA,
        )
