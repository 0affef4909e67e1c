"""Jinja2 template rendering for generated source files.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``sitesmith/compiler/templates/`` directory and renders them with
project-specific context data.  Rendering is pure: templates become strings
(or ``GeneratedArtifact`` objects) and only the materializer touches disk.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from .artifacts import ArtifactKind, GeneratedArtifact
from .markup import js_string, jsx_attr, jsx_text


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for the generated Next.js project.

    The renderer discovers ``.j2`` template files under a configurable
    template directory.  Templates receive a context dictionary with the
    site title, resolved theme, page data and so on.  Missing context
    variables raise instead of rendering as empty strings.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # JSX/JS-safe output filters
        self.env.filters["jsx_text"] = jsx_text
        self.env.filters["jsx_attr"] = jsx_attr
        self.env.filters["js_string"] = js_string

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"pages/page.js.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_artifact(
        self,
        template_path: str,
        output_path: str,
        kind: ArtifactKind,
        context: dict[str, Any],
    ) -> GeneratedArtifact:
        """Render *template_path* into an artifact destined for *output_path*."""
        return GeneratedArtifact(
            path=output_path,
            content=self.render(template_path, context),
            kind=kind,
        )

    def render_tree(
        self,
        template_prefix: str,
        kind: ArtifactKind,
        context: dict[str, Any],
        *,
        skip_patterns: list[str] | None = None,
    ) -> list[GeneratedArtifact]:
        """Render every ``*.j2`` file under *template_prefix* to an artifact.

        The directory structure is preserved and the ``.j2`` extension is
        dropped: ``components/Layout/Header.js.j2`` becomes the artifact
        ``components/Layout/Header.js``.

        Args:
            template_prefix: Subdirectory inside the template root to scan.
            kind: Kind assigned to every produced artifact.
            context: Template context variables.
            skip_patterns: Optional list of filename substrings to skip
                (templates rendered separately with a per-item context).

        Returns:
            Artifacts in sorted template order.
        """
        skip_patterns = skip_patterns or []
        prefix_path = self.template_dir / template_prefix
        if not prefix_path.is_dir():
            return []

        artifacts: list[GeneratedArtifact] = []
        for template_file in sorted(prefix_path.rglob("*.j2")):
            rel_str = template_file.relative_to(self.template_dir).as_posix()

            if any(pat in rel_str for pat in skip_patterns):
                continue

            output_name = rel_str[: -len(".j2")]
            artifacts.append(self.render_artifact(rel_str, output_name, kind, context))

        return artifacts

    # -- Utility -----------------------------------------------------------

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all ``.j2`` template paths under *prefix*.

        Paths are relative to the template root directory.
        """
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob("*.j2")
        )
