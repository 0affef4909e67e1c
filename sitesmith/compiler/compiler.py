"""Main compilation orchestrator.

Takes a ``ProjectDescriptor`` (or the raw descriptor dict) and generates a
complete Next.js project: pages, layout and module components, build
configuration, package manifest, generation metadata and the schema-driven
admin interface with its content API.
"""

from __future__ import annotations

import time
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Optional

from pydantic import BaseModel, Field

from sitesmith.config import Config
from sitesmith.descriptor.loader import load_descriptor, parse_descriptor
from sitesmith.descriptor.models import ProjectDescriptor
from sitesmith.exceptions import DescriptorSchemaError
from sitesmith.utils import format_duration, print_error, print_info

from .admin_gen import AdminGenerator
from .artifacts import GeneratedArtifact
from .config_gen import ConfigEmitter, format_timestamp
from .materializer import Materializer, ProjectStats
from .page_gen import PageEmitter
from .store import InMemoryContentStore, StoreFactory
from .substitution import ContentContext
from .templates import TemplateRenderer

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Result model
# ---------------------------------------------------------------------------


class CompileResult(BaseModel):
    """Outcome of one compilation run.

    On failure ``error`` holds a human-readable message, ``errors`` the
    located schema problems (if any) and ``stack`` the formatted traceback.
    """

    success: bool
    project_id: Optional[str] = None
    project_path: Optional[Path] = None
    generated_at: Optional[str] = None
    duration: float = 0.0
    files: list[str] = Field(default_factory=list)
    stats: ProjectStats = Field(default_factory=ProjectStats)
    error: Optional[str] = None
    errors: list[str] = Field(default_factory=list)
    stack: Optional[str] = None


# ---------------------------------------------------------------------------
# Compiler
# ---------------------------------------------------------------------------


class SiteCompiler:
    """Compiles project descriptors into source trees.

    Each call builds its artifact list from scratch; the compiler keeps no
    state between runs.

    Args:
        config: Runtime configuration.  Defaults to ``Config()``.
        clock: Returns the generation timestamp.  Inject a fixed clock for
            reproducible output.
        store_factory: Content store used to seed the admin interface.
        template_dir: Override the bundled Jinja2 templates.
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        clock: Clock | None = None,
        store_factory: StoreFactory = InMemoryContentStore,
        template_dir: str | Path | None = None,
    ) -> None:
        self.config = config or Config()
        self.clock = clock or utc_now
        self.renderer = TemplateRenderer(template_dir)
        self.materializer = Materializer()
        self.page_emitter = PageEmitter(
            self.renderer, self.config.content_api_url, self.config.generator_name
        )
        self.config_emitter = ConfigEmitter(
            self.renderer,
            self.config.theme,
            self.config.generator_name,
            self.config.generator_version,
        )
        self.admin_gen = AdminGenerator(self.renderer, store_factory)

    # -- Public API --------------------------------------------------------

    def build_artifacts(
        self,
        descriptor: ProjectDescriptor,
        generated_at: datetime | None = None,
    ) -> list[GeneratedArtifact]:
        """Produce every artifact for *descriptor* without touching disk.

        Order: manifest, build configs, pages, components, styles, metadata,
        app shell, then the admin artifacts.
        """
        generated_at = generated_at or self.clock()
        context = ContentContext.from_meta(descriptor.meta)

        self._log("Generating package.json...")
        artifacts = [self.config_emitter.emit_manifest(descriptor, generated_at)]

        self._log("Generating configs...")
        artifacts.extend(self.config_emitter.emit_configs(descriptor))

        self._log(f"Generating pages: {', '.join(descriptor.structure.pages)}")
        artifacts.extend(self.page_emitter.emit_pages(descriptor, context))

        self._log("Generating components...")
        artifacts.extend(self.page_emitter.emit_components(descriptor, context))

        self._log("Generating styles...")
        artifacts.append(self.config_emitter.emit_styles(descriptor))

        self._log("Generating metadata...")
        artifacts.append(self.config_emitter.emit_metadata(descriptor, generated_at))
        artifacts.append(self.page_emitter.emit_app())

        self._log(f"Generating admin interface: {', '.join(descriptor.content_schema) or '(no entities)'}")
        artifacts.extend(self.admin_gen.generate(descriptor))
        return self.admin_gen.update_manifest(artifacts)

    async def compile(
        self,
        descriptor: ProjectDescriptor | dict[str, Any],
        output_path: str | Path | None = None,
    ) -> CompileResult:
        """Compile *descriptor* and write the project to disk.

        Args:
            descriptor: A validated descriptor or the raw JSON dict.
            output_path: Target project directory.  Defaults to
                ``<config.output_dir>/<meta.projectId>``.

        Returns:
            A ``CompileResult``; failures are reported through it and never
            raised.
        """
        start = time.monotonic()
        try:
            project = parse_descriptor(descriptor)
            project_path = (
                Path(output_path)
                if output_path is not None
                else self.config.project_path(project.project_id)
            )
            self._log(f"Compiling {project.project_id} -> {project_path}")

            generated_at = self.clock()
            artifacts = self.build_artifacts(project, generated_at)
            report = await self.materializer.materialize(project_path, artifacts)

            duration = time.monotonic() - start
            self._log(f"Compilation completed in {format_duration(duration)}")
            return CompileResult(
                success=True,
                project_id=project.project_id,
                project_path=report.project_path,
                generated_at=format_timestamp(generated_at),
                duration=duration,
                files=report.files,
                stats=report.stats,
            )
        except Exception as exc:
            return self._failure(exc, start)

    async def compile_file(
        self, path: str | Path, output_path: str | Path | None = None
    ) -> CompileResult:
        """Load the descriptor at *path*, then :meth:`compile` it.

        Input errors are reported before any output is produced.
        """
        start = time.monotonic()
        try:
            descriptor = load_descriptor(path)
        except Exception as exc:
            return self._failure(exc, start)
        return await self.compile(descriptor, output_path)

    # -- Internals ---------------------------------------------------------

    def _failure(self, exc: Exception, start: float) -> CompileResult:
        print_error(f"Compilation failed: {exc}")
        return CompileResult(
            success=False,
            duration=time.monotonic() - start,
            error=str(exc),
            errors=exc.errors if isinstance(exc, DescriptorSchemaError) else [],
            stack=traceback.format_exc(),
        )

    def _log(self, message: str) -> None:
        if self.config.verbose:
            print_info(message)
