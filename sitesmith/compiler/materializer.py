"""Writes generated artifacts to the output directory.

The materializer is the only component with durable side effects.  Every
run is a full rebuild: the project directory is removed, the skeleton is
recreated, then artifacts are written one at a time in list order.

Writes are not transactional.  If an operation fails the run aborts with a
``MaterializeError`` and whatever was already written stays on disk.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from pydantic import BaseModel, Field

from sitesmith.exceptions import MaterializeError

from .artifacts import ArtifactKind, GeneratedArtifact

SKELETON_DIRS: list[str] = [
    "pages",
    "pages/api",
    "pages/admin",
    "pages/api/admin",
    "pages/api/content",
    "components",
    "components/Layout",
    "components/Modules",
    "lib",
    "lib/database",
    "database",
    "styles",
    "public",
]


class ProjectStats(BaseModel):
    """Counts reported after a successful materialization."""

    total_files: int = 0
    pages: int = 0
    components: int = 0
    configs: int = 0
    api: int = 0
    admin: int = 0

    @classmethod
    def from_artifacts(
        cls, artifacts: list[GeneratedArtifact], total_files: int
    ) -> "ProjectStats":
        kinds = [artifact.kind for artifact in artifacts]
        return cls(
            total_files=total_files,
            pages=kinds.count(ArtifactKind.PAGE),
            components=kinds.count(ArtifactKind.COMPONENT),
            configs=kinds.count(ArtifactKind.CONFIG),
            api=kinds.count(ArtifactKind.API),
            admin=kinds.count(ArtifactKind.ADMIN_PAGE),
        )


class MaterializeReport(BaseModel):
    """Realized file list plus statistics."""

    project_path: Path
    files: list[str] = Field(default_factory=list)
    stats: ProjectStats = Field(default_factory=ProjectStats)


class Materializer:
    """Clears, recreates and fills a project output directory."""

    def __init__(self, skeleton: list[str] | None = None) -> None:
        self.skeleton = list(skeleton) if skeleton is not None else list(SKELETON_DIRS)

    async def materialize(
        self, project_path: str | Path, artifacts: list[GeneratedArtifact]
    ) -> MaterializeReport:
        """Rebuild *project_path* from *artifacts*.

        Raises:
            MaterializeError: On the first failing file-system operation.
        """
        root = Path(project_path)
        await self.prepare(root)
        for artifact in artifacts:
            await self.write_artifact(root, artifact)

        files = await self.list_files(root)
        return MaterializeReport(
            project_path=root,
            files=files,
            stats=ProjectStats.from_artifacts(artifacts, len(files)),
        )

    async def prepare(self, root: Path) -> None:
        """Remove any previous output and create the directory skeleton."""
        if root.exists():
            try:
                await asyncio.to_thread(_remove, root)
            except OSError as exc:
                raise MaterializeError(root, exc) from exc

        for directory in self.skeleton:
            target = root / directory
            try:
                await asyncio.to_thread(target.mkdir, parents=True, exist_ok=True)
            except OSError as exc:
                raise MaterializeError(target, exc) from exc

    async def write_artifact(self, root: Path, artifact: GeneratedArtifact) -> Path:
        target = root / artifact.path
        try:
            await asyncio.to_thread(_write_file, target, artifact.content)
        except OSError as exc:
            raise MaterializeError(target, exc) from exc
        return target

    async def list_files(self, root: Path) -> list[str]:
        """Sorted POSIX paths of every file under *root*, relative to it."""
        return await asyncio.to_thread(_list_files, root)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _list_files(root: Path) -> list[str]:
    return sorted(
        p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file()
    )
