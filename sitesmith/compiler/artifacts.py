"""Generated artifacts: a relative output path plus its contents."""

from __future__ import annotations

from enum import Enum
from pathlib import PurePosixPath

from pydantic import BaseModel, Field, field_validator


class ArtifactKind(str, Enum):
    """What an artifact is, used for statistics and lookups."""
    PAGE = "page"
    APP = "app"
    COMPONENT = "component"
    CONFIG = "config"
    STYLE = "style"
    MANIFEST = "manifest"
    METADATA = "metadata"
    ADMIN_PAGE = "admin_page"
    API = "api"
    LIBRARY = "library"
    SEED = "seed"


class GeneratedArtifact(BaseModel):
    """One output file before it is written to disk."""

    path: str = Field(..., description="POSIX path relative to the project root")
    content: str
    kind: ArtifactKind

    @field_validator("path")
    @classmethod
    def _path_is_relative(cls, value: str) -> str:
        pure = PurePosixPath(value)
        if pure.is_absolute() or ".." in pure.parts or not pure.parts:
            raise ValueError(f"artifact path {value!r} must be relative to the project root")
        return str(pure)


def find_artifact(artifacts: list[GeneratedArtifact], path: str) -> GeneratedArtifact | None:
    """Return the artifact written to *path*, if any."""
    for artifact in artifacts:
        if artifact.path == path:
            return artifact
    return None


def replace_artifact(
    artifacts: list[GeneratedArtifact], replacement: GeneratedArtifact
) -> list[GeneratedArtifact]:
    """Swap the artifact at ``replacement.path`` in place, keeping its position.

    Appends when no artifact has that path yet.
    """
    for index, artifact in enumerate(artifacts):
        if artifact.path == replacement.path:
            artifacts[index] = replacement
            return artifacts
    artifacts.append(replacement)
    return artifacts
