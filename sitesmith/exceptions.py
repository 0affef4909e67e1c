"""Exception hierarchy for sitesmith."""

from __future__ import annotations

from pathlib import Path


class SitesmithError(Exception):
    """Base class for every error raised by sitesmith."""


class DescriptorError(SitesmithError):
    """Raised when a descriptor file is missing, unreadable, or not JSON."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else None
        super().__init__(message)


class DescriptorSchemaError(DescriptorError):
    """Raised when a descriptor does not match the expected shape.

    ``errors`` holds one ``"<location>: <message>"`` entry per problem so the
    caller can point at the faulty page or entity.
    """

    def __init__(
        self,
        errors: list[str],
        path: str | Path | None = None,
    ) -> None:
        self.errors = list(errors)
        summary = "; ".join(self.errors) if self.errors else "invalid descriptor"
        super().__init__(f"Invalid project descriptor: {summary}", path)


class MaterializeError(SitesmithError):
    """Raised when clearing or writing the output tree fails."""

    def __init__(self, path: str | Path, cause: OSError) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Failed to write {self.path}: {cause}")
