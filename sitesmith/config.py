"""sitesmith configuration.

Centralised, typed configuration for the compiler.  All settings use
Pydantic v2 models so they can be validated at construction time and
serialised to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field

from sitesmith import __version__


class ThemeDefaults(BaseModel):
    """Fallback visual settings used when a descriptor's ``config`` omits them."""

    primary: str = Field(default="#3B82F6")
    secondary: str = Field(default="#EF4444")
    accent: str = Field(default="#10B981")
    heading_font: str = Field(default="Inter")
    body_font: str = Field(default="Inter")


class Config(BaseModel):
    """Global sitesmith configuration.

    Instances are typically created once by the CLI entry point and passed
    to ``SiteCompiler``.
    """

    output_dir: Path = Field(default=Path("./output"))
    verbose: bool = Field(default=False)
    content_api_url: str = Field(
        default="http://localhost:3201/api/content",
        description="URL generated pages fetch their content from at request time",
    )
    theme: ThemeDefaults = Field(default_factory=ThemeDefaults)
    generator_name: str = Field(default="sitesmith")
    generator_version: str = Field(default=__version__)

    def project_path(self, project_id: str) -> Path:
        """Directory a project with *project_id* is generated into."""
        return self.output_dir / project_id

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            SITESMITH_OUTPUT_DIR, SITESMITH_VERBOSE, SITESMITH_CONTENT_API_URL.
        """
        kwargs: dict[str, object] = {}
        if os.environ.get("SITESMITH_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["SITESMITH_OUTPUT_DIR"])
        if os.environ.get("SITESMITH_VERBOSE"):
            kwargs["verbose"] = os.environ["SITESMITH_VERBOSE"].strip().lower() in (
                "1",
                "true",
                "yes",
                "on",
            )
        if os.environ.get("SITESMITH_CONTENT_API_URL"):
            kwargs["content_api_url"] = os.environ["SITESMITH_CONTENT_API_URL"]
        return cls(**kwargs)
