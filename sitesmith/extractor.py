"""Reverse extraction: rebuild a descriptor from a generated project.

Reads back what the compiler wrote (metadata record, header, page shells,
Tailwind theme, content seed) and assembles the closest descriptor it can.
Module trees are not recovered; every page comes back with an empty module
list.
"""

from __future__ import annotations

import json
import re
import traceback
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel

from sitesmith.config import Config
from sitesmith.descriptor.loader import parse_descriptor
from sitesmith.exceptions import DescriptorError
from sitesmith.utils import (
    capitalize,
    load_json,
    print_error,
    print_info,
    print_warning,
    sanitize_name,
)

_HOME_LINK = re.compile(r"<Link\s+href=\"/\"[^>]*>\s*(.*?)\s*</Link>", re.DOTALL)
_META_DESCRIPTION = re.compile(
    r"<meta\s+name=\"description\"\s+content=(\"[^\"]*\"|\{\".*?\"\})\s*/>", re.DOTALL
)
_TITLE = re.compile(r"<title>(.*?)</title>", re.DOTALL)
_ROUTE = re.compile(r"data-route=(\"[^\"]*\"|\{\".*?\"\})")
_COLOR = "{name}:\\s*['\"`]([^'\"`]+)['\"`]"
_FONT = "{name}:\\s*\\[\\s*['\"`]([^'\"`]+)['\"`]"


class ExtractResult(BaseModel):
    """Outcome of one extraction; mirrors ``CompileResult``'s failure policy."""

    success: bool
    descriptor: Optional[dict[str, Any]] = None
    error: Optional[str] = None
    stack: Optional[str] = None


def decode_jsx_value(raw: str) -> str:
    """Undo the compiler's JSX quoting: ``"x"``, ``{"x"}`` or bare text."""
    value = raw.strip()
    if value.startswith("{") and value.endswith("}"):
        value = value[1:-1].strip()
    if value.startswith('"') and value.endswith('"'):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value[1:-1]
    return value


class ProjectExtractor:
    """Builds a descriptor dict from a generated project directory."""

    def __init__(self, metadata_file: str | None = None, verbose: bool = False) -> None:
        # Defaults to the record the compiler writes, ``<generator_name>.json``.
        self.metadata_file = metadata_file or f"{Config().generator_name}.json"
        self.verbose = verbose

    def extract(self, project_dir: str | Path) -> ExtractResult:
        """Extract a descriptor; failures are returned, never raised."""
        try:
            descriptor = self.extract_descriptor(Path(project_dir))
            return ExtractResult(success=True, descriptor=descriptor)
        except Exception as exc:
            print_error(f"Extraction failed: {exc}")
            return ExtractResult(success=False, error=str(exc), stack=traceback.format_exc())

    def extract_descriptor(self, root: Path) -> dict[str, Any]:
        """Raising variant of :meth:`extract`; the result is validated."""
        metadata_path = root / self.metadata_file
        if not metadata_path.is_file():
            raise DescriptorError(
                f"{self.metadata_file} not found - {root} is not a generated project",
                metadata_path,
            )
        metadata = load_json(metadata_path)
        self._log(f"Loaded metadata: {metadata.get('projectId')}")

        project_id = metadata.get("projectId") or sanitize_name(root.name)
        descriptor: dict[str, Any] = {
            "meta": {
                "projectId": project_id,
                "version": metadata.get("version") or "1.0.0",
                "title": self.extract_title(root) or project_id,
                "description": self.extract_description(root),
                "createdAt": metadata.get("generated"),
                "modifiedAt": metadata.get("generated"),
            },
            "config": self.extract_config(root, metadata),
            "structure": {"pages": self.extract_pages(root)},
            "contentSchema": self.extract_content_schema(root),
        }
        return parse_descriptor(descriptor).to_json_dict()

    # -- Individual extractors ---------------------------------------------

    def extract_title(self, root: Path) -> str | None:
        """Text of the header's home link."""
        header = _read(root / "components" / "Layout" / "Header.js")
        match = _HOME_LINK.search(header or "")
        title = decode_jsx_value(match.group(1)) if match else None
        self._log(f"Extracted title: {title!r}")
        return title

    def extract_description(self, root: Path) -> str | None:
        """``<meta name="description">`` of the index page."""
        index = _read(root / "pages" / "index.js")
        match = _META_DESCRIPTION.search(index or "")
        return decode_jsx_value(match.group(1)) if match else None

    def extract_config(self, root: Path, metadata: dict[str, Any]) -> dict[str, Any]:
        config: dict[str, Any] = {}
        site = metadata.get("site") or {}
        if site.get("domain"):
            config["domain"] = site["domain"]
            config["tlsEnabled"] = str(site.get("url", "")).startswith("https://")

        tailwind = _read(root / "tailwind.config.js")
        if tailwind:
            colors = _match_all(tailwind, _COLOR, ("primary", "secondary", "accent"))
            if colors:
                config["colors"] = colors
            fonts = _match_all(tailwind, _FONT, ("heading", "body"))
            if fonts:
                config["fonts"] = fonts
        return config

    def extract_pages(self, root: Path) -> dict[str, Any]:
        """Top-level page files; ``_*`` files and API/admin directories are skipped."""
        pages_dir = root / "pages"
        if not pages_dir.is_dir():
            raise DescriptorError(f"Pages directory not found: {pages_dir}", pages_dir)

        pages: dict[str, Any] = {}
        for page_file in sorted(pages_dir.glob("*.js")):
            if page_file.name.startswith("_"):
                continue
            key = "home" if page_file.name == "index.js" else page_file.stem
            source = _read(page_file) or ""
            route_match = _ROUTE.search(source)
            route = (
                decode_jsx_value(route_match.group(1))
                if route_match
                else ("/" if key == "home" else f"/{key}")
            )
            page: dict[str, Any] = {"route": route, "modules": []}
            title_match = _TITLE.search(source)
            if title_match:
                page["meta"] = {"title": decode_jsx_value(title_match.group(1))}
            pages[key] = page
        if not pages:
            print_warning(f"No pages found in {pages_dir}")
        # Home first, like the editor lays pages out.
        if "home" in pages:
            pages = {"home": pages.pop("home"), **pages}
        return pages

    def extract_content_schema(self, root: Path) -> dict[str, Any]:
        """Rebuild a text-only schema from the content seed, if present."""
        seed_path = root / "database" / "content.json"
        if not seed_path.is_file():
            return {}
        seed = load_json(seed_path)
        schema: dict[str, Any] = {}
        for entity, fields in seed.items():
            if not isinstance(fields, dict):
                continue
            schema[entity] = {
                name: {
                    "type": "text",
                    "label": capitalize(name.replace("_", " ")),
                    "default": value,
                }
                for name, value in fields.items()
            }
        return schema

    def _log(self, message: str) -> None:
        if self.verbose:
            print_info(message)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _read(path: Path) -> str | None:
    if not path.is_file():
        return None
    return path.read_text(encoding="utf-8")


def _match_all(source: str, pattern: str, names: tuple[str, ...]) -> dict[str, str]:
    found: dict[str, str] = {}
    for name in names:
        match = re.search(pattern.format(name=name), source)
        if match:
            found[name] = match.group(1)
    return found
