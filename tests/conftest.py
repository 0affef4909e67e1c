"""Shared pytest fixtures for the sitesmith test suite.

Provides reusable fixtures for:
- Minimal and feature-rich project descriptors (raw dicts and models)
- Descriptor files on disk
- A fixed clock and a compiler wired to it
"""

from __future__ import annotations

import copy
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

from sitesmith.compiler import SiteCompiler, TemplateRenderer
from sitesmith.compiler.substitution import ContentContext
from sitesmith.config import Config
from sitesmith.descriptor import ProjectDescriptor


FIXED_TIME = datetime(2024, 3, 1, 12, 30, 45, 123000, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Descriptor data
# ---------------------------------------------------------------------------

ACME_DESCRIPTOR: dict[str, Any] = {
    "meta": {"projectId": "acme", "title": "Acme"},
    "structure": {
        "pages": {
            "home": {
                "route": "/",
                "modules": [{"tag": "h1", "content": "Welcome to {{company.name}}"}],
            }
        }
    },
    "contentSchema": {
        "contact": {
            "email": {"type": "email", "label": "Email", "default": "a@b.c"}
        }
    },
}

RICH_DESCRIPTOR: dict[str, Any] = {
    "meta": {
        "projectId": "dubois-plomberie",
        "version": "2.1.0",
        "title": "Dubois Plomberie",
        "description": "Plumbing in Lyon since 1987",
        "createdAt": "2024-01-10T09:00:00.000Z",
    },
    "config": {
        "domain": "dubois.example",
        "tlsEnabled": True,
        "colors": {"primary": "#1E40AF", "accent": "#F59E0B"},
        "fonts": {"heading": "Poppins"},
    },
    "structure": {
        "pages": {
            "home": {
                "route": "/",
                "meta": {"title": "{{site.title}} - Home"},
                "modules": [
                    {
                        "id": "hero",
                        "tag": "section",
                        "className": "hero py-20",
                        "content": "ignored because children win",
                        "children": [
                            {"tag": "h1", "content": "{{company.name}}"},
                            {"tag": "p", "content": "{{company.description}}"},
                        ],
                    },
                    {"id": "services-list", "tag": "ul", "children": [
                        {"tag": "li", "content": "Repairs"},
                        {"tag": "li", "content": "Installation"},
                    ]},
                ],
            },
            "services": {
                "route": "/services",
                "meta": {"description": "What we do"},
                "modules": [{"tag": "h2", "content": "Our {{unknown.value}} services"}],
            },
            "contact": {"route": "/contact", "modules": []},
        }
    },
    "contentSchema": {
        "company": {
            "name": {"type": "text", "label": "Company name", "required": True,
                     "default": "Dubois Plomberie"},
            "about": {"type": "textarea", "label": "About"},
        },
        "contact": {
            "email": {"type": "email", "default": "contact@dubois.example"},
            "phone": {"type": "tel", "placeholder": "04 00 00 00 00"},
        },
    },
}


@pytest.fixture
def acme_data() -> dict[str, Any]:
    """The smallest useful descriptor, as raw JSON data."""
    return copy.deepcopy(ACME_DESCRIPTOR)


@pytest.fixture
def rich_data() -> dict[str, Any]:
    """A descriptor exercising nesting, placeholders, config and schema types."""
    return copy.deepcopy(RICH_DESCRIPTOR)


@pytest.fixture
def acme(acme_data: dict[str, Any]) -> ProjectDescriptor:
    return ProjectDescriptor.model_validate(acme_data)


@pytest.fixture
def rich(rich_data: dict[str, Any]) -> ProjectDescriptor:
    return ProjectDescriptor.model_validate(rich_data)


@pytest.fixture
def rich_context(rich: ProjectDescriptor) -> ContentContext:
    return ContentContext.from_meta(rich.meta)


# ---------------------------------------------------------------------------
# Files & directories
# ---------------------------------------------------------------------------

@pytest.fixture
def write_descriptor(tmp_path: Path):
    """Factory writing a descriptor dict (or raw text) to ``tmp_path``."""

    def _write(data: dict[str, Any] | str, name: str = "site.json") -> Path:
        path = tmp_path / name
        text = data if isinstance(data, str) else json.dumps(data, indent=2)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Base output directory for compiled projects."""
    return tmp_path / "output"


# ---------------------------------------------------------------------------
# Compiler
# ---------------------------------------------------------------------------

@pytest.fixture
def fixed_clock():
    return lambda: FIXED_TIME


@pytest.fixture
def config(output_dir: Path) -> Config:
    return Config(output_dir=output_dir)


@pytest.fixture
def compiler(config: Config, fixed_clock) -> SiteCompiler:
    """A compiler with a deterministic clock writing under ``output_dir``."""
    return SiteCompiler(config, clock=fixed_clock)


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()
