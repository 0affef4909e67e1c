"""Pydantic v2 models for the project descriptor.

The descriptor is the JSON document the editor exports: project metadata, the
visual configuration, the page -> module tree, and the content schema that
drives the generated admin interface.  Field names follow the JSON
(camelCase) through aliases; Python code uses the snake_case attributes.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Keys that become file or directory names in the generated project.
SLUG_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")

# Directories under pages/ owned by the generated admin interface.
RESERVED_PAGE_KEYS = frozenset({"admin", "api"})


def page_file_name(page_key: str) -> str:
    """``home`` maps to the index page; every other key to ``<key>.js``."""
    return "index.js" if page_key == "home" else f"{page_key}.js"


class _DescriptorModel(BaseModel):
    """Base for all descriptor models: accepts both aliases and field names."""

    model_config = ConfigDict(populate_by_name=True)


# ---------------------------------------------------------------------------
# Metadata & visual configuration
# ---------------------------------------------------------------------------


class ProjectMeta(_DescriptorModel):
    """Identity of the project being generated."""

    project_id: str = Field(..., alias="projectId", description="Slug-shaped unique id")
    version: str = Field(default="1.0.0")
    title: Optional[str] = Field(default=None, description="Site / company name")
    description: Optional[str] = Field(default=None)
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    modified_at: Optional[str] = Field(default=None, alias="modifiedAt")

    @field_validator("project_id")
    @classmethod
    def _project_id_is_slug(cls, value: str) -> str:
        if not SLUG_PATTERN.match(value):
            raise ValueError(
                f"projectId {value!r} must be slug-shaped (letters, digits, '-' or '_')"
            )
        return value


class ColorConfig(_DescriptorModel):
    primary: Optional[str] = None
    secondary: Optional[str] = None
    accent: Optional[str] = None


class FontConfig(_DescriptorModel):
    heading: Optional[str] = None
    body: Optional[str] = None


class SiteConfig(_DescriptorModel):
    """Visual and hosting configuration.  Every field is optional."""

    domain: Optional[str] = None
    tls_enabled: bool = Field(default=False, alias="tlsEnabled")
    colors: ColorConfig = Field(default_factory=ColorConfig)
    fonts: FontConfig = Field(default_factory=FontConfig)


# ---------------------------------------------------------------------------
# Page tree
# ---------------------------------------------------------------------------


class ModuleNode(_DescriptorModel):
    """One node of the recursive page-content tree.

    A node is either a container (non-empty ``children``) or a leaf holding
    literal ``content``.  When both are set the children win and ``content``
    is ignored.
    """

    id: Optional[str] = Field(default=None, description="Stable key, optional")
    tag: str = Field(default="section", description="Markup element name")
    class_name: Optional[str] = Field(default=None, alias="className")
    content: Optional[str] = Field(default=None, description="Literal text, may hold placeholders")
    children: list[ModuleNode] = Field(default_factory=list)


class PageMeta(_DescriptorModel):
    title: Optional[str] = None
    description: Optional[str] = None


class Page(_DescriptorModel):
    """A single routed page and its module tree."""

    route: str = Field(..., description="Leading-slash path, e.g. '/about'")
    meta: PageMeta = Field(default_factory=PageMeta)
    modules: list[ModuleNode] = Field(default_factory=list)

    @field_validator("route")
    @classmethod
    def _route_has_leading_slash(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError(f"route {value!r} must start with '/'")
        return value


class SiteStructure(_DescriptorModel):
    pages: dict[str, Page] = Field(..., description="Ordered page key -> page mapping")

    @field_validator("pages")
    @classmethod
    def _page_keys_map_to_distinct_files(cls, value: dict[str, Page]) -> dict[str, Page]:
        files: dict[str, str] = {}
        for key in value:
            if not SLUG_PATTERN.match(key):
                raise ValueError(
                    f"page key {key!r} must be slug-shaped (letters, digits, '-' or '_')"
                )
            if key.casefold() in RESERVED_PAGE_KEYS:
                raise ValueError(f"page key {key!r} is reserved for the generated admin routes")
            # Case-insensitive file systems would merge these too.
            file_name = page_file_name(key)
            first = files.setdefault(file_name.casefold(), key)
            if first != key:
                raise ValueError(
                    f"page key {key!r} collides with {first!r} (pages/{file_name})"
                )
        return value


# ---------------------------------------------------------------------------
# Content schema
# ---------------------------------------------------------------------------


class FieldSchema(_DescriptorModel):
    """Describes one editable content field of an entity."""

    type: str = Field(default="text", description="text | email | tel | textarea | ...")
    label: Optional[str] = Field(default=None, description="Display name")
    required: bool = Field(default=False)
    default: Optional[Any] = Field(default=None, description="Initial value")
    placeholder: Optional[str] = Field(default=None)


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


class ProjectDescriptor(_DescriptorModel):
    """The complete, read-only input of one compilation run."""

    meta: ProjectMeta
    config: SiteConfig = Field(default_factory=SiteConfig)
    structure: SiteStructure
    content_schema: dict[str, dict[str, FieldSchema]] = Field(
        default_factory=dict, alias="contentSchema"
    )

    @property
    def project_id(self) -> str:
        return self.meta.project_id

    def to_json_dict(self) -> dict[str, Any]:
        """Dump back to the camelCase JSON shape the editor produces."""
        return self.model_dump(by_alias=True, exclude_none=True)


ModuleNode.model_rebuild()
