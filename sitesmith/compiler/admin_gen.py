"""Schema-driven admin interface generation.

Generates, from ``contentSchema`` alone:
- ``pages/admin/index.js``        -- one form per entity + debug view of the store
- ``pages/api/content/index.js``  -- read endpoint returning the current store
- ``pages/api/admin/content.js``  -- write endpoint merging ``(entity, field, value)``
- ``lib/contentStore.js``         -- store seeded with the schema defaults
- ``lib/database/index.js``       -- persistence configuration stub
- ``database/content.json``       -- the default store as plain JSON

The page/module tree is never consulted.
"""

from __future__ import annotations

import json
from typing import Any

from sitesmith.descriptor.models import FieldSchema, ProjectDescriptor
from sitesmith.utils import capitalize, dump_json

from .artifacts import ArtifactKind, GeneratedArtifact, find_artifact, replace_artifact
from .config_gen import MANIFEST_PATH
from .store import ContentData, ContentStore, InMemoryContentStore, StoreFactory, build_default_content
from .templates import TemplateRenderer

ADMIN_DEPENDENCIES: dict[str, str] = {"better-sqlite3": "^8.7.0"}

ADMIN_PAGE_PATH = "pages/admin/index.js"
CONTENT_API_PATH = "pages/api/content/index.js"
ADMIN_CONTENT_API_PATH = "pages/api/admin/content.js"
CONTENT_STORE_PATH = "lib/contentStore.js"
DATABASE_CONFIG_PATH = "lib/database/index.js"
CONTENT_SEED_PATH = "database/content.json"

# Field types rendered as <input type="..."> unchanged; anything else is "text".
HTML_INPUT_TYPES = frozenset({
    "text",
    "email",
    "tel",
    "url",
    "number",
    "password",
    "date",
    "time",
    "datetime-local",
    "color",
    "search",
})


def input_type_for(field_type: str) -> str:
    """Map a schema field type to an HTML ``<input>`` type."""
    lowered = field_type.lower()
    return lowered if lowered in HTML_INPUT_TYPES else "text"


def field_label(name: str, field: FieldSchema) -> str:
    return field.label or capitalize(name.replace("_", " "))


class AdminGenerator:
    """Synthesises the admin UI and its content API from the content schema.

    Args:
        renderer: Template renderer shared with the other emitters.
        store_factory: Builds the content store seeded with the schema
            defaults.  Defaults to ``InMemoryContentStore``.
    """

    def __init__(
        self,
        renderer: TemplateRenderer,
        store_factory: StoreFactory = InMemoryContentStore,
    ) -> None:
        self.renderer = renderer
        self.store_factory = store_factory

    # -- Store -------------------------------------------------------------

    def build_store(self, descriptor: ProjectDescriptor) -> ContentStore:
        """A store seeded with the defaults of every schema field."""
        return self.store_factory(build_default_content(descriptor.content_schema))

    # -- Artifacts ---------------------------------------------------------

    def generate(self, descriptor: ProjectDescriptor) -> list[GeneratedArtifact]:
        """Return every admin artifact, admin page first."""
        content = self.build_store(descriptor).read()
        content_json = json.dumps(content, indent=2, ensure_ascii=False)

        return [
            self.renderer.render_artifact(
                "admin/admin_page.js.j2",
                ADMIN_PAGE_PATH,
                ArtifactKind.ADMIN_PAGE,
                {
                    "project_id": descriptor.project_id,
                    "entities": self._entity_forms(descriptor, content),
                },
            ),
            self.renderer.render_artifact(
                "admin/content_api.js.j2", CONTENT_API_PATH, ArtifactKind.API, {}
            ),
            self.renderer.render_artifact(
                "admin/admin_content_api.js.j2", ADMIN_CONTENT_API_PATH, ArtifactKind.API, {}
            ),
            self.renderer.render_artifact(
                "admin/content_store.js.j2",
                CONTENT_STORE_PATH,
                ArtifactKind.LIBRARY,
                {"default_content_json": content_json},
            ),
            self.renderer.render_artifact(
                "admin/database.js.j2", DATABASE_CONFIG_PATH, ArtifactKind.LIBRARY, {}
            ),
            GeneratedArtifact(
                path=CONTENT_SEED_PATH, content=dump_json(content), kind=ArtifactKind.SEED
            ),
        ]

    def update_manifest(self, artifacts: list[GeneratedArtifact]) -> list[GeneratedArtifact]:
        """Add the admin runtime dependencies to the ``package.json`` artifact.

        Does nothing when no manifest has been emitted.
        """
        manifest_artifact = find_artifact(artifacts, MANIFEST_PATH)
        if manifest_artifact is None:
            return artifacts

        manifest = json.loads(manifest_artifact.content)
        manifest["dependencies"] = {**manifest.get("dependencies", {}), **ADMIN_DEPENDENCIES}
        return replace_artifact(
            artifacts,
            GeneratedArtifact(
                path=MANIFEST_PATH, content=dump_json(manifest), kind=ArtifactKind.MANIFEST
            ),
        )

    # -- Form context ------------------------------------------------------

    def _entity_forms(
        self, descriptor: ProjectDescriptor, content: ContentData
    ) -> list[dict[str, Any]]:
        forms: list[dict[str, Any]] = []
        for entity, fields in descriptor.content_schema.items():
            controls = []
            for name, field in fields.items():
                label = field_label(name, field)
                controls.append({
                    "name": name,
                    "label": label,
                    "control": "textarea" if field.type.lower() == "textarea" else "input",
                    "input_type": input_type_for(field.type),
                    "required": field.required,
                    "placeholder": field.placeholder or f"Enter {label.lower()}",
                    "default_literal": json.dumps(
                        content.get(entity, {}).get(name, ""), ensure_ascii=False
                    ),
                })
            forms.append({"name": entity, "title": capitalize(entity), "fields": controls})
        return forms
