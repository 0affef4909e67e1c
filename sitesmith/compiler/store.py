"""Content store contract for the generated admin interface.

The generated site reads and writes content through a key-value store with
two operations:

* ``read()``  -- the full ``entity -> field -> value`` mapping.
* ``write(entity, field, value)`` -- merge one value and return the new state.

``AdminGenerator`` takes the store as a dependency: it seeds a store with the
schema defaults and embeds the store's state in the generated code, so a
persistent implementation can replace ``InMemoryContentStore`` without
changing the generator.
"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from typing import Any, Callable

from sitesmith.descriptor.models import FieldSchema

ContentData = dict[str, dict[str, Any]]


def build_default_content(schema: dict[str, dict[str, FieldSchema]]) -> ContentData:
    """Map every entity/field of *schema* to its default value.

    Fields without a default are stored as ``""`` so every entity keeps a
    stable key set.  Schema order is preserved.
    """
    return {
        entity: {
            name: field.default if field.default is not None else ""
            for name, field in fields.items()
        }
        for entity, fields in schema.items()
    }


class ContentStore(ABC):
    """Key-value store keyed by ``(entity, field)``."""

    @abstractmethod
    def read(self) -> ContentData:
        """Return a snapshot of the current content."""

    @abstractmethod
    def write(self, entity: str, field: str, value: Any) -> ContentData:
        """Merge *value* at ``(entity, field)`` and return the updated content."""


class InMemoryContentStore(ContentStore):
    """Process-local store; last write wins on each ``(entity, field)`` key."""

    def __init__(self, initial: ContentData | None = None) -> None:
        self._data: ContentData = copy.deepcopy(initial) if initial else {}

    def read(self) -> ContentData:
        return copy.deepcopy(self._data)

    def write(self, entity: str, field: str, value: Any) -> ContentData:
        self._data.setdefault(entity, {})[field] = value
        return self.read()


StoreFactory = Callable[[ContentData], ContentStore]
