"""``{{scope.field}}`` placeholder substitution.

Module content and page titles may reference a small fixed set of values
resolved once per compilation from the descriptor's ``meta``:

* ``{{company.name}}``
* ``{{company.description}}``
* ``{{site.title}}``

Unknown placeholders are left verbatim.  Substitution is a single pass, so a
replacement value that itself looks like a placeholder is never expanded.
"""

from __future__ import annotations

import re

from pydantic import BaseModel

from sitesmith.descriptor.models import ProjectMeta

PLACEHOLDER_PATTERN = re.compile(r"\{\{([A-Za-z_][A-Za-z0-9_]*)\.([A-Za-z_][A-Za-z0-9_]*)\}\}")

DEFAULT_DESCRIPTION = "Company description"


class ContentContext(BaseModel):
    """Flat set of values placeholders resolve against."""

    company_name: str
    company_description: str
    site_title: str

    @classmethod
    def from_meta(cls, meta: ProjectMeta) -> "ContentContext":
        title = meta.title or meta.project_id
        return cls(
            company_name=title,
            company_description=meta.description or DEFAULT_DESCRIPTION,
            site_title=title,
        )

    def scopes(self) -> dict[str, dict[str, str]]:
        """Return the ``scope -> field -> value`` lookup table."""
        return {
            "company": {
                "name": self.company_name,
                "description": self.company_description,
            },
            "site": {"title": self.site_title},
        }


def substitute(text: str | None, context: ContentContext) -> str | None:
    """Replace every recognised placeholder in *text*.

    ``None`` and the empty string are returned unchanged.
    """
    if not text:
        return text

    scopes = context.scopes()

    def _replace(match: re.Match[str]) -> str:
        scope, field = match.group(1), match.group(2)
        value = scopes.get(scope, {}).get(field)
        return match.group(0) if value is None else value

    return PLACEHOLDER_PATTERN.sub(_replace, text)
