"""Tests for placeholder substitution."""

from __future__ import annotations

import pytest

from sitesmith.compiler.substitution import (
    DEFAULT_DESCRIPTION,
    ContentContext,
    substitute,
)
from sitesmith.descriptor.models import ProjectMeta

pytestmark = pytest.mark.unit


@pytest.fixture
def context() -> ContentContext:
    return ContentContext(
        company_name="Acme",
        company_description="Anvils and more",
        site_title="Acme",
    )


class TestContentContext:
    def test_from_meta(self):
        ctx = ContentContext.from_meta(
            ProjectMeta(project_id="acme", title="Acme", description="Anvils")
        )
        assert ctx.company_name == "Acme"
        assert ctx.site_title == "Acme"
        assert ctx.company_description == "Anvils"

    def test_from_meta_falls_back_to_project_id(self):
        ctx = ContentContext.from_meta(ProjectMeta(project_id="acme"))
        assert ctx.company_name == "acme"
        assert ctx.company_description == DEFAULT_DESCRIPTION


class TestSubstitute:
    def test_known_placeholders(self, context: ContentContext):
        text = "Welcome to {{company.name}}: {{company.description}} ({{site.title}})"
        assert substitute(text, context) == "Welcome to Acme: Anvils and more (Acme)"

    def test_unknown_placeholder_kept(self, context: ContentContext):
        assert substitute("Hi {{user.name}}", context) == "Hi {{user.name}}"

    def test_unknown_field_in_known_scope_kept(self, context: ContentContext):
        assert substitute("{{company.phone}}", context) == "{{company.phone}}"

    def test_none_and_empty(self, context: ContentContext):
        assert substitute(None, context) is None
        assert substitute("", context) == ""

    def test_no_placeholders(self, context: ContentContext):
        assert substitute("plain text", context) == "plain text"

    def test_single_pass(self):
        ctx = ContentContext(
            company_name="{{site.title}}", company_description="d", site_title="Loop"
        )
        assert substitute("{{company.name}}", ctx) == "{{site.title}}"

    def test_whitespace_inside_braces_not_matched(self, context: ContentContext):
        assert substitute("{{ company.name }}", context) == "{{ company.name }}"

    def test_repeated_placeholder(self, context: ContentContext):
        assert substitute("{{company.name}}/{{company.name}}", context) == "Acme/Acme"
