"""Structural tree renderer: ``ModuleNode`` trees to markup.

Rules:

* A node with non-empty ``children`` becomes a container element holding
  each rendered child; its own ``content`` is ignored.
* Any other node becomes a leaf element holding its substitution-resolved
  ``content`` (empty when absent).
* ``tag`` values are passed through unvalidated.
* A page without modules renders a fixed fallback block so that every
  generated page has visible content.
"""

from __future__ import annotations

from sitesmith.descriptor.models import ModuleNode

from .markup import Element, element, to_jsx
from .substitution import ContentContext, substitute

# Modules sit inside <Layout><div> in the page shell.
PAGE_BODY_DEPTH = 4


def build_module(node: ModuleNode, context: ContentContext) -> Element:
    """Convert one ``ModuleNode`` (and its subtree) into an ``Element``."""
    attributes = {"className": node.class_name} if node.class_name else {}
    if node.children:
        children = [build_module(child, context) for child in node.children]
        return Element(node.tag, attributes, list(children))

    content = substitute(node.content, context) or ""
    return Element(node.tag, attributes, [content] if content else [])


def build_fallback(context: ContentContext, generator_name: str = "sitesmith") -> Element:
    """The placeholder block shown on pages that declare no modules."""
    return element(
        "div",
        element("h1", context.company_name, class_name="text-4xl font-bold text-primary mb-8"),
        element("p", context.company_description, class_name="text-xl text-gray-600 mb-6"),
        element(
            "div",
            element(
                "h2",
                f"Site generated by {generator_name}",
                class_name="text-2xl font-semibold text-blue-800 mb-4",
            ),
            element(
                "p",
                "This site was generated automatically from a JSON project descriptor.",
                class_name="text-blue-700",
            ),
            class_name="bg-blue-50 border border-blue-200 rounded-lg p-6 mt-8",
        ),
        class_name="container mx-auto px-4 py-8",
    )


def render_module(node: ModuleNode, context: ContentContext, depth: int = 0) -> str:
    """Render a module subtree to JSX text indented by *depth* levels."""
    return to_jsx(build_module(node, context), depth)


def render_modules(
    modules: list[ModuleNode],
    context: ContentContext,
    depth: int = PAGE_BODY_DEPTH,
    generator_name: str = "sitesmith",
) -> str:
    """Render a page's module list, or the fallback block when it is empty."""
    if not modules:
        return to_jsx(build_fallback(context, generator_name), depth)
    return "\n".join(render_module(module, context, depth) for module in modules)
