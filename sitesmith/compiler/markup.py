"""In-memory markup elements and their JSX serialisation.

Emitters build ``Element`` trees instead of concatenating strings; escaping
and indentation live in one place, :func:`to_jsx`.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Union

INDENT = "  "

# Characters that change meaning inside JSX text or a quoted attribute.
_JSX_UNSAFE = re.compile(r"[{}<>\"]")


@dataclass
class Element:
    """A markup element: tag, attributes, and ordered children."""

    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)

    @property
    def has_element_children(self) -> bool:
        return any(isinstance(child, Element) for child in self.children)


Node = Union[Element, str]


def element(tag: str, *children: Node, class_name: str | None = None) -> Element:
    """Shorthand constructor; ``class_name`` maps to the JSX ``className``."""
    attributes = {"className": class_name} if class_name else {}
    return Element(tag, attributes, list(children))


def jsx_text(value: str) -> str:
    """Render *value* as JSX child text.

    Plain text is emitted as-is; text containing braces, angle brackets or
    quotes becomes a JS string expression so it is displayed literally.
    """
    if _JSX_UNSAFE.search(value):
        return "{" + json.dumps(value, ensure_ascii=False) + "}"
    return value


def jsx_attr(value: str) -> str:
    """Render *value* as a JSX attribute value, quotes included."""
    if _JSX_UNSAFE.search(value) or "\n" in value:
        return "{" + json.dumps(value, ensure_ascii=False) + "}"
    return f'"{value}"'


def js_string(value: str) -> str:
    """Render *value* as a JavaScript string literal."""
    return json.dumps(value, ensure_ascii=False)


def _open_tag(node: Element) -> str:
    attrs = "".join(f" {name}={jsx_attr(value)}" for name, value in node.attributes.items())
    return f"<{node.tag}{attrs}>"


def to_jsx(node: Node, depth: int = 0) -> str:
    """Serialise *node* to JSX indented by *depth* levels.

    Elements holding only text render on one line; elements with element
    children put each child on its own line, one level deeper.
    """
    pad = INDENT * depth
    if isinstance(node, str):
        return f"{pad}{jsx_text(node)}"

    if not node.has_element_children:
        inner = "".join(jsx_text(child) for child in node.children)
        return f"{pad}{_open_tag(node)}{inner}</{node.tag}>"

    lines = [f"{pad}{_open_tag(node)}"]
    lines.extend(to_jsx(child, depth + 1) for child in node.children)
    lines.append(f"{pad}</{node.tag}>")
    return "\n".join(lines)
