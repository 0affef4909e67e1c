"""Project descriptor model and loader.

Usage::

    from sitesmith.descriptor import load_descriptor

    descriptor = load_descriptor("acme.json")
    print(list(descriptor.structure.pages))
"""

from sitesmith.descriptor.loader import (
    ValidationReport,
    load_descriptor,
    parse_descriptor,
    validate_descriptor,
    validate_file,
)
from sitesmith.descriptor.models import (
    FieldSchema,
    ModuleNode,
    Page,
    ProjectDescriptor,
    ProjectMeta,
    SiteConfig,
)

__all__ = [
    "FieldSchema",
    "ModuleNode",
    "Page",
    "ProjectDescriptor",
    "ProjectMeta",
    "SiteConfig",
    "ValidationReport",
    "load_descriptor",
    "parse_descriptor",
    "validate_descriptor",
    "validate_file",
]
