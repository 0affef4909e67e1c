"""sitesmith compiler -- turns a project descriptor into a Next.js source tree.

Quick usage::

    from sitesmith.compiler import SiteCompiler

    result = await SiteCompiler().compile_file("acme.json")
    if result.success:
        print(result.project_path, result.stats)
"""

from sitesmith.compiler.admin_gen import AdminGenerator
from sitesmith.compiler.artifacts import ArtifactKind, GeneratedArtifact
from sitesmith.compiler.compiler import CompileResult, SiteCompiler
from sitesmith.compiler.config_gen import ConfigEmitter
from sitesmith.compiler.materializer import Materializer, ProjectStats
from sitesmith.compiler.page_gen import PageEmitter
from sitesmith.compiler.store import ContentStore, InMemoryContentStore
from sitesmith.compiler.templates import TemplateRenderer

__all__ = [
    "AdminGenerator",
    "ArtifactKind",
    "CompileResult",
    "ConfigEmitter",
    "ContentStore",
    "GeneratedArtifact",
    "InMemoryContentStore",
    "Materializer",
    "PageEmitter",
    "ProjectStats",
    "SiteCompiler",
    "TemplateRenderer",
]
