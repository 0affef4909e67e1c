"""sitesmith -- compiles a JSON website descriptor into a buildable Next.js project.

Quick usage::

    from sitesmith import SiteCompiler, load_descriptor

    descriptor = load_descriptor("acme.json")
    result = await SiteCompiler().compile(descriptor)
    print(result.files)
"""

__version__ = "0.1.0"

from sitesmith.compiler import CompileResult, SiteCompiler  # noqa: E402
from sitesmith.descriptor import ProjectDescriptor, load_descriptor  # noqa: E402

__all__ = [
    "CompileResult",
    "ProjectDescriptor",
    "SiteCompiler",
    "__version__",
    "load_descriptor",
]
