"""Command-line entry points.

- ``sitesmith``           -- compile a descriptor into a Next.js project
- ``sitesmith-validate``  -- validate one or more descriptor files
- ``sitesmith-extract``   -- rebuild a descriptor from a generated project
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from rich.panel import Panel

from sitesmith import __version__
from sitesmith.compiler import SiteCompiler
from sitesmith.config import Config
from sitesmith.descriptor.loader import validate_file
from sitesmith.extractor import ProjectExtractor
from sitesmith.utils import (
    console,
    dump_json,
    format_duration,
    print_step_header,
    print_success,
    print_summary_table,
    save_json,
)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``sitesmith`` / ``python -m sitesmith``."""
    parser = argparse.ArgumentParser(
        prog="sitesmith",
        description="sitesmith -- compile a JSON website descriptor into a Next.js project",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  sitesmith acme.json\n"
            "  sitesmith acme.json -o ./sites -v\n"
        ),
    )
    parser.add_argument("descriptor", help="Path to the project descriptor JSON file")
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Base output directory (default: $SITESMITH_OUTPUT_DIR or ./output)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print a message for every generation step",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = parser.parse_args(argv)

    descriptor_path = Path(args.descriptor)
    if not descriptor_path.exists():
        console.print(f"[bold red]Error:[/bold red] Descriptor file not found: {descriptor_path}")
        sys.exit(1)

    config = Config.from_env()
    if args.output:
        config.output_dir = Path(args.output)
    if args.verbose:
        config.verbose = True

    console.print(
        Panel(
            f"[bold]{descriptor_path.name}[/bold] -> {config.output_dir}",
            title=f"sitesmith {__version__}",
            border_style="bright_cyan",
        )
    )

    compiler = SiteCompiler(config)
    result = asyncio.run(compiler.compile_file(descriptor_path))

    if not result.success:
        for error in result.errors:
            console.print(f"  [red]-[/red] {error}")
        console.print("[bold red]Compilation failed.[/bold red]")
        sys.exit(1)

    print_success(f"Generated {result.project_id} in {format_duration(result.duration)}")
    print_summary_table(
        {
            "Project": result.project_id,
            "Location": result.project_path,
            "Total files": result.stats.total_files,
            "Pages": result.stats.pages,
            "Components": result.stats.components,
            "Config files": result.stats.configs,
            "API endpoints": result.stats.api,
            "Admin pages": result.stats.admin,
        },
        title="Generation Summary",
    )
    console.print("[bold]Next steps:[/bold]")
    console.print(f"  cd {result.project_path}")
    console.print("  npm install")
    console.print("  npm run dev")
    console.print("  open http://localhost:3000/admin to edit content")


def validate_main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``sitesmith-validate``."""
    parser = argparse.ArgumentParser(
        prog="sitesmith-validate",
        description="Validate project descriptor files without compiling them",
    )
    parser.add_argument("files", nargs="+", help="Descriptor JSON files to validate")
    args = parser.parse_args(argv)

    print_step_header("Validating descriptors")
    failed = 0
    for name in args.files:
        report = validate_file(name)
        if report.success:
            console.print(
                f"[bold green]PASSED[/bold green] {name} "
                f"[dim]({report.project_id}: {len(report.pages)} pages, "
                f"{len(report.entities)} entities)[/dim]"
            )
            continue
        failed += 1
        console.print(f"[bold red]FAILED[/bold red] {name}")
        for error in report.errors:
            console.print(f"  [red]-[/red] {error}")

    console.print()
    console.print(f"{len(args.files) - failed}/{len(args.files)} descriptors valid")
    if failed:
        sys.exit(1)


def extract_main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``sitesmith-extract``."""
    parser = argparse.ArgumentParser(
        prog="sitesmith-extract",
        description="Rebuild a project descriptor from a generated project directory",
    )
    parser.add_argument("project_dir", help="Directory of a previously generated project")
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Write the descriptor to this file instead of stdout",
    )
    parser.add_argument(
        "--metadata", "-m",
        default=None,
        help="Generation metadata file name (default: <generator name>.json)",
    )
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args(argv)

    project_dir = Path(args.project_dir)
    if not project_dir.is_dir():
        console.print(f"[bold red]Error:[/bold red] Project directory not found: {project_dir}")
        sys.exit(1)

    result = ProjectExtractor(metadata_file=args.metadata, verbose=args.verbose).extract(project_dir)
    if not result.success:
        sys.exit(1)

    if args.output:
        target = Path(args.output)
        asyncio.run(save_json(result.descriptor, target))
        print_success(f"Descriptor written to {target}")
    else:
        console.print_json(dump_json(result.descriptor))


if __name__ == "__main__":
    main()
