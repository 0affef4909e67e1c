"""Loading and validation of descriptor JSON files.

Input errors (missing file, unreadable file, invalid JSON) raise
``DescriptorError``; shape errors raise ``DescriptorSchemaError`` with one
located message per problem, e.g.
``structure.pages.about.route: route 'about' must start with '/'``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from sitesmith.exceptions import DescriptorError, DescriptorSchemaError
from sitesmith.utils import load_json

from .models import ProjectDescriptor


class ValidationReport(BaseModel):
    """Outcome of validating a descriptor without compiling it."""

    success: bool
    errors: list[str] = Field(default_factory=list)
    project_id: str | None = None
    pages: list[str] = Field(default_factory=list)
    entities: list[str] = Field(default_factory=list)


def load_descriptor(path: str | Path) -> ProjectDescriptor:
    """Read, parse and validate the descriptor stored at *path*.

    Raises:
        DescriptorError: If the file is missing, unreadable, or not JSON.
        DescriptorSchemaError: If the JSON does not describe a valid project.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise DescriptorError(f"Descriptor file not found: {file_path}", file_path)
    try:
        data = load_json(file_path)
    except json.JSONDecodeError as exc:
        raise DescriptorError(
            f"Descriptor {file_path} is not valid JSON: {exc.msg} "
            f"(line {exc.lineno}, column {exc.colno})",
            file_path,
        ) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise DescriptorError(f"Cannot read descriptor {file_path}: {exc}", file_path) from exc

    return parse_descriptor(data, path=file_path)


def parse_descriptor(
    data: dict[str, Any] | ProjectDescriptor,
    path: str | Path | None = None,
) -> ProjectDescriptor:
    """Validate an already-decoded descriptor dict.

    A ``ProjectDescriptor`` instance is returned unchanged.
    """
    if isinstance(data, ProjectDescriptor):
        return data
    if not isinstance(data, dict) or "_root" in data:
        raise DescriptorSchemaError(["<root>: descriptor must be a JSON object"], path)
    try:
        return ProjectDescriptor.model_validate(data)
    except ValidationError as exc:
        raise DescriptorSchemaError(format_validation_errors(exc), path) from exc


def validate_descriptor(data: dict[str, Any]) -> ValidationReport:
    """Validate *data* and collect every problem instead of raising."""
    try:
        descriptor = parse_descriptor(data)
    except DescriptorSchemaError as exc:
        return ValidationReport(success=False, errors=exc.errors)

    return ValidationReport(
        success=True,
        project_id=descriptor.project_id,
        pages=list(descriptor.structure.pages),
        entities=list(descriptor.content_schema),
    )


def validate_file(path: str | Path) -> ValidationReport:
    """Like :func:`validate_descriptor` but starting from a file on disk."""
    try:
        descriptor = load_descriptor(path)
    except DescriptorSchemaError as exc:
        return ValidationReport(success=False, errors=exc.errors)
    except DescriptorError as exc:
        return ValidationReport(success=False, errors=[str(exc)])

    return ValidationReport(
        success=True,
        project_id=descriptor.project_id,
        pages=list(descriptor.structure.pages),
        entities=list(descriptor.content_schema),
    )


def format_validation_errors(exc: ValidationError) -> list[str]:
    """Turn a Pydantic ``ValidationError`` into ``"<location>: <message>"`` lines."""
    messages: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "<root>"
        message = error.get("msg", "invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        messages.append(f"{location}: {message}")
    return messages
