"""Decode uploaded specification files.

Accepts JSON and YAML documents directly, and Java archives that bundle
their specs under an `api-docs` folder (as Spring / springdoc builds do).
Decoding failures are raised here and never reach the scorer.
"""

from __future__ import annotations

import io
import json
import logging
import os
import zipfile
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field

from .exceptions import NoSpecFoundError, SpecDecodeError, UnsupportedFormatError

logger = logging.getLogger(__name__)

DEFAULT_MAX_SPEC_BYTES = 10 * 1024 * 1024

SPEC_FORMATS: dict[str, str] = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
}
JAR_EXTENSION = ".jar"
API_DOCS_MARKER = "api-docs"


class SpecSource(BaseModel):
    """Raw text of one specification file."""

    name: str
    content: str
    format: Literal["json", "yaml"]


class Upload(BaseModel):
    """The spec chosen for analysis, plus everything pulled out of an archive."""

    primary: SpecSource
    extracted: list[SpecSource] = Field(default_factory=list)


def get_max_spec_bytes() -> int:
    return int(os.environ.get("MAX_SPEC_BYTES", str(DEFAULT_MAX_SPEC_BYTES)))


def format_for(file_name: str) -> str | None:
    """Spec format implied by a file name, or None if it is not a spec file."""
    return SPEC_FORMATS.get(Path(file_name).suffix.lower())


def extract_jar_specs(data: bytes, file_name: str = "archive.jar") -> list[SpecSource]:
    """Pull every api-docs JSON/YAML entry out of a JAR, in archive order."""
    try:
        archive = zipfile.ZipFile(io.BytesIO(data))
    except zipfile.BadZipFile as exc:
        raise SpecDecodeError(f"{file_name} is not a valid JAR archive", file_name) from exc

    specs = []
    with archive:
        for entry in archive.infolist():
            if entry.is_dir() or API_DOCS_MARKER not in entry.filename:
                continue
            fmt = format_for(entry.filename)
            if fmt is None:
                continue
            content = archive.read(entry).decode("utf-8", errors="replace")
            specs.append(SpecSource(name=entry.filename, content=content, format=fmt))
            logger.debug("Extracted %s from %s", entry.filename, file_name)
    return specs


def read_upload(file_name: str, data: bytes) -> Upload:
    """Turn uploaded bytes into spec sources based on the file extension."""
    limit = get_max_spec_bytes()
    if len(data) > limit:
        raise SpecDecodeError(f"{file_name} is larger than {limit} bytes", file_name)

    suffix = Path(file_name).suffix.lower()
    if suffix == JAR_EXTENSION:
        specs = extract_jar_specs(data, file_name)
        if not specs:
            raise NoSpecFoundError(file_name)
        return Upload(primary=specs[0], extracted=specs)

    fmt = format_for(file_name)
    if fmt is None:
        raise UnsupportedFormatError(file_name)
    content = data.decode("utf-8", errors="replace")
    return Upload(primary=SpecSource(name=file_name, content=content, format=fmt))


def decode_spec(source: SpecSource) -> dict:
    """Parse a spec source into a mapping.

    Raises:
        SpecDecodeError: If the text is not valid JSON/YAML or its root is not a mapping.
    """
    try:
        if source.format == "json":
            spec = json.loads(source.content)
        else:
            spec = yaml.safe_load(source.content)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        logger.warning("Failed to parse %s: %s", source.name, exc)
        raise SpecDecodeError(
            f"Failed to parse API specification {source.name}. Invalid format.", source.name
        ) from exc

    if not isinstance(spec, dict):
        raise SpecDecodeError(
            f"API specification {source.name} must be a mapping at the root", source.name
        )
    return spec


def load_spec_file(path: str | Path) -> Upload:
    """Read a spec or JAR from disk.

    Raises:
        FileNotFoundError: If the path doesn't exist.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise FileNotFoundError(f"Spec file does not exist: {path}")
    return read_upload(file_path.name, file_path.read_bytes())
