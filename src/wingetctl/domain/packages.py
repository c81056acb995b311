"""Package records, winget manifest parsing, and install-list reduction.

A winget export manifest groups packages by source. Parsing flattens it
into an ordered list of :class:`PackageRecord` (sources in file order,
packages in order within each source). The same identifier may appear
more than once, e.g. when a package is tracked under two sources.

:func:`reduce_packages` turns that raw list into the deterministic install
order used by the import loop.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class ManifestError(ValueError):
    """Raised when manifest content is malformed."""


class PackageRecord(BaseModel):
    """One installed package as listed in a manifest.

    Identity is ``identifier`` alone; other fields are informational.
    """

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(min_length=1)
    source_name: str = ""
    version: str | None = None


# --- winget export JSON schema (only the keys we read) ---


class _ManifestPackage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    identifier: str = Field(alias="PackageIdentifier", min_length=1)
    version: str | None = Field(default=None, alias="Version")


class _SourceDetails(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(default="", alias="Name")


class _ManifestSource(BaseModel):
    model_config = ConfigDict(extra="ignore")

    packages: list[_ManifestPackage] = Field(default_factory=list, alias="Packages")
    details: _SourceDetails = Field(default_factory=_SourceDetails, alias="SourceDetails")


class _Manifest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    sources: list[_ManifestSource] = Field(alias="Sources")


def parse_manifest(data: dict[str, Any]) -> list[PackageRecord]:
    """Flatten a decoded winget export document into package records.

    Raises:
        ManifestError: If the document lacks ``Sources`` or any package
            entry lacks a non-empty ``PackageIdentifier``.
    """
    try:
        manifest = _Manifest.model_validate(data)
    except ValidationError as exc:
        msg = f"Malformed manifest: {exc.error_count()} validation error(s)"
        raise ManifestError(msg) from exc

    return [
        PackageRecord(
            identifier=pkg.identifier,
            source_name=source.details.name,
            version=pkg.version,
        )
        for source in manifest.sources
        for pkg in source.packages
    ]


def loads_manifest(text: str) -> list[PackageRecord]:
    """Decode manifest JSON text and parse it via :func:`parse_manifest`."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"Manifest is not valid JSON: {exc.msg} (line {exc.lineno})"
        raise ManifestError(msg) from exc
    if not isinstance(data, dict):
        msg = "Manifest root must be a JSON object"
        raise ManifestError(msg)
    return parse_manifest(data)


def reduce_packages(records: Iterable[PackageRecord]) -> list[PackageRecord]:
    """Deduplicate by identifier and sort for a repeatable install order.

    The first record seen for each identifier wins. The result is sorted by
    identifier using plain (ordinal) string comparison.

    Examples:
        >>> a1, b, a2 = (PackageRecord(identifier=i, source_name=s)
        ...              for i, s in [("A", "winget"), ("B", "winget"), ("A", "msstore")])
        >>> [(r.identifier, r.source_name) for r in reduce_packages([a1, b, a2])]
        [('A', 'winget'), ('B', 'winget')]
    """
    first_seen: dict[str, PackageRecord] = {}
    for record in records:
        first_seen.setdefault(record.identifier, record)
    return sorted(first_seen.values(), key=lambda r: r.identifier)
