"""Typed payload contracts for service results.

Payloads are validated here before they leave the service layer so the
renderers and ``--json`` consumers can rely on their shape.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel


def dump_validated[T: BaseModel](model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    return model_cls.model_validate(data).model_dump(mode="json")


class ExportResultData(BaseModel):
    """Payload contract for ``ExportService.export_packages``."""

    manifest_path: str
    non_managed_path: str
    log_path: str
    package_count: int
    include_versions: bool


class PackageItem(BaseModel):
    """One package in an install plan."""

    id: str
    source: str
    version: str | None = None


class InstallOutcome(BaseModel):
    """One attempted install."""

    id: str
    source: str
    status: Literal["installed", "failed"]
    message: str = ""


class ImportPlanData(BaseModel):
    """Payload contract for ``ImportService.plan``."""

    manifest_path: str
    total_records: int
    count: int
    items: list[PackageItem]


class ImportResultData(BaseModel):
    """Payload contract for ``ImportService.import_packages``."""

    manifest_path: str
    log_path: str
    total_records: int
    count: int
    installed: int
    failed: list[str]
    items: list[InstallOutcome]
