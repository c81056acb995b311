"""ServiceResult and ServiceError — the contract every service returns.

The CLI consumes this type for rendering and exit-code decisions.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    """Error codes carried by :class:`ServiceError`.

    Input errors: ``MANIFEST_NOT_FOUND``, ``INVALID_MANIFEST``.
    Environment/filesystem errors: ``EXPORT_FAILED``, ``WRITE_FAILED``.
    """

    MANIFEST_NOT_FOUND = "MANIFEST_NOT_FOUND"
    INVALID_MANIFEST = "INVALID_MANIFEST"
    EXPORT_FAILED = "EXPORT_FAILED"
    WRITE_FAILED = "WRITE_FAILED"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"import_packages"``).
        data: Operation-specific payload.
        warnings: Non-fatal issues, e.g. individual packages that failed to install.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (telemetry in verbose mode).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        code: ErrorCode,
        message: str,
        *,
        data: dict[str, Any] | None = None,
        **detail: Any,
    ) -> ServiceResult:
        """Build a failed result with a :class:`ServiceError`."""
        return cls(
            ok=False,
            op=op,
            data=data or {},
            error=ServiceError(code=code.value, message=message, detail=detail),
        )
