"""ImportService — reinstall packages listed in a saved manifest.

The manifest is reduced (first occurrence per identifier wins, sorted by
identifier) and every package is installed in that order. A failed
install is logged and the loop moves on: there are no retries and no
rollback of packages installed earlier in the run.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from wingetctl.domain.packages import ManifestError, PackageRecord, reduce_packages
from wingetctl.infrastructure.filesystem import read_manifest
from wingetctl.infrastructure.oplog import OperationLog
from wingetctl.infrastructure.winget import CommandResult
from wingetctl.services._helpers import now_iso
from wingetctl.services.base import BaseService
from wingetctl.services.contracts import ImportPlanData, ImportResultData, dump_validated
from wingetctl.services.result import ErrorCode, ServiceResult
from wingetctl.services.telemetry import trace_span, traced

ProgressCallback = Callable[[int, int, PackageRecord, CommandResult], None]


class _ManifestInputError(Exception):
    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


def _load_records(manifest_path: Path) -> list[PackageRecord]:
    if not manifest_path.is_file():
        raise _ManifestInputError(
            ErrorCode.MANIFEST_NOT_FOUND, f"Manifest not found: {manifest_path}"
        )
    try:
        return read_manifest(manifest_path)
    except ManifestError as exc:
        raise _ManifestInputError(ErrorCode.INVALID_MANIFEST, str(exc)) from exc
    except OSError as exc:
        raise _ManifestInputError(
            ErrorCode.INVALID_MANIFEST, f"Cannot read manifest {manifest_path}: {exc}"
        ) from exc


class ImportService(BaseService):
    """Restore packages from a manifest produced by export."""

    @traced
    def plan(self, manifest_path: Path) -> ServiceResult:
        """Report the ordered install list without installing anything."""
        op = "import_plan"
        try:
            records = _load_records(manifest_path)
        except _ManifestInputError as exc:
            return ServiceResult.failure(
                op, exc.code, exc.message, manifest_path=str(manifest_path)
            )

        packages = reduce_packages(records)
        data = dump_validated(
            ImportPlanData,
            {
                "manifest_path": str(manifest_path),
                "total_records": len(records),
                "count": len(packages),
                "items": [
                    {"id": p.identifier, "source": p.source_name, "version": p.version}
                    for p in packages
                ],
            },
        )
        return ServiceResult(ok=True, op=op, data=data)

    @traced
    def import_packages(
        self,
        manifest_path: Path,
        *,
        on_progress: ProgressCallback | None = None,
    ) -> ServiceResult:
        """Install every package of *manifest_path*, continuing past failures.

        Input errors (missing or malformed manifest) abort before any install
        attempt. The operation log sits beside the manifest; when the
        manifest does not exist it goes to the current directory instead.
        An unwritable log location is reported as a failed result.
        """
        op = "import_packages"
        log_name = self._settings.restore.log_name

        try:
            records = _load_records(manifest_path)
        except _ManifestInputError as exc:
            log_dir = (
                Path.cwd() if exc.code is ErrorCode.MANIFEST_NOT_FOUND else manifest_path.parent
            )
            try:
                oplog = OperationLog.create(log_dir, log_name)
                self._record_error(oplog, exc.message, manifest=str(manifest_path))
            except OSError as log_exc:
                self._log.warning(
                    "import.log_unwritable", directory=str(log_dir), error=str(log_exc)
                )
                return ServiceResult.failure(
                    op,
                    exc.code,
                    exc.message,
                    manifest_path=str(manifest_path),
                    log_error=str(log_exc),
                )
            return ServiceResult.failure(
                op,
                exc.code,
                exc.message,
                data={"log_path": str(oplog.path)},
                manifest_path=str(manifest_path),
            )

        packages = reduce_packages(records)
        start = f"Start importing {len(packages)} packages from {manifest_path} at {now_iso()}"
        try:
            oplog = OperationLog.create(manifest_path.parent, log_name)
            oplog.info(start)
        except OSError as exc:
            self._log.warning(
                "import.log_unwritable", directory=str(manifest_path.parent), error=str(exc)
            )
            return ServiceResult.failure(
                op,
                ErrorCode.WRITE_FAILED,
                f"Cannot write the operation log in {manifest_path.parent}: {exc}",
                directory=str(manifest_path.parent),
            )

        items: list[dict[str, str]] = []
        failed: list[str] = []
        warnings: list[str] = []

        for index, record in enumerate(packages, start=1):
            with trace_span(f"install {record.identifier}") as span:
                outcome = self._manager.install_package(
                    record.identifier, source=record.source_name or None
                )
                if span:
                    span.annotate("ok", outcome.ok)

            if outcome.ok:
                oplog.info(f"Installed {record.identifier}")
                self._log.info("package.installed", package=record.identifier)
                items.append(
                    {"id": record.identifier, "source": record.source_name, "status": "installed"}
                )
            else:
                reason = outcome.message or "install failed"
                message = f"Failed to install {record.identifier}: {reason}"
                self._record_error(oplog, message, package=record.identifier)
                failed.append(record.identifier)
                warnings.append(message)
                items.append(
                    {
                        "id": record.identifier,
                        "source": record.source_name,
                        "status": "failed",
                        "message": reason,
                    }
                )

            if on_progress is not None:
                on_progress(index, len(packages), record, outcome)

        oplog.info("End importing")

        data = dump_validated(
            ImportResultData,
            {
                "manifest_path": str(manifest_path),
                "log_path": str(oplog.path),
                "total_records": len(records),
                "count": len(packages),
                "installed": len(packages) - len(failed),
                "failed": failed,
                "items": items,
            },
        )
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)
