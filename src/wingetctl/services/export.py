"""ExportService — dump installed packages to a manifest via the package manager.

Produces three files in the output directory, none of which overwrites an
existing file:

* ``<base>.json``                  — the winget export manifest
* ``<base>_non_winget_apps.txt``   — stdout of the export command
* ``<base>_export.log``            — the operation log
"""

from __future__ import annotations

from pathlib import Path

from wingetctl.domain.packages import ManifestError
from wingetctl.infrastructure.filesystem import read_manifest, resolve_unique_path, write_text_file
from wingetctl.infrastructure.oplog import OperationLog
from wingetctl.services._helpers import now_iso, tail
from wingetctl.services.base import BaseService
from wingetctl.services.contracts import ExportResultData, dump_validated
from wingetctl.services.result import ErrorCode, ServiceResult
from wingetctl.services.telemetry import trace_span, traced

_OP = "export_packages"


class ExportService(BaseService):
    """Back up the installed-package list."""

    @traced
    def export_packages(
        self,
        output_dir: Path | None = None,
        *,
        base_name: str | None = None,
        include_versions: bool | None = None,
    ) -> ServiceResult:
        """Run the export command into a fresh manifest path under *output_dir*.

        Unset arguments fall back to the ``[export]`` config section.
        """
        cfg = self._settings.export
        output_dir = Path(output_dir if output_dir is not None else cfg.directory)
        base_name = base_name or cfg.base_name
        if include_versions is None:
            include_versions = cfg.include_versions
        warnings: list[str] = []

        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            manifest_path = resolve_unique_path(output_dir, base_name, cfg.manifest_extension)
            oplog = OperationLog.create(output_dir, f"{manifest_path.stem}_export")
            oplog.info(f"Start exporting at {now_iso()}")
        except OSError as exc:
            self._log.warning("export.unwritable", directory=str(output_dir), error=str(exc))
            return ServiceResult.failure(
                _OP,
                ErrorCode.WRITE_FAILED,
                f"Cannot write to {output_dir}: {exc}",
                directory=str(output_dir),
            )

        with trace_span("package_manager.export") as span:
            outcome = self._manager.export_installed(
                manifest_path, include_versions=include_versions
            )
            if span:
                span.annotate("ok", outcome.ok)

        # Only a command that actually ran has stdout worth keeping.
        non_managed_path: Path | None = None
        if outcome.returncode is not None:
            non_managed_path = resolve_unique_path(
                output_dir, manifest_path.stem, cfg.non_managed_suffix
            )
            try:
                write_text_file(non_managed_path, outcome.stdout)
            except OSError as exc:
                warnings.append(f"Could not save export output to {non_managed_path}: {exc}")
                non_managed_path = None

        if not outcome.ok or not manifest_path.is_file():
            if outcome.ok:
                message = f"Export command did not produce {manifest_path}"
            else:
                message = outcome.message or "Export command failed"
            self._record_error(oplog, f"Export failed: {message}")
            return ServiceResult.failure(
                _OP,
                ErrorCode.EXPORT_FAILED,
                message,
                data={"log_path": str(oplog.path)},
                returncode=outcome.returncode,
                stderr=tail(outcome.stderr),
            )

        try:
            package_count = len(read_manifest(manifest_path))
        except ManifestError as exc:
            warnings.append(f"Exported manifest could not be parsed: {exc}")
            package_count = 0

        oplog.info(f"Exported {package_count} packages to {manifest_path}")
        oplog.info("End exporting")
        self._log.info("export.complete", manifest=str(manifest_path), packages=package_count)

        data = dump_validated(
            ExportResultData,
            {
                "manifest_path": str(manifest_path),
                "non_managed_path": str(non_managed_path or ""),
                "log_path": str(oplog.path),
                "package_count": package_count,
                "include_versions": include_versions,
            },
        )
        return ServiceResult(ok=True, op=_OP, data=data, warnings=warnings)
