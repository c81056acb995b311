"""BaseService — shared foundation for export and import services.

Every service receives the frozen settings and a :class:`PackageManager`
at construction time. Nothing else is shared between operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from wingetctl.config.settings import WingetctlSettings
    from wingetctl.infrastructure.oplog import OperationLog
    from wingetctl.infrastructure.winget import PackageManager


class BaseService:
    """Base for service-layer classes.

    Usage::

        class ImportService(BaseService):
            def import_packages(self, manifest: Path) -> ServiceResult:
                ...
    """

    def __init__(self, settings: WingetctlSettings, manager: PackageManager) -> None:
        self._settings = settings
        self._manager = manager
        self._log = structlog.get_logger(type(self).__module__)

    def _record_error(self, oplog: OperationLog, message: str, **fields: object) -> None:
        """Write a failure to both the operation log and structlog."""
        oplog.error(message)
        self._log.warning(message, log_file=str(oplog.path), **fields)
