"""Filesystem helpers for manifests and side files.

Path allocation never creates the file it returns. Callers write to the
path afterwards.
"""

from __future__ import annotations

from pathlib import Path

from wingetctl.domain.packages import PackageRecord, loads_manifest

# ---------------------------------------------------------------------------
# Path allocation
# ---------------------------------------------------------------------------


def resolve_unique_path(directory: Path | str, base_name: str, extension: str) -> Path:
    """Return ``directory/base_name+extension`` or the first free numbered variant.

    Probes ``base_name_1``, ``base_name_2``, ... until a path that does not
    exist is found. *extension* includes its leading separator, so both
    ``".json"`` and ``"_non_winget_apps.txt"`` are valid.

    Examples:
        ``backup.json`` exists -> ``backup_1.json``;
        ``backup.json`` and ``backup_1.json`` exist -> ``backup_2.json``.
    """
    if not base_name:
        msg = "base_name must be non-empty"
        raise ValueError(msg)

    directory = Path(directory)
    candidate = directory / f"{base_name}{extension}"
    counter = 1
    while candidate.exists():
        candidate = directory / f"{base_name}_{counter}{extension}"
        counter += 1
    return candidate


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def read_manifest(path: Path) -> list[PackageRecord]:
    """Read and parse a winget export manifest.

    Raises ``ManifestError`` on malformed content and ``OSError`` if the
    file cannot be read.
    """
    # utf-8-sig: winget on Windows may write a BOM
    return loads_manifest(path.read_text(encoding="utf-8-sig"))


def write_text_file(path: Path, content: str) -> None:
    """Write *content* to *path*, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
