"""Action enum selected by the CLI dispatcher."""

from __future__ import annotations

from enum import StrEnum


class Action(StrEnum):
    """Top-level operations the tool can perform."""

    EXPORT = "export"
    IMPORT = "import"
