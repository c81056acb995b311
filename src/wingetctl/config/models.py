"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, wingetctl.toml only contains
overrides. A fresh install needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- wingetctl.toml sections ---


class WingetConfig(BaseModel):
    """[winget] section."""

    model_config = {"frozen": True}

    executable: str = "winget"
    accept_source_agreements: bool = True
    accept_package_agreements: bool = True
    pin_source: bool = True


class ExportConfig(BaseModel):
    """[export] section."""

    model_config = {"frozen": True}

    directory: str = "."
    base_name: str = Field(default="winget_packages", min_length=1)
    manifest_extension: str = ".json"
    non_managed_suffix: str = "_non_winget_apps.txt"
    include_versions: bool = False


class ImportConfig(BaseModel):
    """[restore] section (import settings)."""

    model_config = {"frozen": True}

    log_name: str = Field(default="winget_import", min_length=1)
