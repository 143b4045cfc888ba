from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, field_validator

from memio.bridge import DEFAULT_PROC_ROOT


class ProcessConfig(BaseModel):
    """Where to find process memory."""

    proc_root: str = DEFAULT_PROC_ROOT


class DisplayConfig(BaseModel):
    """CLI output configuration."""

    address_width: int = 16
    bytes_per_row: int = 16

    @field_validator("address_width", "bytes_per_row")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be positive")
        return value


class MemioConfig(BaseModel):
    """Top-level memio configuration."""

    process: ProcessConfig = ProcessConfig()
    display: DisplayConfig = DisplayConfig()
    verbose: bool = False


def load_config(path: Optional[str] = None) -> MemioConfig:
    """Load configuration from a memio.toml file, falling back to defaults.

    Uses ``tomllib`` on Python 3.11+ and ``tomli`` on older versions.
    """

    if sys.version_info >= (3, 11):
        import tomllib
    else:
        import tomli as tomllib  # type: ignore[no-redef]

    config_path = Path(path) if path else Path("memio.toml")

    if not config_path.exists():
        return MemioConfig()

    with open(config_path, "rb") as f:
        raw = tomllib.load(f)

    return MemioConfig(**raw)
