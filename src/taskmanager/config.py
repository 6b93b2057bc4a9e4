"""Settings loaded from environment variables.

Every option has a default, so the program runs with no environment at
all. Command-line flags (see ``main``) override these values.
"""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from taskmanager.storage import DEFAULT_DATA_FILE

ENV_PREFIX = "TASKMGR"


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def _env_path(name: str, default: Optional[Path]) -> Optional[Path]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def parse_log_level(value: str, default: int = logging.WARNING) -> int:
    """Accept level names ("info") or numbers ("20")."""
    raw = value.strip()
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else default


@dataclass(frozen=True)
class Settings:
    data_file: Path
    log_level: int
    log_file: Optional[Path]

    def with_overrides(self, data_file: Optional[Path] = None,
                       log_level: Optional[str] = None) -> "Settings":
        changes = {}
        if data_file is not None:
            changes['data_file'] = Path(data_file)
        if log_level is not None:
            changes['log_level'] = parse_log_level(log_level, self.log_level)
        return replace(self, **changes)


def get_settings() -> Settings:
    return Settings(
        data_file=_env_path(_k("DATA_FILE"), DEFAULT_DATA_FILE) or DEFAULT_DATA_FILE,
        log_level=parse_log_level(os.getenv(_k("LOG_LEVEL"), "WARNING")),
        log_file=_env_path(_k("LOG_FILE"), None),
    )
