from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    # Persistence (default: in-memory, nothing written to disk)
    persist_to_disk: bool
    data_dir: Path | None

    # Debug
    debug_log_documents: bool


def get_settings() -> Settings:
    raw_dir = os.getenv("SPORTS_DATA_DIR", "").strip()
    data_dir = Path(raw_dir).expanduser() if raw_dir else None

    persist_to_disk = _env_bool("PERSIST_TO_DISK", False)
    debug_log_documents = _env_bool("DEBUG_LOG_DOCUMENTS", False)

    return Settings(
        persist_to_disk=persist_to_disk,
        data_dir=data_dir,
        debug_log_documents=debug_log_documents,
    )
