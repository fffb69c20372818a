from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from tmap.services.edges import EdgeTypeNamespace

# Load repo-level .env so default_factory lookups see those values.
load_dotenv(dotenv_path=Path(__file__).resolve().parent.parent / ".env", override=False)

DEFAULT_EDGE_TYPES_PATH = EdgeTypeNamespace.edge_types_path
DEFAULT_PLUGIN_ROOT = EdgeTypeNamespace.plugin_root
DEFAULT_JSON_SPACES = EdgeTypeNamespace.json_spaces


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


@dataclass
class Config:
    """Shared configuration loaded from environment variables."""

    ENV: str = field(default_factory=lambda: os.getenv("APP_ENV", "dev"))
    EDGE_TYPES_PATH: str = field(default_factory=lambda: os.getenv("EDGE_TYPES_PATH", DEFAULT_EDGE_TYPES_PATH))
    PLUGIN_ROOT: str = field(default_factory=lambda: os.getenv("PLUGIN_ROOT", DEFAULT_PLUGIN_ROOT))
    JSON_SPACES: int = field(default_factory=lambda: _env_int("JSON_SPACES", DEFAULT_JSON_SPACES))
    AUTHOR: Optional[str] = field(default_factory=lambda: os.getenv("TMAP_AUTHOR") or None)
    RECORD_DB_PATH: Optional[Path] = field(default=None)
    RECORD_DB_DIR: Optional[Path] = field(default=None)
    SEED_BUILTIN_TYPES: Optional[bool] = field(default=None)

    def __post_init__(self) -> None:
        self.EDGE_TYPES_PATH = self.EDGE_TYPES_PATH.rstrip("/")
        # Values passed explicitly win over the environment.
        if self.SEED_BUILTIN_TYPES is None:
            self.SEED_BUILTIN_TYPES = _env_flag("SEED_BUILTIN_TYPES", "1")
        if self.RECORD_DB_DIR is None:
            self.RECORD_DB_DIR = self._resolve_optional_path("RECORD_DB_DIR") or Path("records_db")
        self.RECORD_DB_DIR = Path(self.RECORD_DB_DIR)
        if self.RECORD_DB_PATH is None:
            self.RECORD_DB_PATH = self._resolve_optional_path("RECORD_DB_PATH") or (self.RECORD_DB_DIR / "records.db")
        self.RECORD_DB_PATH = Path(self.RECORD_DB_PATH)

    def _resolve_optional_path(self, env_key: str) -> Optional[Path]:
        raw = os.getenv(env_key)
        if not raw:
            return None
        return Path(raw).expanduser()

    def namespace(self) -> EdgeTypeNamespace:
        return EdgeTypeNamespace(
            edge_types_path=self.EDGE_TYPES_PATH,
            plugin_root=self.PLUGIN_ROOT,
            json_spaces=self.JSON_SPACES,
        )
