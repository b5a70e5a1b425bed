"""Application settings loaded from .env."""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv


load_dotenv()


DEFAULT_CORS_ORIGINS = (
    "https://shorekoya.github.io",
    "http://localhost:5500",
    "http://127.0.0.1:5500",
    "http://localhost:3000",
)


def _as_list(raw: str | None, default: tuple[str, ...]) -> tuple[str, ...]:
    if raw is None:
        return default
    values = tuple(item.strip() for item in raw.split(",") if item.strip())
    return values or default


def _resolve_project_path(raw: str, project_root: Path) -> Path:
    path = Path(raw).expanduser()
    if path.is_absolute():
        return path
    return (project_root / path).resolve()


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the report API."""

    reports_dir: Path
    report_file_prefix: str
    cors_origins: tuple[str, ...]
    log_level: str
    log_file: Path

    @classmethod
    def from_env(cls) -> "Settings":
        project_root = Path(__file__).resolve().parents[2]
        reports_default = project_root / "generated_reports"
        log_default = project_root / "logs" / "report_generator.log"

        reports_dir_raw = os.getenv("REPORTS_DIR", str(reports_default)).strip() or str(reports_default)
        log_file_raw = os.getenv("LOG_FILE", str(log_default)).strip() or str(log_default)

        return cls(
            reports_dir=_resolve_project_path(reports_dir_raw, project_root),
            report_file_prefix=os.getenv("REPORT_FILE_PREFIX", "FinancialReport").strip() or "FinancialReport",
            cors_origins=_as_list(os.getenv("CORS_ORIGINS"), DEFAULT_CORS_ORIGINS),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper().strip() or "INFO",
            log_file=_resolve_project_path(log_file_raw, project_root),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Returns cached settings instance."""
    return Settings.from_env()
