"""Domain models for report generation flow."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True)
class ReportCommand:
    """Input command to build a financial report."""

    client_name: str
    report_type: str
    report_year: int | None = None


@dataclass(frozen=True)
class GeneratedReport:
    """Output of report generation."""

    file_path: Path
    report_year: int
    generated_at: datetime

    @property
    def file_name(self) -> str:
        return self.file_path.name
