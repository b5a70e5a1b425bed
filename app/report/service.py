"""Coordinates report generation end-to-end."""
from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Callable

from app.report.blocks import build_report_blocks
from app.report.exceptions import InvalidReportRequestError, ReportGenerationError
from app.report.models import GeneratedReport, ReportCommand
from app.report.renderer import render_document
from app.report.storage import ReportStorage, build_file_name


logger = logging.getLogger(__name__)

# Characters that are not allowed in XML 1.0 text; tab, LF and CR are.
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


def ensure_printable(value: str, label: str) -> str:
    if _CONTROL_CHARS.search(value):
        raise InvalidReportRequestError(f"{label} contains unsupported control characters")
    return value


class ReportGenerationService:
    """Validates a command, lays out the report and stores the rendered document."""

    def __init__(
        self,
        storage: ReportStorage,
        file_prefix: str = "FinancialReport",
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._storage = storage
        self._file_prefix = file_prefix
        self._clock = clock

    def generate(self, command: ReportCommand) -> GeneratedReport:
        if not command.client_name or not command.client_name.strip():
            raise InvalidReportRequestError("Client name is required")
        if not command.report_type or not command.report_type.strip():
            raise InvalidReportRequestError("Report type is required")
        ensure_printable(command.client_name, "Client name")
        ensure_printable(command.report_type, "Report type")

        now = self._clock()
        report_year = command.report_year if command.report_year is not None else now.year

        logger.info(
            "Generating report | client=%s | type=%s | year=%d",
            command.client_name,
            command.report_type,
            report_year,
        )

        blocks = build_report_blocks(command.client_name, command.report_type, report_year, now)
        file_name = build_file_name(self._file_prefix, command.client_name, command.report_type, now)
        title = blocks[0].text

        try:
            path = self._storage.save(file_name, lambda target: render_document(blocks, target, title=title))
        except (OSError, ValueError) as exc:
            raise ReportGenerationError(f"Failed to write report {file_name}: {exc}") from exc

        logger.info("Report generated successfully | path=%s", path)
        return GeneratedReport(file_path=path, report_year=report_year, generated_at=now)
