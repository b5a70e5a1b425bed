"""Dependency graph for report routes."""
from __future__ import annotations

from fastapi import Depends

from app.core.settings import Settings, get_settings
from app.report.service import ReportGenerationService
from app.report.storage import ReportStorage


def get_report_storage(settings: Settings = Depends(get_settings)) -> ReportStorage:
    """Builds storage rooted at the configured reports directory."""
    return ReportStorage(root=settings.reports_dir)


def get_report_service(
    settings: Settings = Depends(get_settings),
    storage: ReportStorage = Depends(get_report_storage),
) -> ReportGenerationService:
    """Builds the generation service with concrete storage."""
    return ReportGenerationService(storage=storage, file_prefix=settings.report_file_prefix)
