"""HTTP routes to generate and download financial reports."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import FileResponse
from pydantic import AliasChoices, BaseModel, Field, ValidationError

from app.report.dependencies import get_report_service, get_report_storage
from app.report.exceptions import InvalidReportRequestError, ReportGenerationError, ReportNotFoundError
from app.report.models import ReportCommand
from app.report.service import ReportGenerationService
from app.report.storage import ReportStorage


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["reports"])

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class ReportRequest(BaseModel):
    """Request payload sent by the task pane."""

    client_name: str | None = Field(
        None,
        validation_alias=AliasChoices("clientName", "ClientName", "client_name"),
    )
    report_type: str | None = Field(
        None,
        validation_alias=AliasChoices("reportType", "ReportType", "report_type"),
    )
    report_year: int | None = Field(
        None,
        description="Fiscal year; defaults to the current year",
        validation_alias=AliasChoices("reportYear", "ReportYear", "report_year"),
    )
    timestamp: str | None = Field(None, validation_alias=AliasChoices("timestamp", "Timestamp"))
    request_id: str | None = Field(
        None,
        validation_alias=AliasChoices("requestId", "RequestId", "request_id"),
    )


class ReportResponse(BaseModel):
    """Result payload for report generation."""

    success: bool
    message: str
    filePath: str
    fileName: str


def _describe_validation_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {error['msg']}" if location else error["msg"]


@router.post("/generate-report", response_model=ReportResponse)
async def generate_report(
    request: Request,
    service: ReportGenerationService = Depends(get_report_service),
) -> ReportResponse:
    """Builds a report document from the JSON body and returns where it was stored."""
    body = await request.body()
    if not body:
        raise HTTPException(status_code=400, detail="Request body is empty")

    try:
        payload = ReportRequest.model_validate_json(body)
    except ValidationError as exc:
        logger.warning("Invalid report payload: %s", exc)
        raise HTTPException(status_code=400, detail=f"Invalid JSON format: {_describe_validation_error(exc)}") from exc

    logger.info(
        "Report request received | client=%s | type=%s | year=%s | client_request_id=%s",
        payload.client_name,
        payload.report_type,
        payload.report_year,
        payload.request_id or "-",
    )

    command = ReportCommand(
        client_name=payload.client_name or "",
        report_type=payload.report_type or "",
        report_year=payload.report_year,
    )

    try:
        result = await run_in_threadpool(service.generate, command)
    except InvalidReportRequestError as exc:
        logger.warning("Report request rejected: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ReportGenerationError as exc:
        logger.exception("Report generation failed: %s", exc)
        raise HTTPException(status_code=500, detail=f"Error generating report: {exc}") from exc
    except Exception as exc:
        logger.exception("Unexpected error generating report: %s", exc)
        raise HTTPException(status_code=500, detail="Error generating report") from exc

    return ReportResponse(
        success=True,
        message="Report generated successfully",
        filePath=str(result.file_path),
        fileName=result.file_name,
    )


@router.get("/download/{file_name}")
def download_report(
    file_name: str,
    storage: ReportStorage = Depends(get_report_storage),
) -> FileResponse:
    """Streams a previously generated document."""
    if not file_name.strip():
        raise HTTPException(status_code=400, detail="File name is required")

    try:
        path = storage.resolve(file_name)
    except ReportNotFoundError as exc:
        logger.info("Download requested for missing report: %s", file_name)
        raise HTTPException(status_code=404, detail="File not found") from exc

    return FileResponse(path, media_type=DOCX_MEDIA_TYPE, filename=path.name)
