"""Custom errors for report generation."""


class ReportError(RuntimeError):
    """Base error for report generation failures."""


class InvalidReportRequestError(ReportError, ValueError):
    """Raised when a report request is missing required data."""


class ReportGenerationError(ReportError):
    """Raised when the document cannot be built or stored."""


class ReportNotFoundError(ReportError):
    """Raised when a requested report file does not exist in storage."""
