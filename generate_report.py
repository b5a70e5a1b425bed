"""
Generates a financial report document from the command line.
Uses the same builder, storage and logging as the HTTP API.
"""
import sys
import logging
import argparse
from pathlib import Path
from uuid import uuid4

from app.core.logging_config import bind_request_id, configure_logging
from app.core.settings import get_settings
from app.report.exceptions import ReportError
from app.report.models import ReportCommand
from app.report.service import ReportGenerationService
from app.report.storage import ReportStorage

logger = logging.getLogger(__name__)


def run_generation(
    client_name: str,
    report_type: str,
    report_year: int | None = None,
    output_dir: str | None = None,
) -> Path:
    """
    Builds one report and returns the stored file path.
    """
    settings = get_settings()
    root = Path(output_dir).expanduser().resolve() if output_dir else settings.reports_dir

    service = ReportGenerationService(
        storage=ReportStorage(root=root),
        file_prefix=settings.report_file_prefix,
    )
    result = service.generate(
        ReportCommand(client_name=client_name, report_type=report_type, report_year=report_year)
    )
    return result.file_path


def main(argv: list[str] | None = None) -> int:
    """Entry point."""
    configure_logging(get_settings())

    parser = argparse.ArgumentParser(
        description='Financial report generator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
    Examples:
      python generate_report.py --client "Acme Corporation" --type "P&L" --year 2024
      python generate_report.py --client "TechStart Industries" --type "Balance Sheet"
      python generate_report.py -c "Global Finance Ltd" -t "Cash Flow" -o ./out
    """
    )

    parser.add_argument('--client', '-c', type=str, required=True, help='Client name or ID')
    parser.add_argument('--type', '-t', dest='report_type', type=str, required=True,
                        help='Report type (P&L, Balance Sheet, Cash Flow, ...)')
    parser.add_argument('--year', '-y', type=int, default=None, help='Fiscal year (default: current year)')
    parser.add_argument('--output-dir', '-o', type=str, default=None,
                        help='Directory for the document (default: REPORTS_DIR)')

    args = parser.parse_args(argv)

    with bind_request_id(f"cli-{uuid4().hex[:8]}"):
        try:
            path = run_generation(args.client, args.report_type, args.year, args.output_dir)
        except ReportError as e:
            logger.error("Report generation failed: %s", e)
            return 1

    print(path)
    return 0


if __name__ == '__main__':
    sys.exit(main())
