"""Declarative layout of the financial report document."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


TITLE_COLOR = "2563EB"
RULE_COLOR = "E2E8F0"
FOOTER_COLOR = "64748B"

FOOTER_TIMESTAMP_FORMAT = "%B %d, %Y at %I:%M %p"


@dataclass(frozen=True)
class ReportBlock:
    """One paragraph of the document and the formatting of its single run.

    ``kind`` is ``"text"`` for a paragraph carrying ``text`` or ``"rule"`` for an
    empty paragraph drawn as a horizontal bottom border. Sizes and spacing are in
    points; ``border_size`` uses the WordprocessingML unit of eighths of a point.
    """

    kind: str
    text: str = ""
    bold: bool = False
    italic: bool = False
    size_pt: float | None = None
    color: str | None = None
    space_before_pt: float | None = None
    space_after_pt: float | None = None
    border_color: str | None = None
    border_size: int | None = None


def format_generated_on(moment: datetime) -> str:
    return f"Generated on: {moment.strftime(FOOTER_TIMESTAMP_FORMAT)}"


def build_report_blocks(
    client_name: str,
    report_type: str,
    report_year: int,
    generated_at: datetime,
) -> list[ReportBlock]:
    """Returns title, client, year, separator and footer blocks in order."""
    return [
        ReportBlock(
            kind="text",
            text=f"Financial Report: {report_type}",
            bold=True,
            size_pt=16,
            color=TITLE_COLOR,
            space_after_pt=20,
        ),
        ReportBlock(kind="text", text=f"Client: {client_name}", size_pt=12),
        ReportBlock(kind="text", text=f"Reporting Year: {report_year}", size_pt=12),
        ReportBlock(
            kind="rule",
            space_before_pt=10,
            space_after_pt=10,
            border_color=RULE_COLOR,
            border_size=12,
        ),
        ReportBlock(
            kind="text",
            text=format_generated_on(generated_at),
            italic=True,
            size_pt=10,
            color=FOOTER_COLOR,
        ),
    ]
