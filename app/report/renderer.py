"""Renders report blocks into a .docx document with python-docx."""
from __future__ import annotations

import logging
from typing import IO, Iterable

from docx import Document
from docx.oxml import parse_xml
from docx.oxml.ns import nsdecls
from docx.shared import Pt, RGBColor
from docx.text.paragraph import Paragraph

from app.report.blocks import ReportBlock


logger = logging.getLogger(__name__)


def _apply_bottom_border(paragraph: Paragraph, block: ReportBlock) -> None:
    # w:pBdr must precede w:spacing inside w:pPr.
    border = parse_xml(
        f'<w:pBdr {nsdecls("w")}>'
        f'<w:bottom w:val="single" w:sz="{block.border_size or 4}" w:space="1" '
        f'w:color="{block.border_color or "auto"}"/>'
        f"</w:pBdr>"
    )
    paragraph._p.get_or_add_pPr().append(border)


def _apply_spacing(paragraph: Paragraph, block: ReportBlock) -> None:
    fmt = paragraph.paragraph_format
    if block.space_before_pt is not None:
        fmt.space_before = Pt(block.space_before_pt)
    if block.space_after_pt is not None:
        fmt.space_after = Pt(block.space_after_pt)


def _add_run(paragraph: Paragraph, block: ReportBlock) -> None:
    run = paragraph.add_run(block.text)
    if block.bold:
        run.bold = True
    if block.italic:
        run.italic = True
    if block.size_pt is not None:
        run.font.size = Pt(block.size_pt)
    if block.color:
        run.font.color.rgb = RGBColor.from_string(block.color)


def render_document(blocks: Iterable[ReportBlock], target: str | IO[bytes], title: str | None = None) -> None:
    """Writes one paragraph per block to ``target`` (a path or binary stream)."""
    document = Document()
    if title:
        document.core_properties.title = title

    count = 0
    for block in blocks:
        paragraph = document.add_paragraph()
        if block.kind == "rule":
            _apply_bottom_border(paragraph, block)
        elif block.kind == "text":
            _add_run(paragraph, block)
        else:
            raise ValueError(f"Unknown block kind: {block.kind}")
        _apply_spacing(paragraph, block)
        count += 1

    document.save(target)
    logger.debug("Document rendered | blocks=%d", count)
