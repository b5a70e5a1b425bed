"""Filesystem storage for generated report documents."""
from __future__ import annotations

import logging
import os
import re
import secrets
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Callable

from app.report.exceptions import ReportNotFoundError


logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[\\/:]")

# Filesystems cap a name at 255 bytes; prefix + two parts + stamp + suffix stay under it.
MAX_PART_BYTES = 80
MAX_PREFIX_BYTES = 40


def _truncate_utf8(value: str, max_bytes: int) -> str:
    return value.encode("utf-8")[:max_bytes].decode("utf-8", errors="ignore")


def sanitize_filename_part(value: str, max_bytes: int = MAX_PART_BYTES) -> str:
    """Replaces whitespace with underscores, drops path separators and colons, caps the UTF-8 length."""
    return _truncate_utf8(_UNSAFE_FILENAME_CHARS.sub("", re.sub(r"\s", "_", value)), max_bytes)


def build_file_name(
    prefix: str,
    client_name: str,
    report_type: str,
    moment: datetime,
    suffix: str | None = None,
) -> str:
    suffix = suffix or secrets.token_hex(4)
    return (
        f"{sanitize_filename_part(prefix, MAX_PREFIX_BYTES)}"
        f"_{sanitize_filename_part(client_name)}_{sanitize_filename_part(report_type)}"
        f"_{moment:%Y%m%d_%H%M%S}_{suffix}.docx"
    )


class ReportStorage:
    """Stores documents under a single root directory.

    Writes go to a temporary file in the root and are renamed into place only
    after the writer returns, so a failed build never leaves a file under its
    final name.
    """

    def __init__(self, root: Path):
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def save(self, file_name: str, writer: Callable[[str], None]) -> Path:
        self._root.mkdir(parents=True, exist_ok=True)
        target = self._root / file_name

        fd, tmp_name = tempfile.mkstemp(dir=self._root, prefix=".tmp_", suffix=".docx")
        os.close(fd)
        try:
            writer(tmp_name)
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.info("Report stored | path=%s", target)
        return target

    def resolve(self, file_name: str) -> Path:
        name = file_name.strip()
        if not name or name.startswith(".") or "\\" in name or name != Path(name).name:
            raise ReportNotFoundError(f"Report not found: {file_name}")

        candidate = self._root / name
        if not candidate.is_file():
            raise ReportNotFoundError(f"Report not found: {file_name}")
        return candidate
