"""
Sheet Merger Module
===================

Format converter: flattens every sheet of a workbook (XLS or XLSX) into a
single XLSX sheet. Independent from the manifest pipeline.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from config import MERGED_FILENAME, SHEET_MERGED
from exporters.manifest_exporter import write_rows_xlsx
from loaders.workbook_loader import WorkbookLoader
from models import ExportedFile
from utils.helpers import generation_timestamp


class SheetMerger:
    """
    Concatenate sheets in workbook order.

    The first sheet contributes every row. Each later sheet drops its first
    row, which is always treated as a repeated header. Columns are assumed
    identical across sheets; nothing is realigned or deduplicated.
    """

    def __init__(self, loader: Optional[WorkbookLoader] = None):
        self.loader = loader or WorkbookLoader()

    @staticmethod
    def merge_rows(sheets: Dict[str, Sequence[Sequence[Any]]]) -> List[list]:
        merged: List[list] = []
        for position, (name, rows) in enumerate(sheets.items()):
            kept = rows if position == 0 else rows[1:]
            merged.extend(list(row) for row in kept)
            logging.debug(f"[merge] Sheet '{name}': {len(kept)} of {len(rows)} row(s) kept")
        return merged

    def merge(self, sheets: Dict[str, Sequence[Sequence[Any]]]) -> bytes:
        """
        Args:
            sheets: Sheet name -> grid, in workbook order

        Returns:
            XLSX bytes with one sheet holding every merged row

        Raises:
            SerializationError: If the workbook cannot be written
        """
        rows = self.merge_rows(sheets)
        content = write_rows_xlsx(rows, SHEET_MERGED)
        logging.info(f"[merge] Merged {len(sheets)} sheet(s) into {len(rows)} row(s)")
        return content

    def merge_workbook(
        self, data: bytes, filename: Optional[str] = None, now: Optional[datetime] = None
    ) -> ExportedFile:
        """
        Read a workbook and merge its sheets.

        Args:
            data: Raw workbook bytes
            filename: Original filename (engine hint only)
            now: Generation time used in the output filename

        Raises:
            ReadError: If the workbook cannot be read
            SerializationError: If the output cannot be written
        """
        sheets = self.loader.load_sheets(data, filename)
        content = self.merge(sheets)
        out_name = MERGED_FILENAME.format(timestamp=generation_timestamp(now))
        return ExportedFile(filename=out_name, content=content)
