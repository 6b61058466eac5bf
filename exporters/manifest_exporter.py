"""
Manifest Exporter Module
========================

Serializes a manifest (flat or consolidated) into a single-sheet XLSX
workbook offered to the driver.

Output layout is positional, with no header row:
- Column A: service id (flat) or ", "-joined service ids (consolidated)
- Column B: delivery address
"""

import io
import logging
from typing import List, Sequence

import pandas as pd

from config import (
    COLUMN_WIDTHS,
    ID_SEPARATOR,
    MANIFEST_FILENAME,
    MANIFEST_FILENAME_WITH_MODE,
    SHEET_FIXED_COLUMN,
)
from errors import SerializationError
from models import ConsolidatedGroup, ExportedFile, Manifest, ManifestLayout, ServiceRecord
from utils.helpers import safe_filename_part

# Keep carrier text as text: no formula, URL or number conversion
XLSXWRITER_OPTIONS = {
    "strings_to_formulas": False,
    "strings_to_urls": False,
    "strings_to_numbers": False,
}


def write_rows_xlsx(rows: List[list], sheet_name: str, widths: Sequence[int] = ()) -> bytes:
    """
    Write rows to an in-memory XLSX workbook with a single sheet.

    Args:
        rows: Row values, written as-is (no header, no index)
        sheet_name: Name of the only sheet
        widths: Display widths for columns A, B, ... (optional)

    Returns:
        Workbook bytes

    Raises:
        SerializationError: If the workbook cannot be written
    """
    buffer = io.BytesIO()
    try:
        df = pd.DataFrame(rows, dtype=object)
        with pd.ExcelWriter(
            buffer, engine="xlsxwriter", engine_kwargs={"options": XLSXWRITER_OPTIONS}
        ) as writer:
            df.to_excel(writer, sheet_name=sheet_name, header=False, index=False)
            worksheet = writer.sheets[sheet_name]
            for col, width in enumerate(widths):
                worksheet.set_column(col, col, width)
    except Exception as exc:
        raise SerializationError(f"could not build workbook: {exc}") from exc
    return buffer.getvalue()


def manifest_filename(layout: ManifestLayout, driver_name: str) -> str:
    """
    Suggested download name: Romaneio_<driver>.xlsx or Romaneio_TMS_<driver>.xlsx.

    Raises:
        ValueError: If the driver name is blank
    """
    driver = safe_filename_part(driver_name or "")
    if not driver:
        raise ValueError("driver name is required")
    if layout.filename_mode:
        return MANIFEST_FILENAME_WITH_MODE.format(mode=layout.filename_mode, driver=driver)
    return MANIFEST_FILENAME.format(driver=driver)


class ManifestExporter:
    """Build the downloadable manifest workbook."""

    @staticmethod
    def to_rows(
        records: Sequence[ServiceRecord],
        groups: Sequence[ConsolidatedGroup],
        consolidate: bool,
    ) -> List[list]:
        if consolidate:
            return [[ID_SEPARATOR.join(g.service_ids), g.address] for g in groups]
        return [[r.id, r.address] for r in records]

    def build(
        self,
        records: Sequence[ServiceRecord],
        groups: Sequence[ConsolidatedGroup],
        consolidate: bool,
        sheet_name: str = SHEET_FIXED_COLUMN,
    ) -> bytes:
        """
        Serialize the manifest.

        Args:
            records: Flat records, in source order
            groups: Consolidated groups computed from the same records
            consolidate: One row per address if True, one row per record otherwise
            sheet_name: Name of the output sheet

        Returns:
            XLSX bytes

        Raises:
            SerializationError: If the workbook cannot be written
        """
        rows = self.to_rows(records, groups, consolidate)
        id_width = COLUMN_WIDTHS["ids_consolidated" if consolidate else "ids_flat"]
        content = write_rows_xlsx(rows, sheet_name, (id_width, COLUMN_WIDTHS["address"]))
        logging.info(
            f"[export] Wrote {len(rows)} {'consolidated' if consolidate else 'flat'} row(s) "
            f"to sheet '{sheet_name}' ({len(content)} bytes)"
        )
        return content

    def export(self, manifest: Manifest, consolidate: bool, driver_name: str) -> ExportedFile:
        """
        Build the workbook and its suggested filename for a processed manifest.

        Raises:
            ValueError: If the driver name is blank
            SerializationError: If the workbook cannot be written
        """
        filename = manifest_filename(manifest.layout, driver_name)
        content = self.build(
            manifest.records, manifest.groups, consolidate, sheet_name=manifest.layout.sheet_name
        )
        return ExportedFile(filename=filename, content=content)
