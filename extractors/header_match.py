"""Extractor for the header-matched (TMS) carrier export."""

import logging
from typing import Any, Dict, Optional, Sequence

from config import COUNTRY_SUFFIX, HEADER_KEYWORDS, REQUIRED_HEADER_FIELDS
from errors import ExtractionError
from extractors.base import BaseExtractor, Grid
from utils.helpers import cell_to_str

ColumnMapping = Dict[str, int]

# (logical field, separator placed before it); street opens the address
ADDRESS_PARTS = (
    ("number", ", "),
    ("neighborhood", " - "),
    ("city", ", "),
    ("state", " - "),
    ("postal_code", ", "),
)


def resolve_columns(header_row: Optional[Sequence[Any]]) -> ColumnMapping:
    """
    Locate logical fields in the header row.

    Each header cell is lower-cased and searched for the keywords of every
    logical field. The first cell matching a field wins it; later matches
    for the same field are ignored.

    Args:
        header_row: Row 0 of the sheet

    Returns:
        Mapping of logical field -> column index (absent fields are omitted)
    """
    mapping: ColumnMapping = {}
    for index, cell in enumerate(header_row or []):
        header = cell_to_str(cell).lower()
        if not header:
            continue
        for field, keywords in HEADER_KEYWORDS.items():
            if field in mapping:
                continue
            if any(keyword in header for keyword in keywords):
                mapping[field] = index
    return mapping


def assemble_address(parts: Dict[str, str]) -> str:
    """
    Build "Street, Number - Neighborhood, City - UF, CEP, Brasil".

    Optional parts are appended only when non-empty. Returns "" when the
    street is empty.
    """
    street = parts.get("street", "")
    if not street:
        return ""
    address = street
    for field, separator in ADDRESS_PARTS:
        value = parts.get(field, "")
        if value:
            address += f"{separator}{value}"
    return address + COUNTRY_SUFFIX


class HeaderMatchExtractor(BaseExtractor):
    """Locate columns by header text and assemble a full address per row."""

    label = "header-match"

    def resolve(self, grid: Grid) -> ColumnMapping:
        """
        Raises:
            ExtractionError: If a mandatory column is missing from row 0
        """
        mapping = resolve_columns(grid[0] if len(grid) else None)
        for field, column_name in REQUIRED_HEADER_FIELDS.items():
            if field not in mapping:
                raise ExtractionError(f"missing required column: {column_name}")
        logging.debug(f"[{self.label}] Column mapping: {mapping}")
        missing = [f for f in HEADER_KEYWORDS if f not in mapping]
        if missing:
            logging.info(f"[{self.label}] Optional columns not found: {', '.join(missing)}")
        return mapping

    def _iter_records(self, grid: Grid):
        mapping = self.resolve(grid)
        for row_num, row in enumerate(grid[1:], start=2):
            parts = {field: self._cell(row, index) for field, index in mapping.items()}
            order_id = parts["order_id"]
            if not order_id or not parts["street"]:
                logging.debug(f"[{self.label}] Row {row_num}: missing order number or street; skipped")
                continue
            yield self._make_record(row_num, order_id, assemble_address(parts))
