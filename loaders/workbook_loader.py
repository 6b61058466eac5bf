"""Workbook loader: raw spreadsheet bytes -> grids of cell values."""

import io
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd

from errors import ReadError

Grid = List[List[Any]]

# File signatures
XLSX_MAGIC = b"PK\x03\x04"
XLS_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"

ENGINE_BY_SUFFIX = {
    ".xlsx": "openpyxl",
    ".xlsm": "openpyxl",
    ".xls": "xlrd",
}


class WorkbookLoader:
    """Read workbook bytes into plain row/column grids."""

    def read_bytes(self, path: Union[str, Path]) -> bytes:
        """
        Read a file from disk.

        Raises:
            ReadError: If the file cannot be read
        """
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise ReadError(f"could not read {path.name}: {exc}") from exc
        logging.info(f"[loader] Read {len(data)} bytes from {path.name}")
        return data

    def detect_engine(self, data: bytes, filename: Optional[str] = None) -> str:
        """
        Pick the pandas engine for a workbook.

        The file signature wins; the filename suffix is only consulted when
        the signature is not recognized.

        Raises:
            ReadError: If the input is empty or not a known workbook format
        """
        if not data:
            raise ReadError("empty file")
        if data.startswith(XLSX_MAGIC):
            return "openpyxl"
        if data.startswith(XLS_MAGIC):
            return "xlrd"
        if filename:
            engine = ENGINE_BY_SUFFIX.get(Path(filename).suffix.lower())
            if engine:
                return engine
        raise ReadError("unsupported workbook format (expected .xlsx or .xls)")

    def _read(self, data: bytes, filename: Optional[str], sheet_name) -> Any:
        engine = self.detect_engine(data, filename)
        try:
            return pd.read_excel(
                io.BytesIO(data),
                sheet_name=sheet_name,
                header=None,
                dtype=object,
                engine=engine,
            )
        except Exception as exc:
            raise ReadError(f"could not parse workbook: {exc}") from exc

    @staticmethod
    def _to_grid(df: pd.DataFrame) -> Grid:
        """DataFrame -> list of rows, NaN cells replaced by None."""
        if df.empty:
            return []
        cleaned = df.astype(object).where(pd.notna(df), None)
        return cleaned.values.tolist()

    @staticmethod
    def _trim_leading_blank_rows(grid: Grid) -> Grid:
        """Start the grid at the sheet's used range (first row with a value)."""
        for index, row in enumerate(grid):
            if any(cell is not None for cell in row):
                return grid[index:]
        return []

    def load_grid(self, data: bytes, filename: Optional[str] = None) -> Grid:
        """
        Read the first sheet of a workbook.

        Blank rows between data rows are kept so row positions match the sheet.

        Args:
            data: Raw workbook bytes
            filename: Original filename, used as a hint for the engine

        Returns:
            List of rows, each a list of raw cell values (None for blanks)
        """
        df = self._read(data, filename, sheet_name=0)
        grid = self._to_grid(df)
        logging.info(f"[loader] First sheet has {len(grid)} rows")
        return grid

    def load_sheets(self, data: bytes, filename: Optional[str] = None) -> Dict[str, Grid]:
        """
        Read every sheet of a workbook, in workbook order.

        Each grid starts at the first non-blank row, so row 0 is the sheet's
        header even when the data does not begin at row 1.

        Returns:
            Mapping of sheet name -> grid
        """
        frames = self._read(data, filename, sheet_name=None)
        sheets = {
            str(name): self._trim_leading_blank_rows(self._to_grid(df))
            for name, df in frames.items()
        }
        logging.info(
            f"[loader] Workbook has {len(sheets)} sheet(s): {', '.join(sheets) or '-'}"
        )
        return sheets
