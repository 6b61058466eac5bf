"""Extractor for the fixed-column carrier export."""

from config import FIXED_ADDRESS_COL, FIXED_HEADER_ROWS, FIXED_ID_COL
from extractors.base import BaseExtractor, Grid


class FixedColumnExtractor(BaseExtractor):
    """
    Read service id and address from hardcoded positions.

    The export starts with a legend block of FIXED_HEADER_ROWS rows; every
    row after it carries the service id in column A and the address in
    column C. Header text is never searched.
    """

    label = "fixed-column"

    def __init__(self, normalizer=None, skip_rows: int = FIXED_HEADER_ROWS,
                 id_col: int = FIXED_ID_COL, address_col: int = FIXED_ADDRESS_COL):
        super().__init__(normalizer)
        self.skip_rows = skip_rows
        self.id_col = id_col
        self.address_col = address_col

    def _iter_records(self, grid: Grid):
        for row_num, row in enumerate(grid[self.skip_rows:], start=self.skip_rows + 1):
            service_id = self._cell(row, self.id_col)
            raw_address = self._cell(row, self.address_col)
            if not (service_id and raw_address):
                continue
            yield self._make_record(row_num, service_id, raw_address)
