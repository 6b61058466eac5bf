"""Common base for the carrier-layout extractors."""

import logging
from typing import Any, List, Optional, Sequence

from errors import ExtractionError
from models import ServiceRecord
from normalizers.address_normalizer import AddressNormalizer
from utils.helpers import cell_to_str

Grid = Sequence[Sequence[Any]]


class BaseExtractor:
    """
    Turn a grid of raw cells into an ordered list of ServiceRecord.

    Subclasses implement `_iter_records`; the base class enforces the
    shared contract: no record with an empty id or address, and an
    ExtractionError instead of an empty result.
    """

    label = "extractor"

    def __init__(self, normalizer: Optional[AddressNormalizer] = None):
        self.normalizer = normalizer or AddressNormalizer()

    @staticmethod
    def _cell(row: Optional[Sequence[Any]], index: Optional[int]) -> str:
        if row is None or index is None or index >= len(row):
            return ""
        return cell_to_str(row[index])

    def _make_record(self, row_num: int, service_id: str, raw_address: str) -> Optional[ServiceRecord]:
        address = self.normalizer.normalize(raw_address)
        if not service_id or not address:
            logging.debug(f"[{self.label}] Row {row_num}: empty after cleanup; skipped")
            return None
        return ServiceRecord(id=service_id, address=address)

    def _iter_records(self, grid: Grid):
        raise NotImplementedError

    def extract(self, grid: Grid) -> List[ServiceRecord]:
        """
        Args:
            grid: Rows of the first sheet, each a list of raw cell values

        Returns:
            Records in source-row order

        Raises:
            ExtractionError: If no valid row is found
        """
        records = [r for r in self._iter_records(grid) if r is not None]
        if not records:
            raise ExtractionError("no valid rows")
        logging.info(f"[{self.label}] Extracted {len(records)} record(s)")
        return records
