from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from config import SHEET_FIXED_COLUMN, SHEET_HEADER_MATCHED, XLSX_MIME_TYPE


class ManifestLayout(Enum):
    FIXED_COLUMN = "fixed-column"
    HEADER_MATCHED = "header-matched"

    @property
    def sheet_name(self) -> str:
        if self is ManifestLayout.HEADER_MATCHED:
            return SHEET_HEADER_MATCHED
        return SHEET_FIXED_COLUMN

    @property
    def filename_mode(self) -> Optional[str]:
        """Mode tag placed in the output filename (None for the plain manifest)."""
        if self is ManifestLayout.HEADER_MATCHED:
            return "TMS"
        return None


@dataclass(frozen=True)
class ServiceRecord:
    id: str
    address: str


@dataclass(frozen=True)
class ConsolidatedGroup:
    address: str
    service_ids: List[str] = field(default_factory=list)


@dataclass
class Manifest:
    layout: ManifestLayout
    records: List[ServiceRecord] = field(default_factory=list)
    groups: List[ConsolidatedGroup] = field(default_factory=list)


@dataclass(frozen=True)
class ExportedFile:
    filename: str
    content: bytes
    mime_type: str = XLSX_MIME_TYPE
