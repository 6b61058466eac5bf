"""Configuration constants for the Romaneio builder."""

import re
from typing import Dict, List, Pattern, Tuple

# ============================================================================
# FIXED-COLUMN LAYOUT
# ============================================================================

# Header/legend block at the top of the fixed-column export
FIXED_HEADER_ROWS: int = 9

# Column positions (0-based): A = service id, C = address
FIXED_ID_COL: int = 0
FIXED_ADDRESS_COL: int = 2

# ============================================================================
# HEADER-MATCHED LAYOUT
# ============================================================================

# Logical field -> substrings searched (lower-case) in the header row
HEADER_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "order_id": ("numero_da_ordem", "ordem"),
    "street": ("logradouro_destinatario", "logradouro"),
    "number": ("numero_do_destinatario", "numero_destinatario"),
    "neighborhood": ("bairro_destinatario", "bairro"),
    "city": ("cidade_destinatario", "cidade"),
    "state": ("uf_destinatario", "uf"),
    "postal_code": ("cep_destinatario", "cep"),
}

# Mandatory logical fields and the column name reported when missing
REQUIRED_HEADER_FIELDS: Dict[str, str] = {
    "order_id": "Numero_da_Ordem",
    "street": "Logradouro_Destinatario",
}

# Appended to every assembled address
COUNTRY_SUFFIX: str = ", Brasil"

# ============================================================================
# ADDRESS CLEANUP
# ============================================================================

# Ordered (pattern, replacement) table; each pattern is anchored at the start
ADDRESS_PREFIX_RULES: List[Tuple[Pattern[str], str]] = [
    (re.compile(r"^Condomínio\s+[^-]+-\s*", re.IGNORECASE), ""),
    (re.compile(r"^Condominio\s+[^-]+-\s*", re.IGNORECASE), ""),
    (re.compile(r"^Edifício\s+[^-]+-\s*", re.IGNORECASE), ""),
    (re.compile(r"^Edificio\s+[^-]+-\s*", re.IGNORECASE), ""),
    (re.compile(r"^Cond\.\s+[^-]+-\s*", re.IGNORECASE), ""),
    (re.compile(r"^Prédio\s+[^-]+-\s*", re.IGNORECASE), ""),
    (re.compile(r"^Predio\s+[^-]+-\s*", re.IGNORECASE), ""),
]

# ============================================================================
# OUTPUT WORKBOOK
# ============================================================================

# Separator for service ids sharing one address
ID_SEPARATOR: str = ", "

# Column display widths (A consolidated / A flat / B)
COLUMN_WIDTHS: Dict[str, int] = {
    "ids_consolidated": 50,
    "ids_flat": 30,
    "address": 40,
}

SHEET_FIXED_COLUMN: str = "Dados Processados"
SHEET_HEADER_MATCHED: str = "Dados Processados TMS"
SHEET_MERGED: str = "Dados Consolidados"

# Output filenames
MANIFEST_FILENAME: str = "Romaneio_{driver}.xlsx"
MANIFEST_FILENAME_WITH_MODE: str = "Romaneio_{mode}_{driver}.xlsx"
MERGED_FILENAME: str = "Arquivo_Convertido_{timestamp}.xlsx"
MERGED_TIMESTAMP_FORMAT: str = "%Y-%m-%dT%H-%M-%S"

XLSX_MIME_TYPE: str = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# ============================================================================
# DEBUG FLAGS
# ============================================================================

# Enable debug logging and output
FLAG_DEBUG: bool = False
