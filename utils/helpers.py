"""Helper utility functions for the Romaneio builder."""

from datetime import datetime, timezone
from typing import Optional

import numpy as np
import pandas as pd

from config import MERGED_TIMESTAMP_FORMAT


def is_blank(val) -> bool:
    """
    Check if a cell value is considered empty.

    Returns True if value is:
    - NaN / None / NaT
    - Empty string ""
    - String containing only whitespace

    Args:
        val: Value to check (any type)

    Returns:
        True if value is considered empty, False otherwise
    """
    if val is None:
        return True
    if isinstance(val, str):
        return val.strip() == ""
    try:
        return bool(pd.isna(val))
    except (TypeError, ValueError):
        return False


def cell_to_str(val) -> str:
    """
    Coerce a raw spreadsheet cell to trimmed text.

    - Blank cells become ""
    - Integral floats lose their ".0" (Excel stores 49 as 49.0)
    - Everything else goes through str()

    Examples:
        >>> cell_to_str(49.0)
        '49'
        >>> cell_to_str(float("nan"))
        ''
        >>> cell_to_str("  Rua X ")
        'Rua X'
    """
    if is_blank(val):
        return ""
    if isinstance(val, (bool, np.bool_)):
        return str(bool(val)).lower()
    if isinstance(val, (int, np.integer)):
        return str(int(val))
    if isinstance(val, (float, np.floating)):
        f = float(val)
        if np.isfinite(f) and f.is_integer():
            return str(int(f))
        return repr(f)
    return str(val).strip()


def safe_filename_part(text: str) -> str:
    """Trim text and replace path separators so it can sit inside a filename."""
    return text.strip().replace("/", "_").replace("\\", "_")


def generation_timestamp(now: Optional[datetime] = None) -> str:
    """
    Timestamp used in generated filenames, e.g. '2025-01-15T10-30-00'.

    Args:
        now: Moment to format (defaults to current UTC time)
    """
    now = now or datetime.now(timezone.utc)
    return now.strftime(MERGED_TIMESTAMP_FORMAT)
