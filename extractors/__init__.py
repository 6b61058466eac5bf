"""
Extractors Package
==================

One extractor per carrier export layout. Both share
`extract(grid) -> List[ServiceRecord]`; the caller picks one explicitly.

Classes:
    - FixedColumnExtractor: id and address at fixed column/row positions
    - HeaderMatchExtractor: columns located by header text, address assembled
"""

from .base import BaseExtractor
from .fixed_column import FixedColumnExtractor
from .header_match import HeaderMatchExtractor

__all__ = [
    "BaseExtractor",
    "FixedColumnExtractor",
    "HeaderMatchExtractor",
]
