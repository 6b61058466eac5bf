"""
Exporters Package
=================

This package contains all workbook output functionality.

Classes:
    - ManifestExporter: Driver manifest (flat or consolidated)
    - SheetMerger: Multi-sheet workbook flattened into one sheet

Usage:
    from exporters import ManifestExporter

    exporter = ManifestExporter()
    exported = exporter.export(manifest, consolidate=True, driver_name="Joao")
"""

from .manifest_exporter import ManifestExporter
from .sheet_merger import SheetMerger

__all__ = [
    "ManifestExporter",
    "SheetMerger",
]
