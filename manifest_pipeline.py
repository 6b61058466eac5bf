"""
Romaneio Builder
================

Turns carrier shipment exports into driver delivery manifests.

Main Classes:
    - WorkbookLoader: Read workbook bytes into grids
    - FixedColumnExtractor / HeaderMatchExtractor: Grid -> ServiceRecords
    - DuplicateResolver: Suffix repeated service ids (header-matched layout)
    - Consolidator: Group records by address
    - ManifestExporter: Serialize the manifest to XLSX
    - SheetMerger: Flatten a multi-sheet workbook (format converter)

Quick Start:
    ```python
    from manifest_pipeline import ManifestPipeline
    from models import ManifestLayout

    pipeline = ManifestPipeline()
    manifest = pipeline.process(data, ManifestLayout.HEADER_MATCHED)
    exported = pipeline.export(manifest, consolidate=True, driver_name="Joao")
    Path(exported.filename).write_bytes(exported.content)
    ```
"""

import logging
from typing import Awaitable, Callable, Dict, List, Optional

from builders.consolidator import Consolidator
from builders.duplicate_resolver import DuplicateResolver
from errors import ReadError
from exporters.manifest_exporter import ManifestExporter
from exporters.sheet_merger import SheetMerger
from extractors.base import BaseExtractor
from extractors.fixed_column import FixedColumnExtractor
from extractors.header_match import HeaderMatchExtractor
from loaders.workbook_loader import WorkbookLoader
from models import ExportedFile, Manifest, ManifestLayout, ServiceRecord
from normalizers.address_normalizer import AddressNormalizer
from utils.step_timer import StepTimer


class ManifestPipeline:
    """
    extraction -> duplicate resolution -> consolidation -> serialization.

    Every run is synchronous and all-or-nothing: any stage failure raises
    and nothing is returned.
    """

    def __init__(
        self,
        loader: Optional[WorkbookLoader] = None,
        normalizer: Optional[AddressNormalizer] = None,
        exporter: Optional[ManifestExporter] = None,
        timer: Optional[StepTimer] = None,
    ):
        self.loader = loader or WorkbookLoader()
        normalizer = normalizer or AddressNormalizer()
        self.extractors: Dict[ManifestLayout, BaseExtractor] = {
            ManifestLayout.FIXED_COLUMN: FixedColumnExtractor(normalizer),
            ManifestLayout.HEADER_MATCHED: HeaderMatchExtractor(normalizer),
        }
        self.resolver = DuplicateResolver()
        self.consolidator = Consolidator()
        self.exporter = exporter or ManifestExporter()
        self.timer = timer or StepTimer()

    def process_grid(self, grid, layout: ManifestLayout) -> Manifest:
        """
        Extract, disambiguate and consolidate an already-loaded grid.

        Raises:
            ExtractionError: If no valid rows are found or a mandatory column is missing
        """
        layout = ManifestLayout(layout)
        with self.timer.timeit("extract"):
            records: List[ServiceRecord] = self.extractors[layout].extract(grid)
        if layout is ManifestLayout.HEADER_MATCHED:
            with self.timer.timeit("resolve duplicates"):
                records = self.resolver.resolve(records)
        with self.timer.timeit("consolidate"):
            groups = self.consolidator.consolidate(records)
        return Manifest(layout=layout, records=records, groups=groups)

    def process(self, data: bytes, layout: ManifestLayout, filename: Optional[str] = None) -> Manifest:
        """
        Run the manifest pipeline on raw workbook bytes.

        Args:
            data: Raw workbook bytes
            layout: Which carrier layout the file follows
            filename: Original filename (engine hint only)

        Raises:
            ReadError: If the bytes are not a readable workbook
            ExtractionError: If nothing can be extracted
        """
        with self.timer.timeit("load"):
            grid = self.loader.load_grid(data, filename)
        return self.process_grid(grid, layout)

    def export(self, manifest: Manifest, consolidate: bool, driver_name: str) -> ExportedFile:
        """
        Raises:
            ValueError: If the driver name is blank
            SerializationError: If the workbook cannot be written
        """
        with self.timer.timeit("export"):
            return self.exporter.export(manifest, consolidate, driver_name)

    def run(
        self,
        data: bytes,
        layout: ManifestLayout,
        driver_name: str,
        consolidate: bool = True,
        filename: Optional[str] = None,
    ) -> ExportedFile:
        """process() followed by export() in one call."""
        manifest = self.process(data, layout, filename)
        return self.export(manifest, consolidate, driver_name)

    def merge_sheets(self, data: bytes, filename: Optional[str] = None) -> ExportedFile:
        """Format converter: flatten every sheet of a workbook into one."""
        with self.timer.timeit("merge"):
            return SheetMerger(self.loader).merge_workbook(data, filename)


class ManifestSession:
    """
    Holds the manifest of the currently selected file.

    Each file selection starts a new run with a higher run id. Reading the
    bytes is the only await; when it resumes, a run whose id is no longer
    the latest is discarded so a slow earlier selection never overwrites a
    newer one.
    """

    def __init__(self, pipeline: Optional[ManifestPipeline] = None):
        self.pipeline = pipeline or ManifestPipeline()
        self.current: Optional[Manifest] = None
        self.current_source: Optional[str] = None
        self._latest_run = 0

    @property
    def latest_run(self) -> int:
        return self._latest_run

    def begin_run(self) -> int:
        """Start a new run; every earlier run becomes stale."""
        self._latest_run += 1
        self.current = None
        self.current_source = None
        return self._latest_run

    def is_current(self, run_id: int) -> bool:
        return run_id == self._latest_run

    def complete_run(self, run_id: int, manifest: Manifest, source: Optional[str] = None) -> bool:
        """
        Store a finished manifest unless its run has been superseded.

        Returns:
            True if stored, False if the result was stale and dropped
        """
        if not self.is_current(run_id):
            logging.info(
                f"[session] Dropping result of run {run_id}; run {self._latest_run} is newer"
            )
            return False
        self.current = manifest
        self.current_source = source
        return True

    async def process_file(
        self,
        read: Callable[[], Awaitable[bytes]],
        layout: ManifestLayout,
        filename: Optional[str] = None,
    ) -> Optional[Manifest]:
        """
        Read a selected file and build its manifest.

        Args:
            read: Coroutine function returning the file bytes
            layout: Which carrier layout the file follows
            filename: Original filename (engine hint, kept as the source tag)

        Returns:
            The manifest, or None if a newer selection superseded this run

        Raises:
            ReadError: If reading fails (for the current run only)
            ExtractionError: If nothing can be extracted
        """
        run_id = self.begin_run()
        try:
            data = await read()
        except Exception as exc:
            # any reader failure counts as a read failure of this run
            if not self.is_current(run_id):
                logging.info(f"[session] Ignoring read failure of stale run {run_id}")
                return None
            if isinstance(exc, ReadError):
                raise
            raise ReadError(f"could not read file: {exc}") from exc

        if not self.is_current(run_id):
            logging.info(f"[session] Run {run_id} superseded while reading; skipped")
            return None

        manifest = self.pipeline.process(data, layout, filename)
        self.complete_run(run_id, manifest, filename)
        return manifest

    def export(self, consolidate: bool, driver_name: str) -> ExportedFile:
        """
        Export the current manifest.

        Raises:
            ValueError: If no manifest has been processed yet or the driver name is blank
        """
        if self.current is None:
            raise ValueError("no manifest processed yet")
        return self.pipeline.export(self.current, consolidate, driver_name)
