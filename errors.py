"""Exceptions raised by the manifest pipeline."""


class ManifestError(Exception):
    """Base class for every failure of a pipeline run."""


class ReadError(ManifestError, IOError):
    """The input bytes could not be read or parsed as a workbook."""


class ExtractionError(ManifestError, ValueError):
    """No valid rows were found, or a mandatory column is missing."""


class SerializationError(ManifestError, IOError):
    """The output workbook could not be built."""
