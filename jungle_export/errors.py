"""Exception classes for the JuNGLE exporter."""


class JungleExportError(Exception):
    """Base exception for all export errors."""


class ConfigurationError(JungleExportError, ValueError):
    """Raised when the export settings are missing or invalid."""


class EmptyModelError(JungleExportError):
    """Raised when the model has no visible track to export."""


class DataError(JungleExportError):
    """Raised when spot data cannot be turned into valid output."""


class GraphCycleDetected(DataError):
    """Raised when a lineage graph loops back along its child edges."""

    def __init__(self, spot=None):
        if spot is not None:
            msg = f"Lineage graph contains a cycle through spot {spot}"
        else:
            msg = "Lineage graph contains a cycle"
        super().__init__(msg)
        self.spot = spot


class TrackMateFormatError(JungleExportError, ValueError):
    """Raised when a TrackMate XML file holds no usable data."""


class DocumentWriteError(JungleExportError, OSError):
    """Raised when one of the two documents cannot be written."""

    def __init__(self, document, path, reason=None):
        msg = f"Trouble writing {document} to {path}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
        self.document = document
        self.path = path
