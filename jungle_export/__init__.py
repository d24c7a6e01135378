"""
jungle_export
-------------
Export TrackMate tracking data to the PhyloXML/MetaXML pair read by the
JuNGLE lineage viewer.

Modules:
    model.py      - Spots, tracks and the lineage graph
    io.py         - TrackMate XML reading, document writing
    registry.py   - Spot identifiers shared by both documents
    formatting.py - Fixed-point number formatting
    phyloxml.py   - Lineage tree document
    metaxml.py    - Frame and cell metadata document
    exporter.py   - Export session and file output
    tracks.py     - Track summaries and filtering
    batch.py      - Folder-level export
"""

from .config import ExportSettings
from .errors import (
    ConfigurationError,
    DataError,
    DocumentWriteError,
    EmptyModelError,
    GraphCycleDetected,
    JungleExportError,
    TrackMateFormatError,
)
from .exporter import ExportSession, export_model, marshall_model
from .io import parse_trackmate_xml
from .model import Spot, TrackModel

__version__ = "1.0.0"

__all__ = [
    "ConfigurationError",
    "DataError",
    "DocumentWriteError",
    "EmptyModelError",
    "ExportSession",
    "ExportSettings",
    "GraphCycleDetected",
    "JungleExportError",
    "Spot",
    "TrackMateFormatError",
    "TrackModel",
    "export_model",
    "marshall_model",
    "parse_trackmate_xml",
]
