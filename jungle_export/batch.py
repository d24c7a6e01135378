import glob
import os

import pandas as pd

from .config import ExportSettings
from .errors import ConfigurationError, TrackMateFormatError
from .exporter import export_model, output_paths
from .io import parse_trackmate_xml
from .log import get_logger
from .tracks import filter_tracks_by_duration, restrict_visible_tracks, summarize_tracks

logger = get_logger(__name__)


def export_trackmate_file(xml_path, settings, min_duration=None, max_duration=None):
    """
    Export one TrackMate XML file.

    Tracks outside ``[min_duration, max_duration]`` frames are hidden
    before the export. Returns a summary dict for the file.
    """
    model = parse_trackmate_xml(xml_path)
    if min_duration is not None or max_duration is not None:
        track_stats = filter_tracks_by_duration(
            summarize_tracks(model), min_duration=min_duration, max_duration=max_duration
        )
        restrict_visible_tracks(model, track_stats)

    source = os.path.abspath(str(xml_path))
    if any(os.path.abspath(str(p)) == source for p in output_paths(model, settings)):
        raise ConfigurationError(f"Export of {xml_path} would overwrite the input file")

    paths = export_model(model, settings)
    return {
        "xml_file": os.path.basename(str(xml_path)),
        "n_spots": len(model),
        "n_tracks": model.n_tracks(visible_only=True),
        "n_frames": model.n_frames,
        "phyloxml": str(paths[0]) if paths else None,
        "metaxml": str(paths[1]) if paths else None,
    }


def export_trackmate_folder(folder, out_root, project_name=None, interval=8.0,
                            population_scope="all", min_duration=None, max_duration=None):
    """
    Export every TrackMate XML file in a folder and write a TSV summary.

    Each file gets its own PhyloXML/MetaXML pair in ``out_root``; the
    project name defaults to the file name without extension.
    """
    rows = []
    os.makedirs(out_root, exist_ok=True)

    for xml_path in sorted(glob.glob(os.path.join(folder, "*.xml"))):
        fname = os.path.basename(xml_path)
        if fname.endswith("_meta.xml"):
            continue
        logger.info("Processing %s ...", fname)
        settings = ExportSettings(
            project_name=project_name or os.path.splitext(fname)[0],
            interval=interval,
            destination=out_root,
            population_scope=population_scope,
        )
        try:
            rows.append(export_trackmate_file(
                xml_path, settings, min_duration=min_duration, max_duration=max_duration
            ))
        except TrackMateFormatError as e:
            # earlier phyloXML output or other non-TrackMate XML
            logger.warning("Skipping %s: %s", fname, e)

    if not rows:
        logger.warning("No TrackMate XML files found in %s", folder)
        return pd.DataFrame()

    summary = pd.DataFrame(rows)
    summary_path = os.path.join(out_root, "export_summary.tsv")
    summary.to_csv(summary_path, sep="\t", index=False)
    logger.info("Saved export summary to %s", summary_path)
    return summary
