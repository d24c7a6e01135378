import xml.etree.ElementTree as ET

import pandas as pd
from lxml import etree

from .errors import DocumentWriteError, TrackMateFormatError
from .log import get_logger
from .model import TrackModel

logger = get_logger(__name__)


def _localname(tag):
    """Return XML local name without namespace."""
    return tag.split('}')[-1] if '}' in tag else tag


def _number(value):
    try:
        return float(value)
    except (TypeError, ValueError):
        return value


def parse_trackmate_xml(xml_path):
    """
    Load a TrackMate XML file into a ``TrackModel``.

    Parameters
    ----------
    xml_path : str or Path
        Path to the TrackMate XML file.

    Returns
    -------
    model : TrackModel
        All spots (tracked or not), the lineage edges of every track, the
        visible (filtered) tracks and the image metadata.
    """
    tree = ET.parse(xml_path)
    root = tree.getroot()

    # Collect all spots
    spots = []
    for elem in root.iter():
        if _localname(elem.tag) == 'Spot':
            a = elem.attrib
            sid = int(a.get('ID') or a.get('id', -1))
            frame = int(float(a.get('FRAME') or a.get('frame') or a.get('POSITION_T', 0)))
            rec = {'spot_id': sid, 'frame': frame}
            for k, v in a.items():
                if k in ('ID', 'id'):
                    continue
                rec[k] = _number(v)
            spots.append(rec)

    spots_df = pd.DataFrame(spots)
    if spots_df.empty:
        raise TrackMateFormatError(f"No <Spot> elements found in {xml_path}")

    # Map spot_id -> track_id
    spot_to_track = {}
    for elem in root.iter():
        if _localname(elem.tag) == 'Track':
            track_id = int(elem.attrib.get('TRACK_ID', -1))
            for child in elem.iter():
                if _localname(child.tag) == 'Edge':
                    s = child.attrib.get('SPOT_SOURCE_ID') or child.attrib.get('source')
                    t = child.attrib.get('SPOT_TARGET_ID') or child.attrib.get('target')
                    if s:
                        spot_to_track[int(s)] = track_id
                    if t:
                        spot_to_track[int(t)] = track_id

    spots_df["track_id"] = spots_df["spot_id"].map(spot_to_track).astype("Int64")

    meta = extract_image_metadata(xml_path)
    n_frames = meta.get("nframes")
    if not isinstance(n_frames, int) or n_frames <= 0:
        n_frames = None

    model = TrackModel.from_dataframes(
        spots_df,
        extract_edges_from_xml(xml_path),
        filtered_track_ids=extract_filtered_track_ids(xml_path),
        n_frames=n_frames,
        image_filename=meta.get("filename") or None,
        image_folder=meta.get("folder") or None,
    )
    logger.debug("Read %d spots in %d tracks from %s", len(model), model.n_tracks(False), xml_path)
    return model


def extract_image_metadata(xml_path):
    """Extract <ImageData> metadata from TrackMate XML."""
    tree = ET.parse(xml_path)
    root = tree.getroot()

    metadata = {}
    for elem in root.iter():
        if elem.tag.endswith("ImageData"):
            for k, v in elem.attrib.items():
                try:
                    if "." in v or "e" in v.lower():
                        metadata[k.lower()] = float(v)
                    else:
                        metadata[k.lower()] = int(v)
                except ValueError:
                    metadata[k.lower()] = v
            break
    return metadata


def extract_edges_from_xml(xml_path):
    """Return DataFrame with columns ['source','target'] for spot edges."""
    tree = ET.parse(xml_path)
    root = tree.getroot()
    edges = []
    for elem in root.iter():
        if _localname(elem.tag) == "Edge":
            s = elem.attrib.get("SPOT_SOURCE_ID") or elem.attrib.get("source")
            t = elem.attrib.get("SPOT_TARGET_ID") or elem.attrib.get("target")
            if s and t:
                edges.append({"source": int(s), "target": int(t)})
    return pd.DataFrame(edges, columns=["source", "target"])


def extract_filtered_track_ids(xml_path):
    """
    Return the IDs listed under <FilteredTracks>.

    Returns ``None`` when the file has no <FilteredTracks> block, meaning
    every track is visible.
    """
    tree = ET.parse(xml_path)
    root = tree.getroot()

    for elem in root.iter():
        if _localname(elem.tag) == "FilteredTracks":
            return [
                int(child.attrib["TRACK_ID"])
                for child in elem
                if _localname(child.tag) == "TrackID" and "TRACK_ID" in child.attrib
            ]
    return None


def write_document(root, path, document="document"):
    """
    Serialize ``root`` as a pretty printed UTF-8 XML file.

    Raises
    ------
    DocumentWriteError
        If the file cannot be written; names the document and the path.
    """
    logger.info("Writing %s to %s", document, path)
    data = etree.tostring(root, pretty_print=True, xml_declaration=True, encoding="UTF-8")
    try:
        with open(path, "wb") as fh:
            fh.write(data)
    except OSError as e:
        logger.error("Trouble writing to %s: %s", path, e)
        raise DocumentWriteError(document, path, str(e)) from e
    return path
