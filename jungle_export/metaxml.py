"""
MetaXML document: per-frame population data and per-spot cell records.

Frames are created lazily the first time a spot of that frame is
exported and are appended to the root in that order. Each frame carries
the elapsed time, one population record and the cells of its spots.
"""

from collections import namedtuple

import numpy as np
from lxml import etree

from .errors import DataError
from .formatting import format_measurement, format_minutes, format_stddev
from .model import POSITION_X, POSITION_Y
from .phyloxml import METAXML_NS, XSI_NS

METAXML_SCHEMA = "metaXML-2.6.0.xsd"

LENGTH = "LENGTH"
AREA = "AREA"

Channel = namedtuple("Channel", ["name", "mean_key", "legacy_mean_key", "stddev_key"])

# Older plugin versions stored the mean under the legacy key
CHANNELS = (
    Channel("yfp", "YFP_FLUORESCENCE_MEAN", "YFP_FLUORESCENCE", "YFP_FLUORESCENCE_STDDEV"),
    Channel("crimson", "CRIMSON_FLUORESCENCE_MEAN", "CRIMSON_FLUORESCENCE", "CRIMSON_FLUORESCENCE_STDDEV"),
)


def _q(tag):
    return f"{{{METAXML_NS}}}{tag}"


def _leaf(parent, tag, text, unit=None):
    element = etree.SubElement(parent, _q(tag))
    if unit is not None:
        element.set("unit", unit)
    element.text = text
    return element


def _center(parent, x, y):
    center = etree.SubElement(parent, _q("center"))
    _leaf(center, "x", format_measurement(x), unit="um")
    _leaf(center, "y", format_measurement(y), unit="um")
    return center


def channel_mean(spot, channel):
    """Mean intensity of ``channel``, falling back to the legacy feature key."""
    mean = spot.feature(channel.mean_key)
    if mean is None:
        mean = spot.feature(channel.legacy_mean_key)
    return mean


class MetaXMLBuilder:
    """
    Builds the ``<metaInformation>`` tree of one export run.

    Parameters
    ----------
    model : TrackModel
        Source of the population spots and the frame count.
    project_name : str
    interval : float
        Imaging interval in minutes.
    registry : IdentifierRegistry
        Shared with the phyloXML side so cell IDs match clade names.
    population_scope : {"all", "frame"}
        Which visible spots are averaged for a frame's population center.
    """

    def __init__(self, model, project_name, interval, registry, population_scope="all"):
        self.model = model
        self.interval = interval
        self.registry = registry
        self.population_scope = population_scope
        self._frames = {}
        self._population_counter = 0
        self._global_center = None

        self.root = etree.Element(_q("metaInformation"), nsmap={None: METAXML_NS, "xsi": XSI_NS})
        self.root.set(f"{{{XSI_NS}}}schemaLocation", f"{METAXML_NS} {METAXML_SCHEMA}")
        _leaf(self.root, "projectName", project_name)
        # Not guarded: a single-frame movie gives a zero or negative duration
        duration = (model.n_frames - 1) * interval
        _leaf(self.root, "experimentDuration", format_minutes(duration), unit="min")

    def population_center(self, frame):
        """Mean (x, y) of the visible spots in the configured scope."""
        if self.population_scope == "frame":
            return self._mean_position(self.model.iter_spots(frame=frame, visible_only=True), frame)
        # same for every frame, only averaged once
        if self._global_center is None:
            self._global_center = self._mean_position(self.model.iter_spots(visible_only=True), frame)
        return self._global_center

    @staticmethod
    def _mean_position(spots, frame):
        coords = [
            (s.feature(POSITION_X), s.feature(POSITION_Y)) for s in spots
        ]
        coords = np.array(
            [c for c in coords if c[0] is not None and c[1] is not None], dtype=float
        )
        if coords.shape[0] == 0:
            raise DataError(f"No spot positions to compute the population center of frame {frame}")
        center = coords.mean(axis=0)
        return float(center[0]), float(center[1])

    def frame_element_for(self, spot):
        frame = spot.frame
        element = self._frames.get(frame)
        if element is not None:
            return element

        element = etree.SubElement(self.root, _q("frame"))
        element.set("id", str(frame))
        _leaf(element, "elapsedTime", format_minutes(frame * self.interval), unit="min")

        center_x, center_y = self.population_center(frame)
        population = etree.SubElement(element, _q("population"))
        population.set("id", str(self._population_counter))
        self._population_counter += 1
        _center(population, center_x, center_y)

        self._frames[frame] = element
        return element

    def cell_record_for(self, spot, identifier=None):
        """Return a detached ``<cell>`` element for ``spot``."""
        if identifier is None:
            identifier = self.registry.identifier_for(spot)
        cell = etree.Element(_q("cell"))
        cell.set("id", identifier)

        x, y = spot.feature(POSITION_X), spot.feature(POSITION_Y)
        if x is not None and y is not None:
            _center(cell, x, y)

        length = spot.feature(LENGTH)
        if length is not None and length > 0:
            _leaf(cell, "length", format_measurement(length), unit="um")

        area = spot.feature(AREA)
        if area is not None and area > 0:
            _leaf(cell, "area", format_measurement(area), unit="um^2")

        fluorescences = None
        for channel in CHANNELS:
            mean = channel_mean(spot, channel)
            if mean is None or mean <= 0:
                continue
            if fluorescences is None:
                fluorescences = etree.SubElement(cell, _q("fluorescences"))
            fluorescence = etree.SubElement(fluorescences, _q("fluorescence"))
            fluorescence.set("channel", channel.name)
            _leaf(fluorescence, "mean", format_measurement(mean), unit="au")
            stddev = spot.feature(channel.stddev_key)
            if stddev is not None:
                _leaf(fluorescence, "stddev", format_stddev(stddev), unit="au")

        return cell
