"""
In-memory TrackMate model: spots, tracks and the lineage graph.

The lineage graph is a ``networkx.DiGraph`` whose nodes are ``Spot``
objects and whose edges point from a parent spot to its child in a later
frame. Tracks group spots by their TrackMate track ID; a subset of the
tracks may be marked visible (TrackMate's filtered tracks).
"""

import math
from numbers import Real

import networkx as nx
import pandas as pd

from .errors import DataError

POSITION_X = "POSITION_X"
POSITION_Y = "POSITION_Y"
FRAME = "FRAME"
VISIBILITY = "VISIBILITY"

# spots_df columns that are bookkeeping, not spot features
_NON_FEATURE_COLUMNS = {"spot_id", "frame", "track_id", "name", "ID", "id"}


class Spot:
    """A tracked cell at one time point with its numeric features."""

    def __init__(self, spot_id, features=None, name=None):
        self.spot_id = int(spot_id)
        self.name = name if name is not None else f"ID{self.spot_id}"
        self.features = dict(features or {})

    def feature(self, key):
        """Return the feature value, or ``None`` when absent or NaN."""
        value = self.features.get(key)
        if value is None:
            return None
        try:
            value = float(value)
        except (TypeError, ValueError):
            return None
        if math.isnan(value):
            return None
        return value

    @property
    def frame(self):
        frame = self.feature(FRAME)
        if frame is None:
            raise DataError(f"Spot {self.spot_id} has no {FRAME} feature")
        return int(frame)

    @property
    def visible(self):
        visibility = self.feature(VISIBILITY)
        return visibility is None or visibility != 0

    def __repr__(self):
        return f"Spot({self.spot_id}, frame={self.features.get(FRAME)})"


class TrackModel:
    """Query surface over the spots and tracks of one TrackMate session."""

    def __init__(self, n_frames=None, image_filename=None, image_folder=None):
        self.graph = nx.DiGraph()
        self.image_filename = image_filename
        self.image_folder = image_folder
        self._n_frames = n_frames
        self._spots = []
        self._tracks = {}
        self._spot_track = {}
        self._visible_tracks = None

    # ------------------------------------------------------------------
    # building
    # ------------------------------------------------------------------
    def add_spot(self, spot, track_id=None):
        if spot in self.graph:
            return spot
        self.graph.add_node(spot)
        self._spots.append(spot)
        if track_id is not None:
            track_id = int(track_id)
            self._tracks.setdefault(track_id, []).append(spot)
            self._spot_track[spot] = track_id
        return spot

    def add_edge(self, source, target):
        """Link two spots; the edge always points from the earlier frame."""
        for spot in (source, target):
            if spot not in self.graph:
                raise KeyError(f"{spot!r} is not part of the model")
        if target.frame < source.frame:
            source, target = target, source
        self.graph.add_edge(source, target)

    def set_visible_tracks(self, track_ids):
        """Restrict visible tracks to ``track_ids`` (``None`` shows all)."""
        self._visible_tracks = None if track_ids is None else {int(t) for t in track_ids}

    @classmethod
    def from_dataframes(cls, spots_df, edges_df=None, filtered_track_ids=None,
                        n_frames=None, image_filename=None, image_folder=None):
        """
        Build a model from spot and edge tables.

        Parameters
        ----------
        spots_df : pd.DataFrame
            One row per spot; needs ``spot_id`` and ``frame`` columns, an
            optional ``track_id`` column and any feature columns
            (``POSITION_X``, ``AREA``...).
        edges_df : pd.DataFrame, optional
            Columns ``source`` and ``target`` holding spot IDs.
        filtered_track_ids : iterable of int, optional
            Visible tracks. ``None`` means every track is visible.
        """
        model = cls(n_frames=n_frames, image_filename=image_filename, image_folder=image_folder)
        feature_cols = [c for c in spots_df.columns if c not in _NON_FEATURE_COLUMNS]
        has_track = "track_id" in spots_df.columns

        by_id = {}
        for row in spots_df.to_dict("records"):
            features = {}
            for col in feature_cols:
                value = row[col]
                if isinstance(value, Real) and not isinstance(value, bool):
                    features[col] = float(value)
            features.setdefault(FRAME, float(row["frame"]))
            name = row.get("name")
            spot = Spot(row["spot_id"], features, name=name if isinstance(name, str) else None)
            track_id = row["track_id"] if has_track else None
            if track_id is not None and pd.isna(track_id):
                track_id = None
            model.add_spot(spot, track_id)
            by_id[spot.spot_id] = spot

        if edges_df is not None and not edges_df.empty:
            for s, t in edges_df[["source", "target"]].itertuples(index=False):
                source, target = by_id.get(int(s)), by_id.get(int(t))
                if source is None or target is None:
                    continue
                model.add_edge(source, target)

        model.set_visible_tracks(filtered_track_ids)
        return model

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------
    def track_ids(self, visible_only=True):
        ids = list(self._tracks)
        if visible_only and self._visible_tracks is not None:
            ids = [t for t in ids if t in self._visible_tracks]
        return ids

    def n_tracks(self, visible_only=True):
        return len(self.track_ids(visible_only))

    def track_spots(self, track_id):
        return set(self._tracks[track_id])

    def track_of(self, spot):
        return self._spot_track.get(spot)

    def is_visible_track(self, track_id):
        return track_id in self._tracks and (
            self._visible_tracks is None or track_id in self._visible_tracks
        )

    @staticmethod
    def earliest_spot(spots):
        """First spot by frame; ties go to the lowest spot ID."""
        if not spots:
            raise DataError("Cannot pick the earliest spot of an empty track")
        return min(spots, key=lambda s: (s.frame, s.spot_id))

    def track_graph(self, spot):
        """Lineage graph of the track ``spot`` belongs to."""
        track_id = self.track_of(spot)
        if track_id is None:
            nodes = {spot} | nx.descendants(self.graph, spot)
        else:
            nodes = self._tracks[track_id]
        return self.graph.subgraph(nodes)

    def iter_spots(self, frame=None, visible_only=True):
        """Iterate over all spots of the model, optionally one frame only."""
        for spot in self._spots:
            if visible_only and not spot.visible:
                continue
            if frame is not None and spot.frame != frame:
                continue
            yield spot

    @property
    def spots(self):
        return list(self._spots)

    @property
    def n_frames(self):
        if self._n_frames is not None:
            return int(self._n_frames)
        if not self._spots:
            return 0
        return max(s.frame for s in self._spots) + 1

    def __len__(self):
        return len(self._spots)
