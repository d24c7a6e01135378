"""Tests for jungle_export.model."""

import pandas as pd
import pytest

from jungle_export.errors import DataError
from jungle_export.model import Spot, TrackModel

from tests.helpers import make_spot


class TestSpot:
    def test_missing_and_nan_features_are_absent(self):
        spot = Spot(1, {"FRAME": 0.0, "AREA": float("nan")})
        assert spot.feature("AREA") is None
        assert spot.feature("LENGTH") is None

    def test_frame_truncated_to_int(self):
        assert Spot(1, {"FRAME": 3.0}).frame == 3

    def test_frame_required(self):
        with pytest.raises(DataError):
            Spot(1, {}).frame

    def test_visibility(self):
        assert Spot(1, {"FRAME": 0}).visible
        assert not Spot(1, {"FRAME": 0, "VISIBILITY": 0.0}).visible

    def test_identity_hashing(self):
        a, b = make_spot(1, 0), make_spot(1, 0)
        assert len({a, b}) == 2


class TestTrackModel:
    def test_track_ids_in_insertion_order(self, branching_model):
        assert branching_model.track_ids() == [0, 1]
        assert branching_model.n_tracks() == 2

    def test_visible_tracks(self, branching_model):
        branching_model.set_visible_tracks([1])
        assert branching_model.track_ids() == [1]
        assert branching_model.track_ids(visible_only=False) == [0, 1]
        assert branching_model.is_visible_track(1)
        assert not branching_model.is_visible_track(0)

    def test_track_spots(self, branching_model):
        ids = {s.spot_id for s in branching_model.track_spots(0)}
        assert ids == {10, 11, 12, 13}

    def test_earliest_spot_breaks_ties_by_id(self):
        a, b, c = make_spot(5, 1), make_spot(3, 1), make_spot(9, 2)
        assert TrackModel.earliest_spot({a, b, c}) is b

    def test_earliest_spot_of_empty_track(self):
        with pytest.raises(DataError):
            TrackModel.earliest_spot(set())

    def test_edges_point_forward_in_time(self):
        model = TrackModel()
        early = model.add_spot(make_spot(1, 0), track_id=0)
        late = model.add_spot(make_spot(2, 1), track_id=0)
        model.add_edge(late, early)
        assert list(model.graph.edges()) == [(early, late)]

    def test_add_edge_requires_known_spots(self):
        model = TrackModel()
        spot = model.add_spot(make_spot(1, 0))
        with pytest.raises(KeyError):
            model.add_edge(spot, make_spot(2, 1))

    def test_track_graph_is_limited_to_the_track(self, branching_model):
        root = TrackModel.earliest_spot(branching_model.track_spots(1))
        graph = branching_model.track_graph(root)
        assert {s.spot_id for s in graph.nodes} == {20, 21}

    def test_iter_spots(self, branching_model):
        assert len(list(branching_model.iter_spots())) == 6
        assert {s.spot_id for s in branching_model.iter_spots(frame=2)} == {12, 13}

    def test_iter_spots_skips_hidden_spots(self):
        model = TrackModel()
        model.add_spot(make_spot(1, 0))
        model.add_spot(make_spot(2, 0, VISIBILITY=0.0))
        assert [s.spot_id for s in model.iter_spots()] == [1]
        assert len(list(model.iter_spots(visible_only=False))) == 2

    def test_n_frames_falls_back_to_last_frame(self):
        model = TrackModel()
        model.add_spot(make_spot(1, 0))
        model.add_spot(make_spot(2, 4))
        assert model.n_frames == 5
        assert TrackModel().n_frames == 0
        assert TrackModel(n_frames=12).n_frames == 12


class TestFromDataframes:
    def test_builds_tracks_and_edges(self):
        spots_df = pd.DataFrame({
            "spot_id": [1, 2, 3, 4],
            "frame": [0, 1, 1, 0],
            "track_id": pd.array([0, 0, 0, pd.NA], dtype="Int64"),
            "POSITION_X": [0.0, 1.0, 2.0, 3.0],
            "POSITION_Y": [0.0, 1.0, 2.0, 3.0],
            "AREA": [1.0, None, 2.0, 3.0],
        })
        edges_df = pd.DataFrame({"source": [1, 1, 9], "target": [2, 3, 1]})

        model = TrackModel.from_dataframes(spots_df, edges_df, filtered_track_ids=[0])

        assert len(model) == 4
        assert model.track_ids() == [0]
        root = model.earliest_spot(model.track_spots(0))
        assert root.spot_id == 1
        assert sorted(s.spot_id for s in model.graph.successors(root)) == [2, 3]
        assert model.graph.number_of_edges() == 2
        spot2 = next(s for s in model.spots if s.spot_id == 2)
        assert spot2.feature("AREA") is None
        assert spot2.frame == 1
        untracked = next(s for s in model.spots if s.spot_id == 4)
        assert model.track_of(untracked) is None


class TestTrackGraph:
    def test_untracked_spot_graph_follows_descendants(self):
        model = TrackModel()
        root = model.add_spot(make_spot(1, 0))
        child = model.add_spot(make_spot(2, 1))
        model.add_spot(make_spot(3, 0))
        model.add_edge(root, child)
        assert model.track_of(root) is None
        assert set(model.track_graph(root).nodes) == {root, child}

    def test_tracked_spot_graph_uses_track_of(self, branching_model):
        spot = next(s for s in branching_model.spots if s.spot_id == 21)
        assert branching_model.track_of(spot) == 1
        assert {s.spot_id for s in branching_model.track_graph(spot).nodes} == {20, 21}
