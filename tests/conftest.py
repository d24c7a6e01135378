"""Shared fixtures for exporter tests."""

from pathlib import Path

import pytest

from jungle_export.model import TrackModel

from tests.helpers import TRACKMATE_XML, make_spot


@pytest.fixture
def branching_model() -> TrackModel:
    """Two tracks over three frames.

    Track 0: 10 -> 11 -> {12, 13} (division at frame 1)
    Track 1: 20 -> 21
    """
    model = TrackModel(n_frames=3)
    s10 = model.add_spot(make_spot(10, 0, 0.0, 0.0, LENGTH=2.5, AREA=4.0), track_id=0)
    s11 = model.add_spot(make_spot(11, 1, 2.0, 0.0, LENGTH=3.0), track_id=0)
    s12 = model.add_spot(make_spot(12, 2, 4.0, 4.0), track_id=0)
    s13 = model.add_spot(make_spot(13, 2, 6.0, 2.0), track_id=0)
    s20 = model.add_spot(make_spot(20, 0, 2.0, 0.0), track_id=1)
    s21 = model.add_spot(make_spot(21, 1, 4.0, 4.0), track_id=1)
    model.add_edge(s10, s11)
    model.add_edge(s11, s12)
    model.add_edge(s11, s13)
    model.add_edge(s20, s21)
    return model


@pytest.fixture
def path_model() -> TrackModel:
    """A single non-dividing track of four spots."""
    model = TrackModel(n_frames=4)
    spots = [model.add_spot(make_spot(i, i, float(i), 1.0), track_id=7) for i in range(4)]
    for parent, child in zip(spots, spots[1:]):
        model.add_edge(parent, child)
    return model


@pytest.fixture
def trackmate_xml(tmp_path: Path) -> Path:
    """A small TrackMate file: two tracks, only track 0 filtered in."""
    d = tmp_path / "input"
    d.mkdir()
    path = d / "experiment.xml"
    path.write_text(TRACKMATE_XML)
    return path
