"""Shared constants and factories for exporter tests."""

from jungle_export.metaxml import METAXML_NS
from jungle_export.model import Spot
from jungle_export.phyloxml import PHYLOXML_NS

NS = {"p": PHYLOXML_NS, "m": METAXML_NS}


def make_spot(spot_id, frame, x=0.0, y=0.0, **features):
    """Create a spot with a frame, a position and optional extra features."""
    feats = {"FRAME": float(frame), "POSITION_X": x, "POSITION_Y": y}
    feats.update(features)
    return Spot(spot_id, feats)


TRACKMATE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<TrackMate version="7.11.1">
  <Model spatialunits="micron" timeunits="min">
    <AllSpots nspots="5">
      <SpotsInFrame frame="0">
        <Spot ID="100" name="ID100" FRAME="0" POSITION_X="0.0" POSITION_Y="0.0" POSITION_T="0.0" VISIBILITY="1" LENGTH="3.5" AREA="10.0" YFP_FLUORESCENCE_MEAN="120.5" YFP_FLUORESCENCE_STDDEV="3.14159" />
        <Spot ID="200" name="ID200" FRAME="0" POSITION_X="10.0" POSITION_Y="10.0" POSITION_T="0.0" VISIBILITY="1" />
      </SpotsInFrame>
      <SpotsInFrame frame="1">
        <Spot ID="101" FRAME="1" POSITION_X="2.0" POSITION_Y="0.0" POSITION_T="8.0" VISIBILITY="1" CRIMSON_FLUORESCENCE="50.0" />
        <Spot ID="102" FRAME="1" POSITION_X="4.0" POSITION_Y="4.0" POSITION_T="8.0" VISIBILITY="1" />
        <Spot ID="201" FRAME="1" POSITION_X="12.0" POSITION_Y="10.0" POSITION_T="8.0" VISIBILITY="1" />
      </SpotsInFrame>
    </AllSpots>
    <AllTracks>
      <Track name="Track_0" TRACK_ID="0" NUMBER_SPLITS="1">
        <Edge SPOT_SOURCE_ID="100" SPOT_TARGET_ID="101" LINK_COST="1.0" />
        <Edge SPOT_SOURCE_ID="100" SPOT_TARGET_ID="102" LINK_COST="1.0" />
      </Track>
      <Track name="Track_1" TRACK_ID="1" NUMBER_SPLITS="0">
        <Edge SPOT_SOURCE_ID="201" SPOT_TARGET_ID="200" LINK_COST="1.0" />
      </Track>
    </AllTracks>
    <FilteredTracks>
      <TrackID TRACK_ID="0" />
    </FilteredTracks>
  </Model>
  <Settings>
    <ImageData filename="movie.tif" folder="" width="512" height="512" nslices="1" nframes="5" pixelwidth="0.065" pixelheight="0.065" voxeldepth="1.0" timeinterval="8.0" />
  </Settings>
</TrackMate>
"""
