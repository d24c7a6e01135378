import pandas as pd

_SUMMARY_COLUMNS = [
    "root_spot", "n_spots", "start_frame", "end_frame",
    "duration_frames", "n_splits", "visible",
]


def summarize_tracks(model):
    """One row per track: root spot, size, frame span, divisions, visibility."""
    rows = []
    for tid in model.track_ids(visible_only=False):
        spots = model.track_spots(tid)
        frames = [s.frame for s in spots]
        graph = model.track_graph(next(iter(spots)))
        rows.append({
            "track_id": tid,
            "root_spot": model.earliest_spot(spots).spot_id,
            "n_spots": len(spots),
            "start_frame": min(frames),
            "end_frame": max(frames),
            "duration_frames": max(frames) - min(frames) + 1,
            "n_splits": sum(1 for s in spots if graph.out_degree(s) > 1),
            "visible": model.is_visible_track(tid),
        })
    if not rows:
        return pd.DataFrame(columns=_SUMMARY_COLUMNS).rename_axis("track_id")
    return pd.DataFrame(rows).set_index("track_id")


def filter_tracks_by_duration(track_stats, min_duration=None, max_duration=None):
    """Keep only tracks within duration limits."""
    mask = pd.Series(True, index=track_stats.index)
    if min_duration is not None:
        mask &= track_stats["duration_frames"] >= min_duration
    if max_duration is not None:
        mask &= track_stats["duration_frames"] <= max_duration
    return track_stats[mask].copy()


def restrict_visible_tracks(model, track_stats):
    """Hide every track of ``model`` not listed in ``track_stats``."""
    keep = [tid for tid in model.track_ids(visible_only=True) if tid in set(track_stats.index)]
    model.set_visible_tracks(keep)
    return keep
