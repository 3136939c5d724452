"""Session scoring core: event normalization and points."""

from app.scoring.normalization import normalize_positions, normalize_submissions, normalize_sweeps
from app.scoring.points import calculate_points

__all__ = ["normalize_submissions", "normalize_sweeps", "normalize_positions", "calculate_points"]
