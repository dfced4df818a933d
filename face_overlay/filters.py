from typing import Optional

from .config import SMOOTHING_FACTOR
from .placement import Placement, smooth_placement


class PlacementFilter:
    """First-order low-pass filter over whole placements.

    Holds the previous smoothed placement; the first value passes through.
    """

    def __init__(self, alpha: float = SMOOTHING_FACTOR):
        if not 0.0 <= alpha < 1.0:
            raise ValueError(f"alpha must be in [0, 1), got {alpha}")
        self.alpha = alpha
        self.previous: Optional[Placement] = None

    def __call__(self, raw: Placement) -> Placement:
        self.previous = smooth_placement(self.previous, raw, self.alpha)
        return self.previous

    def reset(self) -> None:
        self.previous = None
