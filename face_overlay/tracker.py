from typing import List, Optional, Sequence, Tuple

import numpy as np

from .assets import OverlayAsset
from .config import MAX_FACES, SMOOTHING_FACTOR
from .eye_geometry import extract_eye_centers
from .filters import PlacementFilter
from .logging_utils import log
from .placement import (
    DrawInstruction,
    Placement,
    solve_placement,
    solve_raw_placement,
    to_draw_instruction,
)


class OverlayTracker:
    def __init__(self, asset: Optional[OverlayAsset] = None, alpha: float = SMOOTHING_FACTOR):
        self.asset = asset
        self.filter = PlacementFilter(alpha)
        self.eye_centers: Optional[Tuple[np.ndarray, np.ndarray]] = None
        self.raw_placement: Optional[Placement] = None

    @property
    def placement(self) -> Optional[Placement]:
        return self.filter.previous

    def set_asset(self, asset: Optional[OverlayAsset]) -> None:
        # The smoothed geometry carries over to the new style.
        self.asset = asset

    def reset(self) -> None:
        self.filter.reset()
        self.eye_centers = None
        self.raw_placement = None

    def process_landmarks(self, landmarks: Sequence) -> Optional[DrawInstruction]:
        centers = extract_eye_centers(landmarks)
        self.eye_centers = centers
        self.raw_placement = None
        if centers is None:
            log("Essential eye landmarks not detected", "WARN")
            return None

        if self.asset is None or not self.asset.loaded:
            return None

        left, right = centers
        self.raw_placement = solve_raw_placement(left, right, self.asset.width, self.asset.height)
        smoothed = solve_placement(left, right, self.asset, self.placement, self.filter.alpha)
        self.filter.previous = smoothed
        return to_draw_instruction(smoothed)

    def process_faces(self, faces: Sequence[Sequence]) -> List[DrawInstruction]:
        instructions = []
        for landmarks in list(faces)[:MAX_FACES]:
            instruction = self.process_landmarks(landmarks)
            if instruction is not None:
                instructions.append(instruction)
        return instructions
