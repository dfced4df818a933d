from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

from .assets import OverlayAsset
from .config import (
    VERTICAL_OFFSET,
    REFERENCE_EYE_DISTANCE,
    MAX_ANGLE,
    MIN_WIDTH_RATIO,
    MAX_WIDTH_RATIO,
    SMOOTHING_FACTOR,
    OVERLAY_OPACITY,
)


@dataclass(frozen=True)
class Placement:
    center_x: float
    center_y: float
    width: float
    height: float
    angle: float  # radians, positive = clockwise with Y pointing down


@dataclass(frozen=True)
class DrawInstruction:
    center_x: float
    center_y: float
    width: float
    height: float
    angle: float
    opacity: float = OVERLAY_OPACITY


def eye_distance(left: np.ndarray, right: np.ndarray) -> float:
    return float(np.linalg.norm(np.asarray(right, dtype=np.float64) - np.asarray(left, dtype=np.float64)))


def clamp_angle(angle: float, limit: float = MAX_ANGLE) -> float:
    return float(np.clip(angle, -limit, limit))


def solve_raw_placement(
    left: np.ndarray, right: np.ndarray, asset_width: float, asset_height: float
) -> Placement:
    """Computes the unsmoothed placement for one frame from the two eye centers.

    The overlay is centered slightly above the eye midpoint, scaled from the
    inter-eye distance against a reference distance of 80 px, kept within
    1.8x..2.5x of that distance, and tilted by at most MAX_ANGLE. Height always
    follows the asset's native aspect ratio.
    """
    if asset_width <= 0 or asset_height <= 0:
        raise ValueError(f"Invalid asset size {asset_width}x{asset_height}")

    left = np.asarray(left, dtype=np.float64)
    right = np.asarray(right, dtype=np.float64)

    center = (left + right) / 2.0
    center_y = center[1] - VERTICAL_OFFSET

    distance = eye_distance(left, right)
    dx, dy = right - left
    angle = clamp_angle(float(np.arctan2(dy, dx)))

    scale = distance / REFERENCE_EYE_DISTANCE
    width = asset_width * scale
    width = float(np.clip(width, distance * MIN_WIDTH_RATIO, distance * MAX_WIDTH_RATIO))
    height = width * (asset_height / asset_width)

    return Placement(
        center_x=float(center[0]),
        center_y=float(center_y),
        width=width,
        height=height,
        angle=angle,
    )


def smooth_placement(
    previous: Optional[Placement], raw: Placement, alpha: float = SMOOTHING_FACTOR
) -> Placement:
    # No prior frame: the raw placement is taken as is.
    if previous is None:
        return raw

    def blend(prev_value: float, value: float) -> float:
        return prev_value * alpha + value * (1 - alpha)

    width = blend(previous.width, raw.width)
    # Height follows the current asset's ratio, so a style switch never
    # carries the previous asset's proportions.
    height = width * (raw.height / raw.width) if raw.width > 0 else blend(previous.height, raw.height)

    return replace(
        raw,
        center_x=blend(previous.center_x, raw.center_x),
        center_y=blend(previous.center_y, raw.center_y),
        width=width,
        height=height,
        angle=blend(previous.angle, raw.angle),
    )


def solve_placement(
    left: np.ndarray,
    right: np.ndarray,
    asset: OverlayAsset,
    previous: Optional[Placement],
    alpha: float = SMOOTHING_FACTOR,
) -> Placement:
    raw = solve_raw_placement(left, right, asset.width, asset.height)
    return smooth_placement(previous, raw, alpha)


def to_draw_instruction(placement: Placement, opacity: float = OVERLAY_OPACITY) -> DrawInstruction:
    return DrawInstruction(
        center_x=placement.center_x,
        center_y=placement.center_y,
        width=placement.width,
        height=placement.height,
        angle=placement.angle,
        opacity=opacity,
    )
