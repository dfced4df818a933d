from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from .landmarks import LEFT_EYE, RIGHT_EYE, NOSE_TIP, NOSE_BRIDGE, MIN_LANDMARK_COUNT


@dataclass
class EyeLandmarks:
    left_inner: np.ndarray
    left_outer: np.ndarray
    left_top: np.ndarray
    right_inner: np.ndarray
    right_outer: np.ndarray
    right_top: np.ndarray
    # Reserved, not used by the placement.
    nose_tip: Optional[np.ndarray] = None
    nose_bridge: Optional[np.ndarray] = None


def get_point_2d(index: int, landmarks: Sequence) -> Optional[np.ndarray]:
    """Returns landmark `index` as a float (x, y) array, or None when absent or non-finite."""
    if index >= len(landmarks):
        return None
    point = landmarks[index]
    if point is None:
        return None
    try:
        xy = np.asarray(point, dtype=np.float64).reshape(-1)[:2]
    except (TypeError, ValueError):
        return None
    if xy.shape[0] < 2 or not np.all(np.isfinite(xy)):
        return None
    return xy


def extract_eye_landmarks(landmarks: Optional[Sequence]) -> Optional[EyeLandmarks]:
    if landmarks is None or len(landmarks) < MIN_LANDMARK_COUNT:
        return None

    points = {}
    for side, eye_dict in (("left", LEFT_EYE), ("right", RIGHT_EYE)):
        for key, name in (("inner", "inner"), ("outer", "outer"), ("top_lid", "top")):
            pt = get_point_2d(eye_dict[key], landmarks)
            if pt is None:
                return None
            points[f"{side}_{name}"] = pt

    return EyeLandmarks(
        nose_tip=get_point_2d(NOSE_TIP, landmarks),
        nose_bridge=get_point_2d(NOSE_BRIDGE, landmarks),
        **points,
    )


def compute_eye_center(inner: np.ndarray, outer: np.ndarray, top: np.ndarray) -> np.ndarray:
    # The lid only pulls the center vertically.
    x = (inner[0] + outer[0]) / 2.0
    y = (inner[1] + outer[1] + top[1]) / 3.0
    return np.array([x, y], dtype=np.float64)


def extract_eye_centers(landmarks: Optional[Sequence]) -> Optional[Tuple[np.ndarray, np.ndarray]]:
    eyes = extract_eye_landmarks(landmarks)
    if eyes is None:
        return None
    left = compute_eye_center(eyes.left_inner, eyes.left_outer, eyes.left_top)
    right = compute_eye_center(eyes.right_inner, eyes.right_outer, eyes.right_top)
    return left, right
