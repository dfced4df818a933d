from typing import Tuple

import numpy as np
import pytest

from face_overlay import logging_utils
from face_overlay.assets import OverlayAsset
from face_overlay.landmarks import LEFT_EYE, RIGHT_EYE, NOSE_TIP, NOSE_BRIDGE

EYE_HALF_WIDTH = 20.0


def make_landmarks(
    left: Tuple[float, float] = (100.0, 200.0),
    right: Tuple[float, float] = (140.0, 200.0),
    count: int = 478,
) -> np.ndarray:
    """(count, 2) pixel landmarks whose eye centers land exactly on `left` and `right`."""
    lm = np.zeros((max(count, 478), 2), dtype=np.float64)
    lx, ly = left
    rx, ry = right
    lm[LEFT_EYE["inner"]] = (lx + EYE_HALF_WIDTH, ly)
    lm[LEFT_EYE["outer"]] = (lx - EYE_HALF_WIDTH, ly)
    lm[LEFT_EYE["top_lid"]] = (lx, ly)
    lm[RIGHT_EYE["inner"]] = (rx - EYE_HALF_WIDTH, ry)
    lm[RIGHT_EYE["outer"]] = (rx + EYE_HALF_WIDTH, ry)
    lm[RIGHT_EYE["top_lid"]] = (rx, ry)
    lm[NOSE_TIP] = ((lx + rx) / 2, ly + 40)
    lm[NOSE_BRIDGE] = ((lx + rx) / 2, ly)
    return lm[:count]


def make_asset(width: int = 200, height: int = 80, name: str = "test", alpha: int = 255) -> OverlayAsset:
    image = np.full((height, width, 4), 255, dtype=np.uint8)
    image[..., 3] = alpha
    return OverlayAsset(name=name, image=image)


@pytest.fixture(autouse=True)
def _log_to_tmp(tmp_path, monkeypatch):
    monkeypatch.setattr(logging_utils, "LOG_FILE", str(tmp_path / "test.log"))


@pytest.fixture
def landmarks():
    return make_landmarks()


@pytest.fixture
def asset():
    return make_asset()
