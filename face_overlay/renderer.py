from typing import Iterable, Optional, Tuple

import cv2
import numpy as np

from .assets import OverlayAsset
from .placement import DrawInstruction


def overlay_matrix(instruction: DrawInstruction, asset_width: int, asset_height: int) -> np.ndarray:
    """2x3 affine map from asset pixels to frame pixels.

    Scales the asset to the target size centered on the origin, rotates by
    the instruction angle, then translates to the target center.
    """
    sx = instruction.width / asset_width
    sy = instruction.height / asset_height
    c = np.cos(instruction.angle)
    s = np.sin(instruction.angle)
    half_w = instruction.width / 2.0
    half_h = instruction.height / 2.0
    tx = instruction.center_x - c * half_w + s * half_h
    ty = instruction.center_y - s * half_w - c * half_h
    return np.array(
        [
            [c * sx, -s * sy, tx],
            [s * sx, c * sy, ty],
        ],
        dtype=np.float64,
    )


def blend_over(background: np.ndarray, foreground_bgra: np.ndarray, opacity: float) -> np.ndarray:
    alpha = foreground_bgra[..., 3:4].astype(np.float32) / 255.0 * float(opacity)
    fg = foreground_bgra[..., :3].astype(np.float32)
    bg = background.astype(np.float32)
    out = fg * alpha + bg * (1.0 - alpha)
    return np.clip(out, 0, 255).astype(background.dtype)


class OverlayCanvas:
    def __init__(self) -> None:
        self.frame: Optional[np.ndarray] = None

    @property
    def size(self) -> Tuple[int, int]:
        if self.frame is None:
            return 0, 0
        h, w = self.frame.shape[:2]
        return w, h

    def clear(self, frame: np.ndarray) -> np.ndarray:
        self.frame = frame.copy()
        return self.frame

    def draw_overlay(self, asset: OverlayAsset, instruction: DrawInstruction) -> bool:
        if self.frame is None or not asset.loaded:
            return False
        if instruction.width <= 0 or instruction.height <= 0:
            return False

        frame_w, frame_h = self.size
        M = overlay_matrix(instruction, asset.width, asset.height)
        warped = cv2.warpAffine(
            asset.image,
            M,
            (frame_w, frame_h),
            flags=cv2.INTER_LINEAR,
            borderMode=cv2.BORDER_CONSTANT,
            borderValue=(0, 0, 0, 0),
        )
        self.frame = blend_over(self.frame, warped, instruction.opacity)
        return True

    def draw_points(self, points: Iterable, color=(0, 0, 255), radius: int = 3) -> None:
        if self.frame is None:
            return
        for pt in points:
            cv2.circle(self.frame, (int(pt[0]), int(pt[1])), radius, color, -1)

    def draw_text(self, text: str, origin: Tuple[int, int], color=(0, 255, 255), scale: float = 0.6) -> None:
        if self.frame is None:
            return
        cv2.putText(self.frame, text, origin, cv2.FONT_HERSHEY_SIMPLEX, scale, color, 2)
