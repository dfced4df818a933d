from typing import Callable, Dict, Optional

import numpy as np

from .config import DEBUG_DRAW_POINTS, LOG_INTERVAL, WARMUP_FRAMES
from .logging_utils import log
from .renderer import OverlayCanvas
from .tracker import OverlayTracker


class OverlaySession:
    """Frame-driven detection loop.

    Each tick runs detection, placement and drawing to completion before the
    next frame is read. `stop()` only prevents further ticks; a detection
    already running finishes and its result is dropped.
    """

    def __init__(self, detector, tracker: OverlayTracker, canvas: Optional[OverlayCanvas] = None):
        self.detector = detector
        self.tracker = tracker
        self.canvas = canvas or OverlayCanvas()
        self.active = False
        self.paused = False
        self.frame_count = 0
        self.face_count = 0

    @property
    def running(self) -> bool:
        return self.active and not self.paused

    def start(self) -> None:
        self.tracker.reset()
        self.frame_count = 0
        self.face_count = 0
        self.paused = False
        self.active = True
        log("=== DETECTION STARTED ===")

    def stop(self) -> None:
        if self.active:
            log("=== DETECTION STOPPED ===")
        self.active = False

    def pause(self) -> None:
        self.paused = True
        log("Detection paused")

    def resume(self) -> None:
        self.paused = False
        log("Detection resumed")

    def tick(self, frame: np.ndarray) -> Optional[np.ndarray]:
        if not self.running:
            return None
        self.frame_count += 1

        try:
            faces = self.detector.detect(frame)
        except Exception as exc:
            log(f"Face detection error: {exc}", "WARN")
            faces = None
            self.face_count = 0

        if not self.running:
            return None

        self.canvas.clear(frame)
        if faces is None:
            return self.canvas.frame

        self.face_count = len(faces)
        for instruction in self.tracker.process_faces(faces):
            self.canvas.draw_overlay(self.tracker.asset, instruction)

        if DEBUG_DRAW_POINTS and self.tracker.eye_centers is not None:
            self.canvas.draw_points(self.tracker.eye_centers, (0, 0, 255))
            raw = self.tracker.raw_placement
            if raw is not None:
                self.canvas.draw_points([(raw.center_x, raw.center_y)], (255, 0, 0))

        placement = self.tracker.placement
        if placement is not None and self.frame_count % LOG_INTERVAL == 0:
            log(
                f"Placement: center=({placement.center_x:.0f}, {placement.center_y:.0f}) "
                f"size={placement.width:.0f}x{placement.height:.0f} angle={placement.angle:.3f}"
            )

        self.canvas.draw_text(f"Faces: {self.face_count}", (10, 25))
        return self.canvas.frame

    def run(self, capture, display: Callable[[np.ndarray], bool]) -> None:
        """Reads frames until stopped, the camera fails, or `display` returns False."""
        warmup = 0
        while self.active:
            ret, frame = capture.read()
            if not ret:
                log("Camera frame not available", "WARN")
                break

            if warmup < WARMUP_FRAMES:
                warmup += 1
                self.canvas.clear(frame)
                self.canvas.draw_text("Camera warming up...", (10, 25), (255, 255, 255))
                output = self.canvas.frame
            else:
                output = self.tick(frame)
                if output is None:
                    output = frame

            if not display(output):
                break

        self.stop()

    def get_stats(self) -> Dict[str, object]:
        asset = self.tracker.asset
        return {
            "model_loaded": self.detector is not None,
            "running": self.running,
            "paused": self.paused,
            "frames": self.frame_count,
            "faces": self.face_count,
            "style": asset.name if asset is not None else None,
        }
