from typing import List

import cv2
import numpy as np

from .config import (
    MAX_FACES,
    REFINE_LANDMARKS,
    MIN_DETECTION_CONFIDENCE,
    MIN_TRACKING_CONFIDENCE,
)
from .logging_utils import log

try:
    import mediapipe as mp
    MEDIAPIPE_AVAILABLE = True
except ImportError:
    mp = None
    MEDIAPIPE_AVAILABLE = False


def landmarks_to_array(landmarks, w: int, h: int) -> np.ndarray:
    """Normalized MediaPipe landmarks -> (N, 2) pixel coordinates."""
    return np.array([(lm.x * w, lm.y * h) for lm in landmarks], dtype=np.float64)


class FaceMeshDetector:
    def __init__(self) -> None:
        if not MEDIAPIPE_AVAILABLE:
            raise RuntimeError("MediaPipe not installed")
        self.face_mesh = mp.solutions.face_mesh.FaceMesh(
            max_num_faces=MAX_FACES,
            refine_landmarks=REFINE_LANDMARKS,
            min_detection_confidence=MIN_DETECTION_CONFIDENCE,
            min_tracking_confidence=MIN_TRACKING_CONFIDENCE,
        )
        log("MediaPipe FaceMesh initialized")

    def detect(self, frame: np.ndarray) -> List[np.ndarray]:
        img_h, img_w = frame.shape[:2]
        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        results = self.face_mesh.process(rgb_frame)
        if not results.multi_face_landmarks:
            return []
        return [
            landmarks_to_array(face.landmark, img_w, img_h)
            for face in results.multi_face_landmarks
        ]

    def close(self) -> None:
        if self.face_mesh is None:
            return
        try:
            self.face_mesh.close()
        except Exception as exc:
            log(f"Warning: face_mesh.close failed: {exc}", "WARN")
        finally:
            self.face_mesh = None
