from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

import cv2
import numpy as np

from .config import ASSETS_DIR, ASSET_PATTERN
from .logging_utils import log


class AssetLoadError(RuntimeError):
    pass


@dataclass
class OverlayAsset:
    name: str
    image: Optional[np.ndarray] = None  # BGRA
    path: Optional[str] = None

    @property
    def loaded(self) -> bool:
        return self.image is not None and self.image.size > 0

    @property
    def width(self) -> int:
        return int(self.image.shape[1]) if self.loaded else 0

    @property
    def height(self) -> int:
        return int(self.image.shape[0]) if self.loaded else 0

    @property
    def aspect_ratio(self) -> float:
        """Native height / width."""
        if not self.loaded:
            return 0.0
        return self.height / self.width


def to_uint8(image: np.ndarray) -> np.ndarray:
    if image.dtype == np.uint8:
        return image
    if image.dtype == np.uint16:
        return (image // 257).astype(np.uint8)
    # Float images are expected in [0, 1].
    return np.clip(image.astype(np.float32) * 255.0, 0, 255).astype(np.uint8)


def to_bgra(image: np.ndarray) -> np.ndarray:
    image = to_uint8(image)
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGRA)
    if image.shape[2] == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2BGRA)
    return image


def load_overlay_asset(path, name: Optional[str] = None) -> OverlayAsset:
    path = Path(path)
    image = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if image is None or image.size == 0:
        raise AssetLoadError(f"Failed to load overlay image: {path}")
    return OverlayAsset(name=name or path.stem, image=to_bgra(image), path=str(path))


class StyleCatalog:
    """Overlay styles found under a directory, keyed by file stem."""

    def __init__(self, directory=ASSETS_DIR, pattern: str = ASSET_PATTERN):
        self.directory = Path(directory)
        self.pattern = pattern
        self.paths: Dict[str, Path] = {}
        self._cache: Dict[str, OverlayAsset] = {}

    def discover(self) -> List[str]:
        self.paths.clear()
        self._cache.clear()
        if not self.directory.is_dir():
            log(f"Assets directory not found: {self.directory}", "WARN")
            return []
        for path in sorted(self.directory.rglob(self.pattern)):
            try:
                asset = load_overlay_asset(path)
            except AssetLoadError as exc:
                log(f"Skipping style: {exc}", "WARN")
                continue
            if asset.name in self.paths:
                log(f"Duplicate style name {asset.name}: keeping {self.paths[asset.name]}", "WARN")
                continue
            self.paths[asset.name] = path
            self._cache[asset.name] = asset
        log(f"Found {len(self.paths)} overlay styles in {self.directory}")
        return self.names()

    def names(self) -> List[str]:
        return list(self.paths)

    def select(self, name: str) -> OverlayAsset:
        if name not in self.paths:
            raise KeyError(f"Unknown overlay style: {name}")
        if name not in self._cache:
            self._cache[name] = load_overlay_asset(self.paths[name], name)
        return self._cache[name]

    def next_name(self, current: Optional[str]) -> Optional[str]:
        names = self.names()
        if not names:
            return None
        if current not in names:
            return names[0]
        return names[(names.index(current) + 1) % len(names)]
