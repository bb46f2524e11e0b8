from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)

HSV = Tuple[int, int, int]

# +/- margin around the sampled pixel, per channel (H, S, V)
HSV_MARGINS: HSV = (8, 80, 80)
CHANNEL_MAX = 255
# OpenCV hue tops out at 179; past this raw upper bound the window opens fully
HUE_SNAP_THRESHOLD = 150

MARKER_COUNT = 2


@dataclass(frozen=True)
class ColorWindow:
    low: HSV
    high: HSV

    @classmethod
    def from_sample(cls, sample: HSV) -> "ColorWindow":
        h, s, v = (int(c) for c in sample)
        mh, ms, mv = HSV_MARGINS
        low = (max(h - mh, 0), max(s - ms, 0), max(v - mv, 0))
        high = (
            CHANNEL_MAX if h + mh > HUE_SNAP_THRESHOLD else h + mh,
            min(s + ms, CHANNEL_MAX),
            min(v + mv, CHANNEL_MAX),
        )
        return cls(low=low, high=high)

    def bounds(self) -> Tuple[np.ndarray, np.ndarray]:
        """Arrays suitable for cv2.inRange."""
        return np.array(self.low, dtype=np.uint8), np.array(self.high, dtype=np.uint8)


def sample_hsv(hsv: Optional[np.ndarray], x: int, y: int) -> Optional[HSV]:
    """Pixel at (x, y) of an HSV frame, or None if there is no frame or the point is outside it."""
    if hsv is None:
        return None
    h, w = hsv.shape[:2]
    if not (0 <= x < w and 0 <= y < h):
        return None
    px = hsv[y, x]
    return int(px[0]), int(px[1]), int(px[2])


class ColorCalibrator:
    """
    Collects one sampled color per marker, in click order.

    The first capture sets marker 0, the second sets marker 1 and completes
    calibration. Further captures are ignored.
    """

    def __init__(self):
        self._windows: List[Optional[ColorWindow]] = [None] * MARKER_COUNT

    @property
    def windows(self) -> List[Optional[ColorWindow]]:
        return list(self._windows)

    @property
    def complete(self) -> bool:
        return all(w is not None for w in self._windows)

    def capture(self, sample: HSV) -> bool:
        """
        Assign the next unset marker window from `sample`.
        Returns True only on the call that completes calibration.
        """
        for i, window in enumerate(self._windows):
            if window is not None:
                continue
            self._windows[i] = ColorWindow.from_sample(sample)
            logger.debug(
                "marker %d color: %s color_min: %s color_max: %s",
                i, tuple(sample), self._windows[i].low, self._windows[i].high)
            return i == MARKER_COUNT - 1
        return False
