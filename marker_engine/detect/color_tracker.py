from __future__ import annotations
from typing import List, Optional, Sequence
import cv2
import numpy as np

from marker_engine.api.frame_data import ReadingSource, TrackReading
from marker_engine.calib.color_calibrator import ColorWindow


KERNEL = cv2.getStructuringElement(cv2.MORPH_ELLIPSE, (5, 5))
OPEN_ITERATIONS = 2

# BGR outline per marker on the camera view
MARKER_COLORS = [(0, 0, 255), (0, 255, 0)]
MARKER_THICKNESS = 5


def mask_for_window(hsv: np.ndarray, window: ColorWindow) -> np.ndarray:
    lo, hi = window.bounds()
    mask = cv2.inRange(hsv, lo, hi)
    # erode then dilate, twice, to drop small blobs
    return cv2.morphologyEx(mask, cv2.MORPH_OPEN, KERNEL, iterations=OPEN_ITERATIONS)


def largest_circle(mask: np.ndarray):
    """Minimum enclosing circle of the largest external contour, or None if the mask is empty."""
    cnts, _ = cv2.findContours(mask, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)
    if not cnts:
        return None
    best = max(cnts, key=cv2.contourArea)
    (cx, cy), r = cv2.minEnclosingCircle(best)
    return float(cx), float(cy), float(r)


class MarkerTracker:
    def __init__(self, marker_count: int = 2):
        self.marker_count = marker_count
        # most recent mask per marker, for the debug preview
        self.last_masks: List[Optional[np.ndarray]] = [None] * marker_count

    def track(self, hsv: np.ndarray, window: Optional[ColorWindow], previous: TrackReading,
              index: int = 0) -> TrackReading:
        if window is None:
            self.last_masks[index] = None
            return previous.stale()

        mask = mask_for_window(hsv, window)
        self.last_masks[index] = mask
        circle = largest_circle(mask)
        if circle is None:
            return previous.stale()
        cx, cy, r = circle
        return TrackReading(cx, cy, r, ReadingSource.FOUND)

    def track_all(self, hsv: np.ndarray, windows: Sequence[Optional[ColorWindow]],
                  previous: Sequence[TrackReading]) -> List[TrackReading]:
        return [
            self.track(hsv, windows[i], previous[i], index=i)
            for i in range(self.marker_count)
        ]


def annotate(frame_bgr: np.ndarray, readings: Sequence[TrackReading]) -> np.ndarray:
    """Draw a circle around every marker found this tick, in place."""
    for i, r in enumerate(readings):
        if r.source is not ReadingSource.FOUND:
            continue
        color = MARKER_COLORS[i % len(MARKER_COLORS)]
        cv2.circle(frame_bgr, (int(r.x), int(r.y)), int(r.radius), color, MARKER_THICKNESS)
    return frame_bgr
