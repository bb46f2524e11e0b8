from __future__ import annotations
from dataclasses import dataclass, field
import cv2
import numpy as np
import pygame
from typing import Any, List, Optional, Tuple
from marker_engine.api.config import EngineConfig
from marker_engine.api.frame_data import TrackReading
from marker_engine.calib.color_calibrator import ColorCalibrator, MARKER_COUNT, sample_hsv
from marker_engine.input.events import EventQueue


@dataclass
class Context:
    screen: pygame.Surface
    clock: pygame.time.Clock
    cfg: EngineConfig
    # engine internals exposed read-only for games if needed:
    resources: dict[str, Any]
    screen_size: Tuple[int, int]


@dataclass
class Session:
    """
    Perception state owned by the main loop: the latest HSV frame, the marker
    color windows and readings, and the pending input events.

    Everything here is touched from the main thread only. If frame capture or
    input handling ever moves to another thread, `hsv` and the calibrator
    need a lock, since clicks sample whatever frame is current.
    """
    calibrator: ColorCalibrator = field(default_factory=ColorCalibrator)
    events: EventQueue = field(default_factory=EventQueue)
    readings: List[TrackReading] = field(
        default_factory=lambda: [TrackReading.unknown() for _ in range(MARKER_COUNT)])
    hsv: Optional[np.ndarray] = None

    def set_frame(self, frame_bgr: np.ndarray) -> np.ndarray:
        # NOTE: OpenCV hue range is 0 to 179, not 0 to 359
        self.hsv = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2HSV)
        return self.hsv

    def sample_color(self, x: int, y: int):
        return sample_hsv(self.hsv, x, y)
