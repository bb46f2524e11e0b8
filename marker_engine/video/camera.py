from __future__ import annotations
import logging
import sys
from typing import Optional, Tuple

import cv2
import numpy as np

logger = logging.getLogger(__name__)


class Camera:
    """
    Frame source for the tracker: a capture device by index, or a recorded
    video when `path` is given. read() returns None once no frame can be had,
    which ends the game loop.
    """

    def __init__(self, index: int, target_size: Tuple[int, int], fps: int = 60, path: Optional[str] = None):
        self.index = index
        self.path = path
        self.target_size = target_size
        self.fps = fps
        self.cap: Optional[cv2.VideoCapture] = None
        self.frames_read = 0

    @property
    def name(self) -> str:
        return self.path if self.path is not None else f"camera {self.index}"

    def _open_device(self) -> cv2.VideoCapture:
        backend = cv2.CAP_DSHOW if sys.platform.startswith("win") else 0
        cap = cv2.VideoCapture(self.index, backend)
        # best effort, drivers may ignore any of these
        w, h = self.target_size
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, w)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, h)
        cap.set(cv2.CAP_PROP_FPS, self.fps)
        return cap

    def open(self) -> bool:
        self.cap = cv2.VideoCapture(self.path) if self.path is not None else self._open_device()
        if not self.cap.isOpened():
            return False
        logger.info("reading frames from %s (%dx%d)", self.name,
                    int(self.cap.get(cv2.CAP_PROP_FRAME_WIDTH)), int(self.cap.get(cv2.CAP_PROP_FRAME_HEIGHT)))
        return True

    def read(self) -> Optional[np.ndarray]:
        """Next BGR frame, or None when the source is closed or exhausted."""
        if self.cap is None:
            return None
        ok, frame = self.cap.read()
        if not ok or frame is None:
            logger.info("%s ended after %d frames", self.name, self.frames_read)
            return None
        self.frames_read += 1
        return frame

    def close(self):
        if self.cap is not None:
            self.cap.release()
            self.cap = None
