from __future__ import annotations
import logging
from typing import List, Optional

import cv2
import numpy as np

from marker_engine.input.events import EventQueue, PointerClick

logger = logging.getLogger(__name__)


class CameraWindow:
    """
    OpenCV window showing the annotated camera feed. Left clicks on it are
    queued as PointerClick events in camera pixel coordinates.

    The mouse callback only fires inside cv2.waitKey, which show() calls on
    the main thread, so the queue never sees a concurrent writer.
    """

    def __init__(self, queue: EventQueue, name: str = "camera_input_window", show_masks: bool = False):
        self.queue = queue
        self.name = name
        self.show_masks = show_masks
        self._mask_names: List[str] = []

        cv2.namedWindow(self.name)
        cv2.setMouseCallback(self.name, self._on_mouse)

    def _on_mouse(self, event, x, y, flags, param):
        if event == cv2.EVENT_LBUTTONDOWN:
            self.queue.push(PointerClick(int(x), int(y)))

    def show(self, frame_bgr: np.ndarray, masks: Optional[List[Optional[np.ndarray]]] = None):
        cv2.imshow(self.name, frame_bgr)
        if self.show_masks and masks:
            for i, mask in enumerate(masks):
                if mask is None:
                    continue
                name = f"mask{i}"
                if name not in self._mask_names:
                    self._mask_names.append(name)
                cv2.imshow(name, mask)
        # HighGUI only processes its events (and our mouse callback) here
        cv2.waitKey(1)

    def teardown(self):
        for name in [self.name, *self._mask_names]:
            try:
                cv2.destroyWindow(name)
            except cv2.error:
                logger.debug("window %s already closed", name)
        cv2.destroyAllWindows()
