from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class EngineConfig:
    screen_size: Tuple[int, int]
    cam_index: int
    show_preview: bool
    # play a recorded video instead of the live camera
    video_path: Optional[str] = None
