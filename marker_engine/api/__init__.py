from .game_base import Game
from .frame_data import FrameData, ReadingSource, TrackReading
from .config import EngineConfig

__all__ = ["Game", "FrameData", "ReadingSource", "TrackReading", "EngineConfig"]
