from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Tuple


class ReadingSource(Enum):
    FOUND = 1    # contour found this tick
    STALE = 2    # nothing found, carrying the last FOUND value
    UNKNOWN = 3  # nothing has ever been found for this marker


@dataclass(frozen=True)
class TrackReading:
    x: float
    y: float
    radius: float
    source: ReadingSource

    @classmethod
    def unknown(cls) -> "TrackReading":
        return cls(0.0, 0.0, 0.0, ReadingSource.UNKNOWN)

    @property
    def centroid(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def found(self) -> bool:
        return self.source is ReadingSource.FOUND

    def stale(self) -> "TrackReading":
        """Same position and radius, tagged as carried forward."""
        if self.source is ReadingSource.UNKNOWN:
            return self
        return replace(self, source=ReadingSource.STALE)


@dataclass
class FrameData:
    timestamp: float
    # one reading per marker, index 0 is the first calibrated marker
    readings: List[TrackReading]
    angle: float
    # normalized catcher position, 0.5 is centered; not clamped to [0, 1]
    control: float
