"""Shared fixtures: headless pygame and small game setups."""

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "hide")

import pygame
import pytest

from marker_engine.api.config import EngineConfig
from marker_engine.api.frame_data import FrameData, TrackReading
from marker_engine.app.context import Context
from marker_engine.app.loader import GameAssets

SCREEN_SIZE = (960, 540)


class FakeClock:
    """Manually advanced time source, in seconds."""

    def __init__(self, start: float = 100.0) -> None:
        self.t = start

    def __call__(self) -> float:
        return self.t

    def advance(self, seconds: float) -> None:
        self.t += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def ctx() -> Context:
    assets = GameAssets(
        sprites={"background": pygame.Surface((8, 8)), "basket": pygame.Surface((8, 8))},
        fruits=[pygame.Surface((8, 8)) for _ in range(8)],
        font=None,
    )
    return Context(
        screen=pygame.Surface(SCREEN_SIZE),
        clock=None,
        cfg=EngineConfig(screen_size=SCREEN_SIZE, cam_index=0, show_preview=False),
        resources={"assets": assets},
        screen_size=SCREEN_SIZE,
    )


def frame_with_control(control: float) -> FrameData:
    readings = [TrackReading.unknown(), TrackReading.unknown()]
    return FrameData(timestamp=0.0, readings=readings, angle=0.0, control=control)


@pytest.fixture
def make_frame():
    return frame_with_control
