from __future__ import annotations
import logging
import time
from pathlib import Path
from typing import Optional

import numpy as np
import pygame
import yaml

import games
from marker_engine.api.config import EngineConfig
from marker_engine.api.frame_data import FrameData
from marker_engine.api.game_base import Game
from marker_engine.app.context import Context, Session
from marker_engine.app.loader import load_game_assets, load_game_manifest, load_game_module
from marker_engine.detect.color_tracker import MarkerTracker, annotate
from marker_engine.detect.orientation import estimate
from marker_engine.input.camera_window import CameraWindow
from marker_engine.input.events import KeyPressed, PointerClick, WindowClosed
from marker_engine.video.camera import Camera

logger = logging.getLogger(__name__)

TARGET_FPS = 60


def perceive(session: Session, tracker: MarkerTracker, frame_bgr: np.ndarray, timestamp: float) -> FrameData:
    """Track both markers in `frame_bgr` and derive the tilt control value."""
    hsv = session.set_frame(frame_bgr)
    session.readings = tracker.track_all(hsv, session.calibrator.windows, session.readings)
    r0, r1 = session.readings[0], session.readings[1]
    angle, control = estimate(r0.centroid, r1.centroid)
    return FrameData(timestamp=timestamp, readings=list(session.readings), angle=angle, control=control)


def drain_events(session: Session, game: Game) -> bool:
    """
    Handle every queued input event. Clicks sample the current HSV frame for
    calibration; key presses go to the game. Returns False once the window
    should close.
    """
    running = True
    for event in session.events.drain():
        if isinstance(event, WindowClosed):
            running = False
        elif isinstance(event, PointerClick):
            sample = session.sample_color(event.x, event.y)
            if sample is None:
                logger.warning("click at (%d, %d) is outside the camera frame", event.x, event.y)
                continue
            if session.calibrator.capture(sample):
                game.on_calibrated()
        elif isinstance(event, KeyPressed):
            game.on_event(event)
    return running


def run_game(
    game_id: str,
    screen_size: tuple[int, int],
    cam_index: int,
    show_preview: bool,
    video_path: Optional[str] = None,
) -> int:
    """Run the game until its window closes or the video ends. Returns a process exit status."""
    pygame.init()
    screen = pygame.display.set_mode(screen_size)
    clock = pygame.time.Clock()

    cfg = EngineConfig(
        screen_size=screen_size,
        cam_index=cam_index,
        show_preview=show_preview,
        video_path=video_path,
    )

    # load game and assets; any failure here is fatal
    game_root = Path(games.__file__).resolve().parent / game_id
    try:
        manifest = load_game_manifest(game_root)
        module = load_game_module(game_root)
        assets = load_game_assets(manifest, game_root)
    except (FileNotFoundError, ImportError, AttributeError, ValueError, yaml.YAMLError, pygame.error) as exc:
        logger.error("could not load game %s: %s", game_id, exc)
        pygame.quit()
        return 1

    title = manifest.get("title", game_id)
    pygame.display.set_caption(title)

    ctx = Context(
        screen=screen,
        clock=clock,
        cfg=cfg,
        resources={"assets": assets},
        screen_size=screen_size,
    )
    game: Game = module.get_game()
    try:
        game.on_load(ctx, manifest)
    except (ValueError, pygame.error) as exc:
        logger.error("could not start game %s: %s", game_id, exc)
        pygame.quit()
        return 1

    # camera & detection
    cam = Camera(index=cam_index, target_size=(1280, 720), fps=60, path=video_path)
    if not cam.open():
        logger.error("could not open %s", cam.name)
        cam.close()
        pygame.quit()
        return 1

    session = Session()
    tracker = MarkerTracker()
    camera_window = CameraWindow(session.events, show_masks=show_preview)

    try:
        while True:
            dt = clock.tick(TARGET_FPS)

            frame_bgr = cam.read()
            if frame_bgr is None:
                break

            frame_data = perceive(session, tracker, frame_bgr, time.time())
            camera_window.show(annotate(frame_bgr, frame_data.readings), tracker.last_masks)

            session.events.pump_pygame()
            if not drain_events(session, game):
                break

            game.on_update(dt, frame_data)
            game.on_draw(screen)
            pygame.display.flip()
            pygame.display.set_caption(f"{title} | FPS: {clock.get_fps():.1f}")
    finally:
        cam.close()
        camera_window.teardown()
        game.on_unload()
        pygame.quit()
    return 0
