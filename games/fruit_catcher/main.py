from __future__ import annotations
import logging
import random
import time
import pygame
from enum import Enum
from typing import Callable, Optional

from marker_engine.api import Game, FrameData
from marker_engine.app.context import Context
from marker_engine.app.loader import GameAssets
from marker_engine.input.events import InputEvent, KeyPressed
from marker_engine.render.shapes import draw_text

from .const import *
from .fruits import Box, FruitBatch

logger = logging.getLogger(__name__)


class GameState(Enum):
    Setup = 1     # waiting for both marker colors
    Start = 2     # calibrated, waiting for space
    Playing = 3
    End = 4


class RoundTimer:
    def __init__(self, limit: float, now: Callable[[], float] = time.monotonic):
        self.limit = limit
        self.now = now
        self.started_at = now()

    def restart(self) -> None:
        self.started_at = self.now()

    def remaining(self) -> float:
        return self.limit - (self.now() - self.started_at)


class FruitCatcher(Game):
    def __init__(self, rng: Optional[random.Random] = None, now: Callable[[], float] = time.monotonic,
                 fruits_num: int = FRUITS_NUM, round_limit: float = ROUND_LIMIT_SEC):
        # one generator for the whole session, never re-seeded between rounds
        self.rng = rng or random.Random()
        self.now = now
        self.fruits_num = fruits_num
        self.round_limit = round_limit

    def on_load(self, ctx: Context, manifest):
        self.ctx = ctx
        self.manifest = manifest
        self.w, self.h = ctx.screen_size

        assets: GameAssets = ctx.resources.get("assets") or GameAssets()
        if not assets.fruits:
            raise ValueError("Fruit Catcher needs at least one fruit sprite in its manifest")
        self.font = assets.font
        self.background = assets.sprites.get("background")
        if self.background is not None:
            self.background = pygame.transform.scale(self.background, (self.w, self.h))
        self.basket_sprite = assets.sprites.get("basket")
        if self.basket_sprite is not None:
            self.basket_sprite = pygame.transform.scale(self.basket_sprite, BASKET_SIZE)
        self.fruit_sprites = [pygame.transform.scale(s, FRUIT_SIZE) for s in assets.fruits]

        self.state: GameState = GameState.Setup
        self.score = 0
        self.control = 0.5
        self.basket_x = 0.5 * self.w
        self.basket_y = self.h - BASKET_BOTTOM_OFFSET
        self.timer = RoundTimer(self.round_limit, now=self.now)
        self.time_remaining = 0.0
        self.batch = FruitBatch(self.rng, width=self.w, sprite_count=len(self.fruit_sprites))

    # ------------- transitions -------------
    def on_calibrated(self) -> None:
        if self.state == GameState.Setup:
            self.state = GameState.Start
            logger.info("both markers calibrated; press space to start")

    def start_round(self) -> bool:
        if self.state != GameState.Start:
            return False
        self.state = GameState.Playing
        self.timer.restart()
        self.time_remaining = self.round_limit
        self.score = 0
        self.batch.clear()
        self.batch.spawn(self.fruits_num)
        logger.info("round started with %d fruits, %.0fs on the clock", self.fruits_num, self.round_limit)
        return True

    def replay(self) -> bool:
        if self.state != GameState.End:
            return False
        self.state = GameState.Start
        return True

    def basket_box(self) -> Box:
        bw, bh = BASKET_SIZE
        return Box(self.basket_x, self.basket_y, bw, bh)

    # ------------- loop hooks -------------
    def on_update(self, dt_ms: float, frame: FrameData) -> None:
        self.control = frame.control
        if self.state != GameState.Playing:
            return

        self.time_remaining = self.timer.remaining()
        # basket is anchored at its top-left corner
        self.basket_x = frame.control * self.w

        self.score += self.batch.collide(self.basket_box())
        self.batch.advance(dt_ms / 1000.0)

        if self.time_remaining <= 0:
            self.state = GameState.End
            logger.info("round over, score %d/%d", self.score, len(self.batch))

    def on_event(self, event: InputEvent) -> None:
        if isinstance(event, KeyPressed) and event.key == "space":
            # one press moves at most one step
            if not self.start_round():
                self.replay()

    def on_draw(self, surface: pygame.Surface) -> None:
        surface.fill(CLEAR_COLOR)
        if self.state == GameState.Setup:
            draw_text(surface, SETUP_TEXT, HUD_POS, HUD_COLOR, font=self.font)
        elif self.state == GameState.Start:
            draw_text(surface, START_TEXT, HUD_POS, HUD_COLOR, font=self.font)
        elif self.state == GameState.Playing:
            self._draw_round(surface)
        else:
            draw_text(surface, END_TEXT.format(score=self.score), HUD_POS, HUD_COLOR, font=self.font)

    def _draw_round(self, surface: pygame.Surface) -> None:
        if self.background is not None:
            surface.blit(self.background, (0, 0))

        for f in self.batch.visible():
            surface.blit(self.fruit_sprites[f.sprite], (int(f.x), int(f.y)))

        # basket and HUD go on top
        box = self.basket_box()
        if self.basket_sprite is not None:
            surface.blit(self.basket_sprite, (int(box.x), int(box.y)))
        else:
            pygame.draw.rect(surface, HUD_COLOR, pygame.Rect(int(box.x), int(box.y), int(box.w), int(box.h)), 2)
        draw_text(surface, f"Time: {self.time_remaining:.2f} Score: {self.score}",
                  HUD_POS, HUD_COLOR, font=self.font)

    def on_unload(self) -> None:
        pass


def get_game():
    return FruitCatcher()
