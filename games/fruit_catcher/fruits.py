from __future__ import annotations
import random
from dataclasses import dataclass
from typing import List, Tuple

from .const import FRUIT_SIZE, FRUIT_SPEED_MIN, FRUIT_SPEED_MAX, FRUIT_HEIGHT_MAX


@dataclass(frozen=True)
class Box:
    x: float
    y: float
    w: float
    h: float

    def intersects(self, other: "Box") -> bool:
        # touching edges do not count
        return (max(self.x, other.x) < min(self.x + self.w, other.x + other.w)
                and max(self.y, other.y) < min(self.y + self.h, other.y + other.h))


@dataclass
class Fruit:
    x: float
    y: float
    fall_speed: float   # px/s
    sprite: int         # index into the fruit sprite list
    w: int = FRUIT_SIZE[0]
    h: int = FRUIT_SIZE[1]
    caught: bool = False

    def box(self) -> Box:
        return Box(self.x, self.y, self.w, self.h)


class FruitBatch:
    """
    The fruits of one round. Spawned all at once, moved every tick, and
    flagged (never removed) when the basket touches them.
    """

    def __init__(self, rng: random.Random, width: int, sprite_count: int,
                 speed_range: Tuple[int, int] = (FRUIT_SPEED_MIN, FRUIT_SPEED_MAX),
                 height_max: int = FRUIT_HEIGHT_MAX):
        self.rng = rng
        self.width = width
        self.sprite_count = sprite_count
        self.speed_range = speed_range
        self.height_max = height_max
        self.fruits: List[Fruit] = []

    def spawn(self, n: int) -> List[Fruit]:
        """Replace the batch with `n` fresh fruits above the visible area."""
        lo, hi = self.speed_range
        self.fruits = []
        for _ in range(n):
            sprite = self.rng.randint(0, self.sprite_count - 1)
            x = self.rng.randint(0, int(self.width))
            y = -self.rng.randint(1, self.height_max)
            speed = self.rng.randint(lo, hi)
            self.fruits.append(Fruit(x=float(x), y=float(y), fall_speed=float(speed), sprite=sprite))
        return self.fruits

    def clear(self) -> None:
        self.fruits = []

    def advance(self, dt_sec: float) -> None:
        for f in self.fruits:
            f.y += f.fall_speed * dt_sec

    def collide(self, basket: Box) -> int:
        """Flag uncaught fruits overlapping `basket`; returns how many were newly caught."""
        caught = 0
        for f in self.fruits:
            if f.caught:
                continue
            if basket.intersects(f.box()):
                f.caught = True
                caught += 1
        return caught

    def visible(self) -> List[Fruit]:
        return [f for f in self.fruits if not f.caught]

    def __len__(self) -> int:
        return len(self.fruits)
