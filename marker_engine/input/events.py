from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator, Optional, Union

import pygame


@dataclass(frozen=True)
class WindowClosed:
    pass


@dataclass(frozen=True)
class KeyPressed:
    key: str


@dataclass(frozen=True)
class PointerClick:
    # camera-frame pixel coordinates
    x: int
    y: int


InputEvent = Union[WindowClosed, KeyPressed, PointerClick]

_KEY_NAMES = {pygame.K_SPACE: "space"}


def from_pygame(event: pygame.event.Event) -> Optional[InputEvent]:
    """Translate a pygame event, or None if the game has no use for it."""
    if event.type == pygame.QUIT:
        return WindowClosed()
    if event.type == pygame.KEYDOWN:
        if event.key == pygame.K_ESCAPE:
            return WindowClosed()
        name = _KEY_NAMES.get(event.key)
        if name:
            return KeyPressed(name)
    return None


class EventQueue:
    """
    FIFO of input events. Producers (pygame pump, camera window mouse
    callback) only push; the main loop drains once per tick.
    """

    def __init__(self):
        self._items: Deque[InputEvent] = deque()

    def push(self, event: InputEvent) -> None:
        self._items.append(event)

    def pump_pygame(self) -> None:
        for event in pygame.event.get():
            ev = from_pygame(event)
            if ev is not None:
                self.push(ev)

    def drain(self) -> Iterator[InputEvent]:
        while self._items:
            yield self._items.popleft()

    def __len__(self) -> int:
        return len(self._items)
