import pygame
from typing import Optional, Tuple


def draw_text(surface: pygame.Surface, text: str, pos: Tuple[int, int], color=(230, 230, 230), size=24,
              font: Optional[pygame.font.Font] = None):
    """Blit `text` at `pos`; newlines start a new line below the previous one."""
    if font is None:
        font = pygame.font.SysFont(None, size)
    x, y = pos
    for line in text.split("\n"):
        surface.blit(font.render(line, True, color), (x, y))
        y += font.get_linesize()
