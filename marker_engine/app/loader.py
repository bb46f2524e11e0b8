from __future__ import annotations
import importlib
import logging
from dataclasses import dataclass, field
from pathlib import Path
import pygame
import yaml
from typing import Dict, Any, List, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_SPRITE_SIZE = (64, 64)
DEFAULT_FONT_SIZE = 32


@dataclass
class GameAssets:
    sprites: Dict[str, pygame.Surface] = field(default_factory=dict)
    # ordered sprite classes for falling objects
    fruits: List[pygame.Surface] = field(default_factory=list)
    font: Optional[pygame.font.Font] = None


def load_game_manifest(game_root: Path) -> Dict[str, Any]:
    manifest = game_root / "manifest.yaml"
    if not manifest.exists():
        raise FileNotFoundError(f"Missing manifest.yaml in {game_root}")
    with open(manifest, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_game_module(game_root: Path):
    """
    Imports games/<id>/main.py and returns the module object.
    The file must define a get_game() -> Game factory.
    """
    main_py = game_root / "main.py"
    if not main_py.exists():
        raise FileNotFoundError(f"Missing main.py in {game_root}")
    module = importlib.import_module(f"games.{game_root.name}.main")
    if not hasattr(module, "get_game"):
        raise AttributeError("Game module must define get_game()")
    return module


def _color(value) -> Tuple[int, ...]:
    rgb = tuple(int(c) for c in value)
    if len(rgb) not in (3, 4):
        raise ValueError(f"Sprite color must have 3 or 4 components, got {value!r}")
    return rgb


def load_sprite(entry: Dict[str, Any], game_root: Path) -> pygame.Surface:
    """
    A manifest sprite entry is either {file: path} (relative to the game
    folder) or {color: [r, g, b], shape: rect|circle, size: [w, h]}.
    """
    if "file" in entry:
        path = game_root / entry["file"]
        if not path.exists():
            raise FileNotFoundError(f"Missing asset {path}")
        surf = pygame.image.load(str(path))
        if pygame.display.get_surface() is not None:
            surf = surf.convert_alpha()
        return surf

    if "color" in entry:
        w, h = entry.get("size", DEFAULT_SPRITE_SIZE)
        color = _color(entry["color"])
        surf = pygame.Surface((int(w), int(h)), pygame.SRCALPHA)
        shape = entry.get("shape", "rect")
        if shape == "circle":
            pygame.draw.ellipse(surf, color, surf.get_rect())
        elif shape == "rect":
            surf.fill(color)
        else:
            raise ValueError(f"Unknown sprite shape {shape!r}")
        return surf

    raise ValueError(f"Sprite entry needs 'file' or 'color': {entry!r}")


def load_font(entry: Optional[Dict[str, Any]], game_root: Path) -> pygame.font.Font:
    entry = entry or {}
    size = int(entry.get("size", DEFAULT_FONT_SIZE))
    if not pygame.font.get_init():
        pygame.font.init()
    if entry.get("file"):
        path = game_root / entry["file"]
        if not path.exists():
            raise FileNotFoundError(f"Missing font {path}")
        return pygame.font.Font(str(path), size)
    return pygame.font.Font(None, size)


def load_game_assets(manifest: Dict[str, Any], game_root: Path) -> GameAssets:
    """
    Loads every asset listed under `assets:` in the manifest. Any failure is
    raised to the caller; a game cannot start with missing assets.
    """
    table = manifest.get("assets", {}) or {}
    assets = GameAssets()
    for name, entry in (table.get("sprites") or {}).items():
        assets.sprites[name] = load_sprite(entry, game_root)
    for entry in table.get("fruits") or []:
        assets.fruits.append(load_sprite(entry, game_root))
    assets.font = load_font(table.get("font"), game_root)
    logger.info("loaded %d sprites and %d fruit sprites from %s",
                len(assets.sprites), len(assets.fruits), game_root.name)
    return assets
