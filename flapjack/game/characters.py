# flapjack/game/characters.py
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union
import pygame


@dataclass(frozen=True)
class Character:
    name: str
    bird_img: str   # relative to the assets dir
    pipe_img: str


CHARACTERS: Tuple[Character, ...] = (
    Character("Jack Sparrow", "images/sparrow.png", "images/sparrow_pipe.png"),
    Character("Jack Dawson", "images/titanic.png", "images/titanic_pipe.png"),
    Character("Jack Jack", "images/jackjack.png", "images/jackjack_pipe.png"),
    Character("Jack Black", "images/black.png", "images/black_pipe.png"),
    Character("Jack Torrance", "images/shining.png", "images/shining_pipe.png"),
    Character("Jack Skellington", "images/skellington.png", "images/skellington_pipe.png"),
    Character("Beanstalk Jack", "images/jackBean.png", "images/jackBean_pipe.png"),
    Character("Jack Johnson", "images/bananaJack.png", "images/bananaJack_pipe.png"),
    Character("Jack Daniels", "images/daniels.png", "images/daniels_pipe.png"),
    Character("Jack My Brother", "images/weaver.png", "images/pipeNorth.png"),
)


@dataclass
class Skins:
    """Loaded images for a run; None means draw the fallback shape instead."""
    bird: Optional[pygame.Surface] = None
    pipe: Optional[pygame.Surface] = None


def load_skin(path: Union[str, Path]) -> Optional[pygame.Surface]:
    p = Path(path)
    if not p.is_file():
        return None
    try:
        img = pygame.image.load(str(p))
    except pygame.error:
        return None
    # convert_alpha needs a display mode; without one keep the raw surface
    if pygame.display.get_init() and pygame.display.get_surface() is not None:
        img = img.convert_alpha()
    return img


def load_skins(character: Optional[Character], assets_dir: Union[str, Path]) -> Skins:
    if character is None:
        return Skins()
    base = Path(assets_dir)
    return Skins(bird=load_skin(base / character.bird_img),
                 pipe=load_skin(base / character.pipe_img))
