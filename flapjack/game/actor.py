# flapjack/game/actor.py
from __future__ import annotations
import pygame
from dataclasses import dataclass
from .config import GRAVITY, FLAP_STRENGTH, BIRD_RADIUS, BIRD_X_FRAC


@dataclass
class Actor:
    """
    The bird. Circle of `radius` centred on (x, y):
    - x is fixed for the whole run (the world scrolls left)
    - vy > 0 means falling, screen y grows downwards
    """
    x: float
    y: float
    vy: float = 0.0
    radius: int = BIRD_RADIUS

    @classmethod
    def spawn(cls, width: int, height: int) -> "Actor":
        """Fresh bird at a quarter of the screen width, vertically centred, at rest."""
        return cls(x=width * BIRD_X_FRAC, y=height / 2, vy=0.0)

    @property
    def top(self) -> float:
        return self.y - self.radius

    @property
    def bottom(self) -> float:
        return self.y + self.radius

    @property
    def left(self) -> float:
        return self.x - self.radius

    @property
    def right(self) -> float:
        return self.x + self.radius

    @property
    def rect(self) -> pygame.Rect:
        d = self.radius * 2
        return pygame.Rect(int(self.left), int(self.top), d, d)

    def flap(self):
        """Impulse: replaces whatever velocity was accumulated."""
        self.vy = FLAP_STRENGTH

    def update_physics(self):
        """One frame of gravity. No terminal velocity."""
        self.vy += GRAVITY
        self.y += self.vy
