# flapjack/game/obstacles.py
from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Iterator, List, Optional
import pygame
from .config import (
    PIPE_WIDTH, PIPE_GAP, PIPE_SPEED, PIPE_MARGIN,
    SPAWN_WARMUP_FRAMES, SPAWN_EVERY_FRAMES,
)


@dataclass
class Obstacle:
    """A pipe pair. The passable gap spans [top, bottom] in screen y."""
    x: float
    top: float
    bottom: float
    passed: bool = False

    @property
    def right(self) -> float:
        return self.x + PIPE_WIDTH

    def top_rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), 0, PIPE_WIDTH, int(self.top))

    def bottom_rect(self, height: int) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.bottom), PIPE_WIDTH, max(0, int(height - self.bottom)))


def gap_top_bounds(height: int) -> tuple[float, float]:
    """
    Range the gap top is drawn from. On a screen too short for both margins
    the range collapses onto the top margin.
    """
    lo = float(PIPE_MARGIN)
    hi = float(height - PIPE_GAP - PIPE_MARGIN)
    return lo, max(lo, hi)


def should_spawn(frame_count: int) -> bool:
    """Spawn cadence: every SPAWN_EVERY_FRAMES frames, never before the warm-up."""
    return frame_count >= SPAWN_WARMUP_FRAMES and frame_count % SPAWN_EVERY_FRAMES == 0


class ObstacleSet:
    """
    Pipes currently on screen, oldest first.
    New pipes enter at the right edge, everything scrolls left at PIPE_SPEED
    and pipes are dropped once fully past the left edge.
    """
    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random(seed)
        self.obstacles: List[Obstacle] = []

    def __len__(self) -> int:
        return len(self.obstacles)

    def __iter__(self) -> Iterator[Obstacle]:
        return iter(self.obstacles)

    def clear(self):
        self.obstacles = []

    def spawn(self, width: int, height: int) -> Obstacle:
        lo, hi = gap_top_bounds(height)
        top = self.rng.uniform(lo, hi)
        obstacle = Obstacle(x=float(width), top=top, bottom=top + PIPE_GAP)
        self.obstacles.append(obstacle)
        return obstacle

    def advance(self):
        for obstacle in self.obstacles:
            obstacle.x -= PIPE_SPEED

    def prune(self):
        self.obstacles = [o for o in self.obstacles if o.right > 0]

    def update(self, frame_count: int, width: int, height: int):
        """Spawn if due, scroll, then drop off-screen pipes."""
        if should_spawn(frame_count):
            self.spawn(width, height)
        self.advance()
        self.prune()

    def next_ahead(self, x: float) -> Optional[Obstacle]:
        """First pipe whose right edge is still at or past x (the one to fly through next)."""
        for obstacle in self.obstacles:
            if obstacle.right >= x:
                return obstacle
        return None
