# flapjack/game/collision.py
from __future__ import annotations
from typing import Iterable
from .actor import Actor
from .obstacles import Obstacle


def out_of_bounds(actor: Actor, height: float) -> bool:
    """Bird touches above the top edge or below the bottom edge."""
    return actor.top < 0 or actor.bottom > height


def overlaps_horizontally(actor: Actor, obstacle: Obstacle) -> bool:
    return actor.right > obstacle.x and actor.left < obstacle.right


def hits_obstacle(actor: Actor, obstacle: Obstacle) -> bool:
    """Bird is alongside the pipe but not fully inside its gap."""
    if not overlaps_horizontally(actor, obstacle):
        return False
    return actor.top < obstacle.top or actor.bottom > obstacle.bottom


def check_collision(actor: Actor, obstacles: Iterable[Obstacle], height: float) -> bool:
    if out_of_bounds(actor, height):
        return True
    return any(hits_obstacle(actor, o) for o in obstacles)
