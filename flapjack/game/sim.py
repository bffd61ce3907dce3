# flapjack/game/sim.py
"""
One frame of the game, with no clock and no window.

    state = new_game_state(width, height, seed=123)
    step(state, Inputs(flap=True), scores)

`step` mutates the state it is given and returns it. One call is one frame:
physics constants are per frame, so running the sim faster or slower than
the display only changes how fast it plays, never what happens.
"""
from __future__ import annotations
import random
from dataclasses import dataclass, field
from typing import Optional
from .actor import Actor
from .obstacles import ObstacleSet
from .collision import check_collision
from .score import ScoreTracker
from .config import WIDTH, HEIGHT, DEBUG_SIM


@dataclass
class RunState:
    score: int = 0
    ended: bool = False
    frame_count: int = 0


@dataclass
class Inputs:
    """Discrete events collected since the previous frame."""
    flap: bool = False


@dataclass
class GameState:
    actor: Actor
    obstacles: ObstacleSet
    run: RunState = field(default_factory=RunState)
    width: int = WIDTH
    height: int = HEIGHT


def new_game_state(width: int = WIDTH, height: int = HEIGHT,
                   seed: Optional[int] = None,
                   rng: Optional[random.Random] = None) -> GameState:
    return GameState(
        actor=Actor.spawn(width, height),
        obstacles=ObstacleSet(seed=seed, rng=rng),
        run=RunState(),
        width=width,
        height=height,
    )


def reset_run(state: GameState) -> GameState:
    """New bird, no pipes, zeroed counters. The viewport and the pipe RNG are kept."""
    state.actor = Actor.spawn(state.width, state.height)
    state.obstacles.clear()
    state.run = RunState()
    return state


def step(state: GameState, inputs: Optional[Inputs], scores: ScoreTracker) -> GameState:
    """
    Advance one frame: flap → gravity → spawn/scroll/prune pipes → score → collision.
    A finished run is frozen: nothing moves and inputs are ignored.
    """
    run = state.run
    if run.ended:
        return state

    if inputs is not None and inputs.flap:
        state.actor.flap()

    state.actor.update_physics()

    run.frame_count += 1
    state.obstacles.update(run.frame_count, state.width, state.height)

    scores.update(run, state.actor, state.obstacles)

    if check_collision(state.actor, state.obstacles, state.height):
        run.ended = True

    if DEBUG_SIM:
        a = state.actor
        print(f"SIM f={run.frame_count} y={a.y:.1f} vy={a.vy:.1f} pipes={len(state.obstacles)} "
              f"score={run.score} best={scores.high_score} {'ENDED' if run.ended else ''}")

    return state
