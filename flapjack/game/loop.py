# flapjack/game/loop.py
from __future__ import annotations
import itertools
import random
from enum import Enum
from typing import Callable, Dict, Optional
from .characters import Character
from .score import ScoreTracker
from .sim import GameState, new_game_state, reset_run, step
from .config import WIDTH, HEIGHT


class FrameScheduler:
    """
    Display-refresh scheduler: callbacks requested now run on the next frame.
    The window loop calls `run_frame()` once per refresh; tests call it by hand.
    """
    def __init__(self):
        self._ids = itertools.count(1)
        self._pending: Dict[int, Callable[[], None]] = {}

    @property
    def pending(self) -> int:
        return len(self._pending)

    def request(self, callback: Callable[[], None]) -> int:
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: Optional[int]):
        if handle is not None:
            self._pending.pop(handle, None)

    def run_frame(self) -> int:
        """Run what was pending when the frame started. Returns how many ran."""
        due, self._pending = self._pending, {}
        for callback in due.values():
            callback()
        return len(due)


class Phase(Enum):
    MENU = "menu"
    RUNNING = "running"
    ENDED = "ended"


class LoopDriver:
    """
    Owns the game state and the one outstanding tick.

    Menu --select--> Running --collision--> Ended --restart--> Running
                                             Ended --choose_new--> Menu

    Every tick re-requests itself at the end of its body, and every run
    switch cancels the outstanding tick first, so there is never more than
    one tick in flight.
    """
    def __init__(self, scheduler: FrameScheduler, scores: ScoreTracker,
                 width: int = WIDTH, height: int = HEIGHT,
                 seed: Optional[int] = None,
                 render_hook: Optional[Callable[[GameState], None]] = None):
        self.scheduler = scheduler
        self.scores = scores
        self.state: GameState = new_game_state(width, height, rng=random.Random(seed))
        self.selection: Optional[Character] = None
        self.render_hook = render_hook
        self._tick_handle: Optional[int] = None

    # -------------------- Queries --------------------

    @property
    def phase(self) -> Phase:
        if self.selection is None:
            return Phase.MENU
        return Phase.ENDED if self.state.run.ended else Phase.RUNNING

    @property
    def high_score(self) -> int:
        return self.scores.high_score

    # -------------------- Scheduling --------------------

    def _cancel_tick(self):
        self.scheduler.cancel(self._tick_handle)
        self._tick_handle = None

    def _schedule_tick(self):
        self._cancel_tick()
        self._tick_handle = self.scheduler.request(self.tick)

    def tick(self):
        self._tick_handle = None
        if self.selection is None:
            return
        step(self.state, None, self.scores)
        if self.render_hook is not None:
            self.render_hook(self.state)
        self._schedule_tick()

    # -------------------- Input handlers --------------------

    def select(self, character: Character):
        """Menu → Running with the chosen skin."""
        if self.phase is not Phase.MENU:
            return
        self._cancel_tick()
        self.selection = character
        reset_run(self.state)
        self._schedule_tick()

    def flap(self):
        if self.phase is Phase.RUNNING:
            self.state.actor.flap()

    def restart(self):
        """Ended → Running, same skin, high score kept."""
        if self.phase is not Phase.ENDED:
            return
        self._cancel_tick()
        reset_run(self.state)
        self._schedule_tick()

    def choose_new(self):
        """Ended → Menu. Nothing ticks until the next selection."""
        if self.phase is not Phase.ENDED:
            return
        self._cancel_tick()
        reset_run(self.state)
        self.selection = None

    def resize(self, width: int, height: int):
        self.state.width = int(width)
        self.state.height = int(height)
