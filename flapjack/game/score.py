# flapjack/game/score.py
from __future__ import annotations
from pathlib import Path
from typing import Iterable, Union
from .actor import Actor
from .obstacles import Obstacle


class HighScoreStore:
    """
    Single integer kept in a text file.
    Storage problems are never fatal: a bad read is 0, a failed write is dropped.
    """
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def load(self) -> int:
        try:
            text = self.path.read_text(encoding="utf-8").strip()
            return max(0, int(text or 0))
        except (OSError, ValueError):
            return 0

    def save(self, value: int):
        try:
            self.path.write_text(str(int(value)), encoding="utf-8")
        except OSError:
            pass


class MemoryHighScoreStore:
    """In-process store (tests, headless env)."""
    def __init__(self, value: int = 0):
        self.value = int(value)
        self.writes = 0

    def load(self) -> int:
        return self.value

    def save(self, value: int):
        self.value = int(value)
        self.writes += 1


class ScoreTracker:
    """
    Counts pipes as the bird clears them and keeps the all-time best.
    The best is read from the store once and written back every time it grows.
    """
    def __init__(self, store=None):
        self.store = store if store is not None else MemoryHighScoreStore()
        self.high_score: int = self.store.load()

    def update(self, run, actor: Actor, obstacles: Iterable[Obstacle]) -> int:
        """Flag newly cleared pipes, bump run.score; returns how many were cleared this tick."""
        passed = 0
        for obstacle in obstacles:
            if not obstacle.passed and obstacle.right < actor.x:
                obstacle.passed = True
                run.score += 1
                passed += 1
                if run.score > self.high_score:
                    self.high_score = run.score
                    self.store.save(self.high_score)
        return passed
