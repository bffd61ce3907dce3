# flapjack/game/render.py
from __future__ import annotations
from typing import Dict, Optional, Tuple
import pygame
from .characters import Skins
from .sim import GameState
from .config import (
    PIPE_WIDTH, PIPE_IMG_H,
    COLOR_BG, COLOR_FG, COLOR_BIRD, COLOR_OUTLINE, COLOR_PIPE, COLOR_DANGER,
)


def _scaled(img: pygame.Surface, size: Tuple[int, int], cache: Dict) -> pygame.Surface:
    key = (id(img), size)
    if key not in cache:
        # smoothscale only takes 24/32-bit surfaces
        scale = pygame.transform.smoothscale if img.get_bitsize() >= 24 else pygame.transform.scale
        cache[key] = scale(img, size)
    return cache[key]


class Renderer:
    """
    Draws a GameState. Reads only; never mutates the simulation.
    Skins that are missing fall back to plain shapes.
    """
    def __init__(self, skins: Optional[Skins] = None):
        self.skins = skins or Skins()
        self._cache: Dict = {}
        self._fonts: Dict[int, pygame.font.Font] = {}

    def _font(self, size: int) -> pygame.font.Font:
        # fonts die with pygame.quit(); rebuild them after a shutdown
        if not pygame.font.get_init():
            self._fonts.clear()
            pygame.font.init()
        if size not in self._fonts:
            self._fonts[size] = pygame.font.SysFont("arial", size)
        return self._fonts[size]

    def reset_fonts(self):
        self._fonts.clear()

    def set_skins(self, skins: Skins):
        self.skins = skins
        self._cache.clear()

    def draw_pipes(self, surf: pygame.Surface, state: GameState):
        pipe_img = self.skins.pipe
        for o in state.obstacles:
            if pipe_img is not None:
                img = _scaled(pipe_img, (PIPE_WIDTH, PIPE_IMG_H), self._cache)
                # top pipe hangs down to the gap; the bottom one is the same image flipped
                surf.blit(img, (int(o.x), int(o.top - PIPE_IMG_H)))
                flipped = self._cache.get(("flip", id(img)))
                if flipped is None:
                    flipped = pygame.transform.flip(img, False, True)
                    self._cache[("flip", id(img))] = flipped
                surf.blit(flipped, (int(o.x), int(o.bottom)))
            else:
                pygame.draw.rect(surf, COLOR_PIPE, o.top_rect())
                pygame.draw.rect(surf, COLOR_PIPE, o.bottom_rect(state.height))

    def draw_bird(self, surf: pygame.Surface, state: GameState):
        a = state.actor
        if self.skins.bird is not None:
            r = a.rect
            surf.blit(_scaled(self.skins.bird, r.size, self._cache), r.topleft)
        else:
            center = (int(a.x), int(a.y))
            pygame.draw.circle(surf, COLOR_BIRD, center, a.radius)
            pygame.draw.circle(surf, COLOR_OUTLINE, center, a.radius, width=1)

    def draw_score(self, surf: pygame.Surface, state: GameState, high_score: int):
        font = self._font(30)
        surf.blit(font.render(f"Score: {state.run.score}", True, COLOR_FG), (20, 15))
        surf.blit(font.render(f"High Score: {high_score}", True, COLOR_FG), (20, 55))

    def draw_game_over(self, surf: pygame.Surface, state: GameState):
        cx, cy = state.width // 2, state.height // 2
        lines = [
            (self._font(60), "GAME OVER", cy - 60),
            (self._font(30), "Press SPACE to restart", cy),
            (self._font(30), "Press ENTER to choose new character", cy + 40),
        ]
        for font, msg, y in lines:
            txt = font.render(msg, True, COLOR_DANGER)
            surf.blit(txt, txt.get_rect(midbottom=(cx, y)))

    def draw_frame(self, surf: pygame.Surface, state: GameState, high_score: int):
        surf.fill(COLOR_BG)
        self.draw_pipes(surf, state)
        self.draw_bird(surf, state)
        self.draw_score(surf, state, high_score)
        if state.run.ended:
            self.draw_game_over(surf, state)
