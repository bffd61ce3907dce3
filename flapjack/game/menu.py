# flapjack/game/menu.py
from __future__ import annotations
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union
import pygame
from .characters import Character, CHARACTERS, load_skin
from .config import COLOR_MENU_BG, COLOR_MENU_TILE, COLOR_MENU_HOVER, COLOR_FG, COLOR_BIRD

TILE_W, TILE_H = 180, 150
TILE_PAD = 20
COLS = 5

# 1..9 then 0 pick the first ten characters
_NUMBER_KEYS = [pygame.K_1, pygame.K_2, pygame.K_3, pygame.K_4, pygame.K_5,
                pygame.K_6, pygame.K_7, pygame.K_8, pygame.K_9, pygame.K_0]


class CharacterMenu:
    """Grid of characters; picking one starts a run."""
    def __init__(self, characters: Sequence[Character] = CHARACTERS,
                 assets_dir: Union[str, Path] = "."):
        self.characters = list(characters)
        self.assets_dir = Path(assets_dir)
        self._thumbs: Dict[str, Optional[pygame.Surface]] = {}

    def tile_rects(self, width: int, height: int) -> List[pygame.Rect]:
        cols = max(1, min(COLS, len(self.characters)))
        rows = (len(self.characters) + cols - 1) // cols
        grid_w = cols * TILE_W + (cols - 1) * TILE_PAD
        grid_h = rows * TILE_H + (rows - 1) * TILE_PAD
        x0 = (width - grid_w) // 2
        y0 = max(90, (height - grid_h) // 2)
        rects = []
        for i in range(len(self.characters)):
            r, c = divmod(i, cols)
            rects.append(pygame.Rect(x0 + c * (TILE_W + TILE_PAD), y0 + r * (TILE_H + TILE_PAD),
                                     TILE_W, TILE_H))
        return rects

    def pick_at(self, pos: Tuple[int, int], width: int, height: int) -> Optional[Character]:
        for ch, rect in zip(self.characters, self.tile_rects(width, height)):
            if rect.collidepoint(pos):
                return ch
        return None

    def pick_key(self, key: int) -> Optional[Character]:
        if key in _NUMBER_KEYS:
            i = _NUMBER_KEYS.index(key)
            if i < len(self.characters):
                return self.characters[i]
        return None

    def _thumb(self, ch: Character) -> Optional[pygame.Surface]:
        if ch.bird_img not in self._thumbs:
            img = load_skin(self.assets_dir / ch.bird_img)
            if img is not None:
                img = pygame.transform.smoothscale(img, (80, 80))
            self._thumbs[ch.bird_img] = img
        return self._thumbs[ch.bird_img]

    def draw(self, surf: pygame.Surface, font: pygame.font.Font, title_font: pygame.font.Font):
        width, height = surf.get_size()
        surf.fill(COLOR_MENU_BG)
        title = title_font.render("Choose your Jack", True, COLOR_FG)
        surf.blit(title, title.get_rect(midtop=(width // 2, 24)))

        mouse = pygame.mouse.get_pos() if pygame.mouse.get_focused() else (-1, -1)
        for i, (ch, rect) in enumerate(zip(self.characters, self.tile_rects(width, height))):
            color = COLOR_MENU_HOVER if rect.collidepoint(mouse) else COLOR_MENU_TILE
            pygame.draw.rect(surf, color, rect, border_radius=10)
            thumb = self._thumb(ch)
            if thumb is not None:
                surf.blit(thumb, thumb.get_rect(center=(rect.centerx, rect.top + 55)))
            else:
                pygame.draw.circle(surf, COLOR_BIRD, (rect.centerx, rect.top + 55), 35)
            label = font.render(f"{(i + 1) % 10}. {ch.name}", True, COLOR_FG)
            if label.get_width() > rect.width - 8:
                label = pygame.transform.smoothscale(
                    label, (rect.width - 8, label.get_height()))
            surf.blit(label, label.get_rect(midbottom=(rect.centerx, rect.bottom - 10)))
