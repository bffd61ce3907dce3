# flapjack/game/game.py
import sys, argparse
import pygame
from pygame import K_SPACE, K_ESCAPE, K_RETURN, K_KP_ENTER
from .config import (
    WIDTH, HEIGHT, FPS, MIN_WIDTH, MIN_HEIGHT, ASSETS_DIR, HIGHSCORE_FILE,
)
from .characters import load_skins
from .loop import FrameScheduler, LoopDriver, Phase
from .menu import CharacterMenu
from .render import Renderer
from .score import HighScoreStore, ScoreTracker


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Flapjack: flap through the pipes.")
    p.add_argument("--width", type=int, default=WIDTH, help="Initial window width")
    p.add_argument("--height", type=int, default=HEIGHT, help="Initial window height")
    p.add_argument("--fps", type=int, default=FPS, help="Display refresh rate (one sim frame per refresh)")
    p.add_argument("--seed", type=int, default=None,
                   help="Pipe layout seed. Omit for a random layout each launch.")
    p.add_argument("--assets-dir", type=str, default=ASSETS_DIR,
                   help="Directory containing images/ with the character skins")
    p.add_argument("--highscore-file", type=str, default=HIGHSCORE_FILE,
                   help="File holding the persisted high score")
    return p.parse_args(argv)


def run(argv=None):
    args = parse_args(argv)

    pygame.init()
    pygame.display.set_caption("Flapjack")
    screen = pygame.display.set_mode((max(MIN_WIDTH, args.width), max(MIN_HEIGHT, args.height)),
                                     pygame.RESIZABLE)
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("arial", 18)
    title_font = pygame.font.SysFont("arial", 42)

    scores = ScoreTracker(HighScoreStore(args.highscore_file))
    renderer = Renderer()
    scheduler = FrameScheduler()
    w, h = screen.get_size()
    driver = LoopDriver(scheduler, scores, width=w, height=h, seed=args.seed,
                        render_hook=lambda state: renderer.draw_frame(screen, state, scores.high_score))
    menu = CharacterMenu(assets_dir=args.assets_dir)
    print(f"High score: {scores.high_score}  (stored in {args.highscore_file})")

    def start(character):
        if character is None:
            return
        renderer.set_skins(load_skins(character, args.assets_dir))
        driver.select(character)
        print(f"Run started as {character.name}")

    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode((max(MIN_WIDTH, event.w), max(MIN_HEIGHT, event.h)),
                                                 pygame.RESIZABLE)
                driver.resize(*screen.get_size())
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
                phase = driver.phase
                if phase is Phase.MENU:
                    start(menu.pick_key(event.key))
                elif event.key == K_SPACE:
                    if phase is Phase.ENDED:
                        driver.restart()
                    else:
                        driver.flap()
                elif event.key in (K_RETURN, K_KP_ENTER) and phase is Phase.ENDED:
                    driver.choose_new()
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if driver.phase is Phase.MENU:
                    start(menu.pick_at(event.pos, *screen.get_size()))
                else:
                    driver.flap()

        before = driver.state.run.ended
        scheduler.run_frame()
        if driver.state.run.ended and not before:
            print(f"Game over: score={driver.state.run.score} best={scores.high_score}")

        if driver.phase is Phase.MENU:
            menu.draw(screen, font, title_font)

        pygame.display.flip()
        clock.tick(args.fps)


if __name__ == "__main__":
    run()
