import logging
import pygame, sys
from tetris_config import CONFIG, SPEED_MAX
from tetris_game import Tetris, Verb
from tetris_input import DropTimer, verb_for_key
from tetris_layout import compute_dims
from tetris_render import RenderAssets


def recreate_window(dims, flags=pygame.DOUBLEBUF):
    try:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags, vsync=1)
    except TypeError:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags)


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if "test" in argv:
        CONFIG["TEST_MODE"] = True
        CONFIG["SPEED"] = SPEED_MAX
    logging.basicConfig(level=CONFIG["LOG_LEVEL"],
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN])

    dims = compute_dims()
    screen = recreate_window(dims)
    pygame.display.set_caption("Tetris")
    font = pygame.font.SysFont(None, 20)
    render = RenderAssets(dims, font)
    clock = pygame.time.Clock()

    game = Tetris()
    timer = DropTimer()
    played = False
    changed = True  # something outside tick() needs a redraw

    while True:
        dt = clock.tick(60)
        ticks = 0

        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if e.type != pygame.KEYDOWN:
                continue
            if e.key == pygame.K_q:
                pygame.quit(); sys.exit()
            if e.key == pygame.K_RETURN and not game.game_on:
                game.start(); timer.reset()
                played = changed = True
                continue
            if e.key == pygame.K_ESCAPE:
                game.stop(); changed = True; continue
            if e.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
                CONFIG["SPEED"] = min(SPEED_MAX, CONFIG["SPEED"] + 10); changed = True; continue
            if e.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
                CONFIG["SPEED"] = max(0, CONFIG["SPEED"] - 10); changed = True; continue
            verb = verb_for_key(e.key)
            if verb is not None:
                game.tick(verb); ticks += 1

        if game.game_on:
            for _ in range(timer.update(dt)):
                game.tick(Verb.DOWN); ticks += 1
            if not game.game_on:
                changed = True

        if not (changed or ticks or game.repaint):
            continue
        changed = game.repaint = False

        if game.game_on:
            status = "Playing"
        elif game.lost:
            status = "Game over"
        else:
            status = "Enter to start"

        render.redraw_static(screen)
        render.draw_board(screen, game.board)
        seconds = game.elapsed() if played and not game.game_on else None
        render.draw_panel_hud(screen, game.count, seconds, CONFIG["SPEED"], status)
        pygame.display.flip()


if __name__ == '__main__':
    main()
