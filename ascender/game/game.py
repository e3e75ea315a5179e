# ascender/game/game.py
import sys, argparse, logging
import pygame
from pygame import K_ESCAPE, K_p, K_r
from .config import WIDTH, HEIGHT, FPS, GAME_WIDTH, SEED_DEFAULT, SKINS, DEFAULT_SKIN, skin_by_id
from .render import draw_snapshot, draw_hud
from .simulation import Simulation, RoundState

SKIN_KEYS = (pygame.K_1, pygame.K_2, pygame.K_3, pygame.K_4, pygame.K_5)


def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None,
                   help="Level seed. Omit for SEED_DEFAULT, use -1 for random each round.")
    p.add_argument("--skin", default=DEFAULT_SKIN.id, choices=[s.id for s in SKINS])
    p.add_argument("--verbose", action="store_true", help="Log round events to stderr")
    return p.parse_args()


def run():
    args = parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    # Resolve seed: None -> SEED_DEFAULT; -1 -> random
    if args.seed is None:
        launch_seed = SEED_DEFAULT
    elif args.seed == -1:
        launch_seed = None
    else:
        launch_seed = args.seed

    pygame.init()
    pygame.display.set_caption("Neon Ascender")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("jetbrainsmono", 16)

    coins_total = 0

    def add_coins(n: int):
        nonlocal coins_total
        coins_total += n

    sim = Simulation(seed=launch_seed, skin=skin_by_id(args.skin), on_coins_collected=add_coins,
                     on_round_end=lambda: print(f"game over, height {sim.world.score}, wallet {coins_total}"))
    sim.start()

    btn_w, btn_h = 180, 50
    restart_rect = pygame.Rect((WIDTH - btn_w)//2, (HEIGHT - btn_h)//2, btn_w, btn_h)
    scale = GAME_WIDTH / WIDTH

    while True:
        # Fixed tick rate: physics is per frame
        clock.tick(FPS)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
                if event.key == K_p:
                    sim.toggle_pause()
                if event.key == K_r and sim.state is RoundState.TERMINAL:
                    sim.start()
                if event.key in SKIN_KEYS:
                    sim.set_skin(SKINS[SKIN_KEYS.index(event.key)])
            if event.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN) and sim.running:
                sim.set_target_x(event.pos[0] * scale)
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 \
                    and sim.state is RoundState.TERMINAL and restart_rect.collidepoint(event.pos):
                sim.start()

        if sim.running:
            sim.tick()

        # --- Render ---
        snap = sim.snapshot
        draw_snapshot(screen, snap, sim.skin)
        draw_hud(screen, font, snap, sim.current_seed, sim.state is RoundState.PAUSED)

        if sim.state is RoundState.TERMINAL:
            pygame.draw.rect(screen, (40, 60, 90), restart_rect, border_radius=10)
            pygame.draw.rect(screen, (90, 130, 180), restart_rect, width=2, border_radius=10)
            btn_txt = font.render("Restart (R)", True, (220, 235, 255))
            screen.blit(btn_txt, (restart_rect.centerx - btn_txt.get_width()//2,
                                  restart_rect.centery - btn_txt.get_height()//2))

        pygame.display.flip()


if __name__ == "__main__":
    run()
