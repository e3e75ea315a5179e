# ascender/game/render.py
from __future__ import annotations
from typing import Optional
import pygame

from .config import (
    WIDTH, HEIGHT, GAME_WIDTH, PLATFORM_HEIGHT, PLAYER_RADIUS, COIN_RADIUS, HAZARD_RADIUS,
    COLOR_BG, COLOR_GRID, COLOR_PLAT, COLOR_PLAT_MOVING, COLOR_PLAT_BREAK,
    COLOR_DANGER, COLOR_COIN, COLOR_FG, Skin,
)
from .entities import MOVING, BREAKING, SPIKE
from .world import WorldSnapshot

PLATFORM_COLORS = {
    MOVING: COLOR_PLAT_MOVING,
    BREAKING: COLOR_PLAT_BREAK,
}


def draw_snapshot(surf: pygame.Surface, snap: WorldSnapshot, skin: Skin):
    """Draw one snapshot; world y is shifted by the camera, x is scaled to the surface."""
    scale = surf.get_width() / GAME_WIDTH
    cam = snap.camera_y

    def to_screen(x: float, y: float):
        return int(x * scale), int((y - cam) * scale)

    surf.fill(COLOR_BG)
    for gx in range(0, GAME_WIDTH, 50):
        sx = int(gx * scale)
        pygame.draw.line(surf, COLOR_GRID, (sx, 0), (sx, surf.get_height()), 1)

    for p in snap.platforms:
        if p.broken:
            continue
        left, top = to_screen(p.x, p.y)
        rect = pygame.Rect(left, top, int(p.width * scale), int(PLATFORM_HEIGHT * scale))
        pygame.draw.rect(surf, PLATFORM_COLORS.get(p.platform_type, COLOR_PLAT), rect, border_radius=4)

    for c in snap.coins:
        if c.collected:
            continue
        pygame.draw.circle(surf, COLOR_COIN, to_screen(c.x, c.y), int(COIN_RADIUS * scale))

    for h in snap.hazards:
        if h.kind == SPIKE:
            tri = (to_screen(h.x, h.y - HAZARD_RADIUS),
                   to_screen(h.x + HAZARD_RADIUS, h.y + HAZARD_RADIUS),
                   to_screen(h.x - HAZARD_RADIUS, h.y + HAZARD_RADIUS))
            pygame.draw.polygon(surf, COLOR_DANGER, tri)
        else:
            pygame.draw.circle(surf, COLOR_DANGER, to_screen(h.x, h.y), int(HAZARD_RADIUS * scale))

    centre = to_screen(snap.avatar.x, snap.avatar.y)
    pygame.draw.circle(surf, skin.color, centre, int(PLAYER_RADIUS * scale))
    pygame.draw.circle(surf, COLOR_FG, centre, int(PLAYER_RADIUS * 0.5 * scale))

    # Particles fade with life; blit through a small per-alpha surface
    for p in snap.particles:
        dot = pygame.Surface((4, 4), pygame.SRCALPHA)
        alpha = max(0, min(255, int(255 * p.life)))
        pygame.draw.circle(dot, (*p.color, alpha), (2, 2), 2)
        sx, sy = to_screen(p.x, p.y)
        surf.blit(dot, (sx - 2, sy - 2))


def draw_hud(surf: pygame.Surface, font: pygame.font.Font, snap: WorldSnapshot,
             seed: Optional[int], paused: bool):
    state = "PAUSED" if paused else ("GAME OVER" if snap.game_over else "ALIVE")
    hud = f"Seed: {seed}   Height: {snap.score}   Coins: {snap.coins_collected}   {state}"
    surf.blit(font.render(hud, True, COLOR_FG), (10, 8))
    surf.blit(font.render("mouse steer | P pause | 1-5 skin | ESC quit", True, (160, 180, 210)), (10, 28))


def make_surface() -> pygame.Surface:
    """Offscreen surface at the default window size (for rgb_array rendering)."""
    return pygame.Surface((WIDTH, HEIGHT))
