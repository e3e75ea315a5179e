# ascender/game/collisions.py
from __future__ import annotations
import math
import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .config import SimConfig, COLOR_COIN, COLOR_PLAT_BREAK
from .effects import emit_burst
from .entities import BREAKING, Coin, Hazard, Platform
from .player import Avatar
from .world import World


def circles_overlap(ax: float, ay: float, ar: float, bx: float, by: float, br: float) -> bool:
    """Strict centre-distance test: touching circles do not overlap."""
    return math.hypot(ax - bx, ay - by) < ar + br


def lands_on(avatar: Avatar, plat: Platform, radius: float, tolerance: float) -> bool:
    """
    Top-surface landing only:
    - horizontal extent (x ± r) must cross [plat.x, plat.right]
    - the ball's bottom must sit inside [plat.y, plat.y + tolerance]
    Velocity is not checked here, see platform_hits.
    """
    if not plat.solid:
        return False
    if avatar.x + radius <= plat.x or avatar.x - radius >= plat.right:
        return False
    bottom = avatar.y + radius
    return plat.y <= bottom <= plat.y + tolerance


def platform_hits(avatar: Avatar, platforms: Sequence[Platform], radius: float, tolerance: float) -> List[Platform]:
    """Platforms the avatar lands on this tick. Empty while rising (one-way platforms)."""
    if not avatar.falling:
        return []
    return [p for p in platforms if lands_on(avatar, p, radius, tolerance)]


def coin_hits(avatar: Avatar, coins: Sequence[Coin], radius: float, coin_radius: float) -> List[Coin]:
    return [c for c in coins
            if not c.collected and circles_overlap(avatar.x, avatar.y, radius, c.x, c.y, coin_radius)]


def hazard_hit(avatar: Avatar, hazards: Sequence[Hazard], radius: float, hazard_radius: float) -> Optional[Hazard]:
    for h in hazards:
        if circles_overlap(avatar.x, avatar.y, radius, h.x, h.y, hazard_radius):
            return h
    return None


def fell_off(avatar: Avatar, camera_y: float, view_height: float, margin: float) -> bool:
    return avatar.y > camera_y + view_height + margin


@dataclass
class CollisionReport:
    """What the resolver changed this tick; the simulation turns it into callbacks."""
    landed: List[Platform] = field(default_factory=list)
    broke: List[Platform] = field(default_factory=list)
    coins: List[Coin] = field(default_factory=list)
    hazard: Optional[Hazard] = None
    fell: bool = False

    @property
    def end_cause(self) -> Optional[str]:
        if self.hazard is not None:
            return "hazard"
        if self.fell:
            return "fall"
        return None


def resolve_collisions(world: World, cfg: SimConfig, rng: random.Random,
                       glow: Tuple[int, int, int]) -> CollisionReport:
    """
    Apply avatar vs platform / coin / hazard contacts to the world.
    Terminal conditions are only reported; the caller owns the game-over latch.
    """
    avatar = world.avatar
    fx = cfg.effects
    r = cfg.player_radius
    report = CollisionReport()

    for plat in platform_hits(avatar, world.platforms, r, cfg.landing_tolerance):
        avatar.bounce(cfg.physics.jump_force)
        emit_burst(world.particles, avatar.x, plat.y, glow, fx.jump_burst, rng, fx)
        report.landed.append(plat)
        if plat.platform_type == BREAKING:
            plat.broken = True
            emit_burst(world.particles, plat.center_x, plat.y, COLOR_PLAT_BREAK, fx.break_burst, rng, fx)
            report.broke.append(plat)

    for coin in coin_hits(avatar, world.coins, r, cfg.coin_radius):
        coin.collected = True
        world.coins_collected += 1
        emit_burst(world.particles, coin.x, coin.y, COLOR_COIN, fx.coin_burst, rng, fx)
        report.coins.append(coin)

    report.hazard = hazard_hit(avatar, world.hazards, r, cfg.hazard_radius)
    report.fell = fell_off(avatar, world.camera.y, cfg.view_height, cfg.fall_margin)
    return report
