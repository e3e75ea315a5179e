# ascender/game/level.py
from __future__ import annotations
import logging
import random
from typing import Optional, Sequence

from .config import LevelConfig, SimConfig, SpawnRule
from .entities import (
    STATIC, MOVING, SPIKE, ORB, Coin, Hazard, Platform,
)
from .world import World

logger = logging.getLogger(__name__)


def choose_variant(rules: Sequence[SpawnRule], height: float, rng: random.Random) -> str:
    """
    Walk the rule table in order. A rule only draws while the platform is still
    static and its height gate is passed, so at most one rule can fire.
    """
    for rule in rules:
        if height > rule.min_height and rng.random() < rule.chance:
            return rule.kind
    return STATIC


def move_platform(plat: Platform, speed: float, world_width: float):
    """Shift a moving platform one tick, bouncing off both walls."""
    if plat.platform_type != MOVING:
        return
    plat.x += speed * plat.direction
    if plat.x > world_width - plat.width:
        plat.direction = -1
    elif plat.x < 0:
        plat.direction = 1


def reclaim_below(world: World, cfg: SimConfig) -> int:
    """Drop geometry that scrolled past the cleanup line. Returns how many went."""
    threshold = world.camera.bottom(cfg.view_height) + cfg.cleanup_margin
    before = world.live_count()
    world.platforms = [p for p in world.platforms if p.y < threshold]
    world.coins = [c for c in world.coins if c.y < threshold]
    world.hazards = [h for h in world.hazards if h.y < threshold]
    return before - world.live_count()


class LevelGen:
    """
    Generates an endless ladder of platforms upward, one step ahead of the camera.
    Difficulty grows with the absolute height of each spawn row.
    """
    def __init__(self, seed: Optional[int], cfg: SimConfig):
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = random.Random(seed)
        self.cfg = cfg

    @property
    def level(self) -> LevelConfig:
        return self.cfg.level

    def _rand_width(self) -> float:
        return self.rng.uniform(self.level.width_min, self.level.width_max)

    def seed_start(self, world: World, start_y: float):
        """Full-width floor under the start position plus a short ladder above it."""
        world.add_platform(Platform(
            id=world.ids.next(),
            x=0.0,
            y=start_y + self.level.start_platform_drop,
            width=float(self.cfg.world_width),
        ))
        for i in range(self.level.initial_ladder):
            self.spawn_platform_above(world, start_y - (i * self.level.initial_spacing + self.level.initial_spacing))

    def spawn_platform_above(self, world: World, y: float) -> Platform:
        """Append one platform at row y, maybe with a coin above it and a hazard nearby."""
        lvl = self.level
        height = abs(y)
        width = self._rand_width()
        x = self.rng.uniform(0.0, self.cfg.world_width - width)

        kind = choose_variant(lvl.spawn_rules, height, self.rng)
        direction = self.rng.choice((-1, 1)) if kind == MOVING else 0
        plat = Platform(id=world.ids.next(), x=x, y=y, width=width,
                        platform_type=kind, direction=direction)
        world.add_platform(plat)

        if self.rng.random() < lvl.coin_chance:
            world.add_coin(Coin(id=world.ids.next(), x=plat.center_x, y=y - lvl.coin_lift))

        if height > lvl.hazard_min_height and self.rng.random() < lvl.hazard_chance:
            hazard_kind = SPIKE
            if height > lvl.orb_min_height and self.rng.random() < lvl.orb_chance:
                hazard_kind = ORB
            # Hazard x is independent of the platform it was rolled with
            world.add_hazard(Hazard(
                id=world.ids.next(),
                x=self.rng.uniform(0.0, self.cfg.world_width),
                y=y - lvl.hazard_lift,
                kind=hazard_kind,
            ))
        return plat

    def generate_ahead(self, world: World) -> int:
        """Spawn until the highest platform sits beyond the lookahead margin above the camera."""
        limit = world.camera.y - self.level.lookahead
        spawned = 0
        highest = world.highest_platform_y()
        if highest is None:
            highest = world.camera.bottom(self.cfg.view_height)
        while highest > limit:
            step = self.rng.uniform(self.level.gap_min, self.level.gap_max)
            highest = self.spawn_platform_above(world, highest - step).y
            spawned += 1
        if spawned:
            logger.debug("generated %d platform(s), highest now %.1f", spawned, highest)
        return spawned
