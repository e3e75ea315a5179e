# ascender/game/simulation.py
"""
Frame driver for one endless-ascent round.

A `Simulation` owns exactly one `World` and is its only writer. The host calls
`tick()` once per display refresh while the round is running; each tick runs

    sample input -> integrate -> collide -> generate ahead -> reclaim behind -> snapshot

and returns the fresh immutable `WorldSnapshot`. Round lifecycle:

    IDLE --start()--> RUNNING --hazard / fall--> TERMINAL --start()--> RUNNING
                      RUNNING <--pause()/resume()--> PAUSED

The terminal transition is latched on the world, so `on_round_end` fires once
per round. A straggler tick in TERMINAL leaves the world untouched and returns
the last snapshot.
"""
from __future__ import annotations
import logging
import random
from enum import Enum
from typing import Callable, Optional

from .collisions import resolve_collisions
from .config import DEFAULT_SKIN, SimConfig, Skin
from .effects import age_particles
from .level import LevelGen, move_platform, reclaim_below
from .player import Avatar
from .world import World, WorldSnapshot, take_snapshot

logger = logging.getLogger(__name__)

ScoreCallback = Callable[[int], None]
CoinCallback = Callable[[int], None]
RoundEndCallback = Callable[[], None]
SoundCallback = Callable[[str], None]

SOUND_JUMP = "jump"
SOUND_COIN = "coin"
SOUND_GAME_OVER = "game_over"


class RoundState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    TERMINAL = "terminal"


class Simulation:
    def __init__(self,
                 config: Optional[SimConfig] = None,
                 seed: Optional[int] = None,
                 skin: Skin = DEFAULT_SKIN,
                 on_score_change: Optional[ScoreCallback] = None,
                 on_coins_collected: Optional[CoinCallback] = None,
                 on_round_end: Optional[RoundEndCallback] = None,
                 on_sound: Optional[SoundCallback] = None):
        self.config = config or SimConfig()
        self.seed = seed
        self.skin = skin
        self.on_score_change = on_score_change
        self.on_coins_collected = on_coins_collected
        self.on_round_end = on_round_end
        self.on_sound = on_sound

        self.state = RoundState.IDLE
        self.world: Optional[World] = None
        self.level: Optional[LevelGen] = None
        self._fx_rng = random.Random()
        self._target_x = self.config.world_width / 2
        self._snapshot: Optional[WorldSnapshot] = None

    # -------------------- Commands --------------------

    def start(self, seed: Optional[int] = None) -> WorldSnapshot:
        """Reset everything and begin a fresh round. Allowed from any state."""
        cfg = self.config
        self.level = LevelGen(seed if seed is not None else self.seed, cfg)
        self._fx_rng = random.Random(self.level.seed ^ 0x5F3759DF)

        start_x = cfg.world_width / 2
        start_y = cfg.view_height - cfg.start_offset
        self._target_x = start_x
        avatar = Avatar(x=start_x, y=start_y, vy=cfg.physics.jump_force, target_x=start_x)
        self.world = World(avatar=avatar)
        self.level.seed_start(self.world, start_y)

        self.state = RoundState.RUNNING
        logger.info("round started (seed=%s)", self.level.seed)
        self._emit_score(0)
        self._snapshot = take_snapshot(self.world)
        return self._snapshot

    def pause(self):
        assert self.state is RoundState.RUNNING, f"pause() while {self.state.value}"
        self.state = RoundState.PAUSED

    def resume(self):
        assert self.state is RoundState.PAUSED, f"resume() while {self.state.value}"
        self.state = RoundState.RUNNING

    def toggle_pause(self):
        if self.state is RoundState.RUNNING:
            self.pause()
        elif self.state is RoundState.PAUSED:
            self.resume()

    def set_target_x(self, x: float):
        """Input seam: latest pointer x in world units, sampled at the next tick."""
        self._target_x = float(x)

    def set_skin(self, skin: Skin):
        self.skin = skin

    # -------------------- Queries --------------------

    @property
    def running(self) -> bool:
        return self.state is RoundState.RUNNING

    @property
    def snapshot(self) -> Optional[WorldSnapshot]:
        return self._snapshot

    @property
    def current_seed(self) -> Optional[int]:
        return self.level.seed if self.level is not None else None

    # -------------------- Frame --------------------

    def tick(self) -> WorldSnapshot:
        assert self.state in (RoundState.RUNNING, RoundState.TERMINAL), \
            f"tick() while {self.state.value}"
        assert self.world is not None and self.level is not None
        if self.state is RoundState.TERMINAL:
            # Straggler tick after game over: the world stays exactly as it ended
            return self._snapshot
        cfg = self.config
        world = self.world

        world.ticks += 1
        world.avatar.target_x = self._target_x

        self._integrate(world)

        report = resolve_collisions(world, cfg, self._fx_rng, self.skin.glow)
        if report.landed:
            self._emit_sound(SOUND_JUMP)
        for _ in report.coins:
            if self.on_coins_collected is not None:
                self.on_coins_collected(1)
            self._emit_sound(SOUND_COIN)
        cause = report.end_cause
        if cause is not None and not world.game_over:
            self._end_round(cause)

        self.level.generate_ahead(world)
        dropped = reclaim_below(world, cfg)
        if dropped:
            logger.debug("reclaimed %d entities below %.1f", dropped, world.camera.bottom(cfg.view_height))
        world.particles = age_particles(world.particles, cfg.effects.decay)

        self._snapshot = take_snapshot(world)
        return self._snapshot

    def _integrate(self, world: World):
        cfg = self.config
        physics = cfg.physics
        world.avatar.update_physics(physics, cfg.world_width)

        previous = world.camera.y
        moved = world.camera.follow(world.avatar.y, cfg.view_height, physics.camera_bias)
        assert world.camera.y <= previous, "camera regressed"
        if moved:
            height = world.camera.height_score(physics.score_divisor)
            if height > world.score:
                world.score = height
                self._emit_score(height)

        for plat in world.platforms:
            move_platform(plat, physics.platform_speed, cfg.world_width)

    def _end_round(self, cause: str):
        world = self.world
        world.game_over = True
        world.end_cause = cause
        self.state = RoundState.TERMINAL
        logger.info("round over: %s (score=%d, coins=%d, ticks=%d)",
                    cause, world.score, world.coins_collected, world.ticks)
        self._emit_sound(SOUND_GAME_OVER)
        if self.on_round_end is not None:
            self.on_round_end()

    def _emit_score(self, score: int):
        if self.on_score_change is not None:
            self.on_score_change(score)

    def _emit_sound(self, cue: str):
        if self.on_sound is not None:
            self.on_sound(cue)
