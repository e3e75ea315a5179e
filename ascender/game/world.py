# ascender/game/world.py
"""
World aggregate and the read-only snapshot handed to renderers.

The live `World` is mutated in place by a single Simulation. Anything outside
the simulation (renderer, env, HUD) only ever sees a `WorldSnapshot`, which is
built from frozen dataclasses and tuples so it cannot tear or be edited.
"""
from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .entities import Coin, Hazard, IdAllocator, Particle, Platform
from .player import Avatar


@dataclass
class Camera:
    """Vertical view offset. Only ever moves up (more negative)."""
    y: float = 0.0

    def follow(self, avatar_y: float, view_height: float, bias: float) -> bool:
        """Adopt the candidate offset if it is higher than the current one."""
        candidate = avatar_y - view_height * bias
        if candidate < self.y:
            self.y = candidate
            return True
        return False

    def height_score(self, divisor: int) -> int:
        return int(math.floor(abs(self.y) / divisor))

    def bottom(self, view_height: float) -> float:
        return self.y + view_height


@dataclass
class World:
    avatar: Avatar
    camera: Camera = field(default_factory=Camera)
    platforms: List[Platform] = field(default_factory=list)
    coins: List[Coin] = field(default_factory=list)
    hazards: List[Hazard] = field(default_factory=list)
    particles: List[Particle] = field(default_factory=list)
    score: int = 0
    coins_collected: int = 0
    game_over: bool = False          # latch, set once per round
    end_cause: Optional[str] = None  # "hazard" | "fall"
    ticks: int = 0
    ids: IdAllocator = field(default_factory=IdAllocator)

    def add_platform(self, plat: Platform):
        assert all(p.id != plat.id for p in self.platforms), f"duplicate platform id {plat.id}"
        self.platforms.append(plat)

    def add_coin(self, coin: Coin):
        assert all(c.id != coin.id for c in self.coins), f"duplicate coin id {coin.id}"
        self.coins.append(coin)

    def add_hazard(self, hazard: Hazard):
        assert all(h.id != hazard.id for h in self.hazards), f"duplicate hazard id {hazard.id}"
        self.hazards.append(hazard)

    def highest_platform_y(self) -> Optional[float]:
        if not self.platforms:
            return None
        return min(p.y for p in self.platforms)

    def live_count(self) -> int:
        return len(self.platforms) + len(self.coins) + len(self.hazards)


# ---------------------------------------------------------------- snapshot

@dataclass(frozen=True)
class AvatarView:
    x: float
    y: float
    vx: float
    vy: float


@dataclass(frozen=True)
class PlatformView:
    id: int
    x: float
    y: float
    width: float
    platform_type: str
    broken: bool


@dataclass(frozen=True)
class CoinView:
    id: int
    x: float
    y: float
    collected: bool


@dataclass(frozen=True)
class HazardView:
    id: int
    x: float
    y: float
    kind: str


@dataclass(frozen=True)
class ParticleView:
    x: float
    y: float
    life: float
    color: Tuple[int, int, int]


@dataclass(frozen=True)
class WorldSnapshot:
    tick: int
    avatar: AvatarView
    camera_y: float
    platforms: Tuple[PlatformView, ...]
    coins: Tuple[CoinView, ...]
    hazards: Tuple[HazardView, ...]
    particles: Tuple[ParticleView, ...]
    score: int
    coins_collected: int
    game_over: bool
    end_cause: Optional[str]


def take_snapshot(world: World) -> WorldSnapshot:
    a = world.avatar
    return WorldSnapshot(
        tick=world.ticks,
        avatar=AvatarView(a.x, a.y, a.vx, a.vy),
        camera_y=world.camera.y,
        platforms=tuple(PlatformView(p.id, p.x, p.y, p.width, p.platform_type, p.broken)
                        for p in world.platforms),
        coins=tuple(CoinView(c.id, c.x, c.y, c.collected) for c in world.coins),
        hazards=tuple(HazardView(h.id, h.x, h.y, h.kind) for h in world.hazards),
        particles=tuple(ParticleView(p.x, p.y, p.life, p.color) for p in world.particles),
        score=world.score,
        coins_collected=world.coins_collected,
        game_over=world.game_over,
        end_cause=world.end_cause,
    )
