# ascender/game/entities.py
from __future__ import annotations
import itertools
from dataclasses import dataclass
from typing import Iterator, Tuple

STATIC = "static"
MOVING = "moving"
BREAKING = "breaking"
PLATFORM_KINDS = (STATIC, MOVING, BREAKING)

SPIKE = "spike"
ORB = "orb"
HAZARD_KINDS = (SPIKE, ORB)


class IdAllocator:
    """Monotonic ids, unique for the lifetime of one world."""

    def __init__(self, start: int = 1):
        self._counter: Iterator[int] = itertools.count(start)

    def next(self) -> int:
        return next(self._counter)


@dataclass
class Platform:
    id: int
    x: float
    y: float                        # top surface
    width: float
    platform_type: str = STATIC     # never changes after creation
    direction: int = 0              # +1 right / -1 left, moving only
    broken: bool = False            # breaking only, one-way

    def __post_init__(self):
        assert self.width > 0, f"platform {self.id} has non-positive width {self.width}"
        assert self.platform_type in PLATFORM_KINDS, f"unknown platform type {self.platform_type!r}"

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def solid(self) -> bool:
        return not self.broken


@dataclass
class Coin:
    id: int
    x: float
    y: float
    collected: bool = False


@dataclass
class Hazard:
    id: int
    x: float
    y: float
    kind: str = SPIKE

    def __post_init__(self):
        assert self.kind in HAZARD_KINDS, f"unknown hazard kind {self.kind!r}"


@dataclass
class Particle:
    """Visual-only spark; never collides."""
    x: float
    y: float
    vx: float
    vy: float
    life: float = 1.0
    color: Tuple[int, int, int] = (255, 255, 255)

    @property
    def alive(self) -> bool:
        return self.life > 0.0
