# ascender/game/effects.py
from __future__ import annotations
import random
from typing import List, Tuple

from .config import EffectsConfig
from .entities import Particle


def emit_burst(particles: List[Particle], x: float, y: float, color: Tuple[int, int, int],
               count: int, rng: random.Random, fx: EffectsConfig):
    for _ in range(count):
        particles.append(Particle(
            x=x, y=y,
            vx=rng.uniform(-fx.speed, fx.speed),
            vy=rng.uniform(-fx.speed, fx.speed),
            life=1.0,
            color=color,
        ))


def age_particles(particles: List[Particle], decay: float) -> List[Particle]:
    """Drift and fade every particle; return the survivors."""
    for p in particles:
        p.x += p.vx
        p.y += p.vy
        p.life -= decay
    return [p for p in particles if p.alive]
