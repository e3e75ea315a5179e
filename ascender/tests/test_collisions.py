# ascender/tests/test_collisions.py
"""Contact rules: one-way landing, breaking/coin idempotence, hazards, fall-off."""
from __future__ import annotations
import random

import pytest

from ascender.game.collisions import (
    circles_overlap, fell_off, lands_on, platform_hits, resolve_collisions,
)
from ascender.game.entities import BREAKING, Coin, Hazard, Platform
from ascender.game.player import Avatar

GLOW = (0, 229, 255)
R = 12.0


def _landing_world(world, kind="static"):
    """Ball bottom 5 units into the band of a platform at y=612, falling."""
    plat = Platform(id=world.ids.next(), x=150.0, y=612.0, width=100.0, platform_type=kind)
    world.add_platform(plat)
    world.avatar.y = 605.0     # bottom = 617
    world.avatar.vy = 3.0
    return plat


def test_circles_overlap_is_strict():
    assert circles_overlap(0, 0, 12, 19, 0, 8)
    assert not circles_overlap(0, 0, 12, 20, 0, 8)


def test_landing_band_and_extent():
    plat = Platform(id=1, x=100.0, y=500.0, width=80.0)
    assert lands_on(Avatar(x=140.0, y=488.0), plat, R, 20.0)      # bottom on the surface
    assert lands_on(Avatar(x=140.0, y=508.0), plat, R, 20.0)      # bottom at the band edge
    assert not lands_on(Avatar(x=140.0, y=487.0), plat, R, 20.0)  # still above
    assert not lands_on(Avatar(x=140.0, y=509.0), plat, R, 20.0)  # sunk through
    assert not lands_on(Avatar(x=88.0, y=495.0), plat, R, 20.0)   # right edge touches plat.x
    assert lands_on(Avatar(x=89.0, y=495.0), plat, R, 20.0)
    assert not lands_on(Avatar(x=192.0, y=495.0), plat, R, 20.0)


def test_no_landing_while_rising():
    plat = Platform(id=1, x=100.0, y=500.0, width=80.0)
    for vy in (-14.0, -0.1, 0.0):
        a = Avatar(x=140.0, y=495.0, vy=vy)
        assert platform_hits(a, [plat], R, 20.0) == []
    assert platform_hits(Avatar(x=140.0, y=495.0, vy=0.1), [plat], R, 20.0) == [plat]


def test_landing_resets_vy_to_impulse(world, cfg):
    plat = _landing_world(world)
    report = resolve_collisions(world, cfg, random.Random(0), GLOW)
    assert report.landed == [plat]
    assert world.avatar.vy == cfg.physics.jump_force
    assert len(world.particles) == cfg.effects.jump_burst
    assert all(p.color == GLOW for p in world.particles)
    assert not plat.broken


def test_breaking_platform_breaks_once(world, cfg):
    plat = _landing_world(world, kind=BREAKING)
    rng = random.Random(0)
    report = resolve_collisions(world, cfg, rng, GLOW)
    assert plat.broken and report.broke == [plat]
    burst = len(world.particles)
    assert burst == cfg.effects.jump_burst + cfg.effects.break_burst

    # Same overlap again, falling: the broken platform is inert
    world.avatar.vy = 3.0
    report = resolve_collisions(world, cfg, rng, GLOW)
    assert report.landed == [] and report.broke == []
    assert len(world.particles) == burst
    assert world.avatar.vy == 3.0
    assert plat in world.platforms, "broken platforms stay until cleanup"


def test_coin_collected_once(world, cfg):
    coin = Coin(id=world.ids.next(), x=205.0, y=600.0)
    world.add_coin(coin)
    rng = random.Random(0)
    first = resolve_collisions(world, cfg, rng, GLOW)
    second = resolve_collisions(world, cfg, rng, GLOW)
    assert first.coins == [coin] and second.coins == []
    assert coin.collected
    assert world.coins_collected == 1
    assert len(world.particles) == cfg.effects.coin_burst
    assert coin in world.coins


def test_hazard_reported_every_time(world, cfg):
    world.add_hazard(Hazard(id=world.ids.next(), x=220.0, y=600.0))
    rng = random.Random(0)
    for _ in range(3):
        report = resolve_collisions(world, cfg, rng, GLOW)
        assert report.hazard is not None
        assert report.end_cause == "hazard"


def test_hazard_miss(world, cfg):
    world.add_hazard(Hazard(id=world.ids.next(), x=227.0, y=600.0))   # distance == 12 + 15
    report = resolve_collisions(world, cfg, random.Random(0), GLOW)
    assert report.hazard is None and report.end_cause is None


def test_fall_off_line():
    # camera 0, view 700, margin 100
    assert not fell_off(Avatar(x=0.0, y=800.0), 0.0, 700.0, 100.0)
    assert fell_off(Avatar(x=0.0, y=800.5), 0.0, 700.0, 100.0)
    assert fell_off(Avatar(x=0.0, y=-199.0), -1000.0, 700.0, 100.0)


def test_fall_reported(world, cfg):
    world.avatar.y = 900.0
    report = resolve_collisions(world, cfg, random.Random(0), GLOW)
    assert report.fell and report.end_cause == "fall"


@pytest.mark.parametrize("kind", ["static", "moving", BREAKING])
def test_every_variant_is_landable(world, cfg, kind):
    _landing_world(world, kind=kind)
    resolve_collisions(world, cfg, random.Random(0), GLOW)
    assert world.avatar.vy == cfg.physics.jump_force
