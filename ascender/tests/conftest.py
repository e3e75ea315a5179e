# ascender/tests/conftest.py
from __future__ import annotations
import pytest

from ascender.game.config import SimConfig
from ascender.game.player import Avatar
from ascender.game.world import World


class ScriptedRng:
    """Stands in for random.Random where a test needs exact draws."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self.values.pop(0)


@pytest.fixture
def cfg() -> SimConfig:
    return SimConfig()


@pytest.fixture
def world() -> World:
    """Empty world, avatar at the default start position, camera at 0."""
    return World(avatar=Avatar(x=200.0, y=600.0, target_x=200.0))


@pytest.fixture
def scripted_rng():
    return ScriptedRng
