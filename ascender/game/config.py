# ascender/game/config.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple

# --- Display ---
WIDTH = 400                 # window px (1 world unit = 1 px)
HEIGHT = 700
FPS = 60                    # tick rate is pinned, physics is per-frame

# --- World ---
GAME_WIDTH = 400            # horizontal wraparound span
VIEW_HEIGHT = 700           # visible vertical window (world units)
START_OFFSET = 100          # avatar starts this far above the view bottom

# --- Physics (per tick, +y is down) ---
GRAVITY = 0.6
JUMP_FORCE = -14.0
MOVEMENT_LERP = 0.15        # how snappy the horizontal follow is
TERMINAL_VELOCITY = 15.0    # reserved, only applied with clamp_fall_speed
CAMERA_BIAS = 0.6           # avatar sits ~40% from the bottom of the view
SCORE_DIVISOR = 10

# --- Bodies ---
PLAYER_RADIUS = 12
COIN_RADIUS = 8
HAZARD_RADIUS = 15
PLATFORM_HEIGHT = 12
LANDING_TOLERANCE = 20      # band below a platform top that still counts as landing

# --- Level generation ---
PLATFORM_WIDTH_MIN = 70
PLATFORM_WIDTH_MAX = 110
PLATFORM_SPEED = 2.0        # moving platforms, units per tick
GAP_MIN = 60
GAP_MAX = 120
LOOKAHEAD_MARGIN = 100      # keep a platform at least this far above the camera
INITIAL_LADDER = 10
INITIAL_SPACING = 100
START_PLATFORM_DROP = 50
COIN_CHANCE = 0.2
COIN_LIFT = 40
HAZARD_CHANCE = 0.1
HAZARD_MIN_HEIGHT = 1000
HAZARD_LIFT = 50
ORB_CHANCE = 0.3
MOVING_MIN_HEIGHT = 2000
MOVING_CHANCE = 0.3
BREAKING_MIN_HEIGHT = 4000
BREAKING_CHANCE = 0.2
SEED_DEFAULT = 12345

# --- Lifecycle ---
FALL_MARGIN = 100           # fall-off below the view bottom
CLEANUP_MARGIN = 200        # reclaim geometry below the view bottom

# --- Particles ---
PARTICLE_DECAY = 0.05
PARTICLE_SPEED = 4.0        # max |v| per axis
JUMP_BURST = 4
BREAK_BURST = 8
COIN_BURST = 6

# --- Colors (RGB) ---
COLOR_BG = (5, 5, 5)
COLOR_FG = (255, 255, 255)
COLOR_ACCENT = (0, 255, 204)
COLOR_GRID = (26, 26, 26)
COLOR_PLAT = (0, 229, 255)
COLOR_PLAT_MOVING = (224, 64, 251)
COLOR_PLAT_BREAK = (255, 234, 0)
COLOR_DANGER = (255, 23, 68)
COLOR_COIN = (255, 215, 0)


@dataclass(frozen=True)
class Skin:
    """Cosmetic avatar descriptor, no gameplay effect."""

    id: str
    name: str
    color: Tuple[int, int, int]
    glow: Tuple[int, int, int]
    price: int = 0


SKINS: Tuple[Skin, ...] = (
    Skin("cyan", "Cyber", (0, 229, 255), (0, 229, 255), 0),
    Skin("pink", "Plasma", (224, 64, 251), (224, 64, 251), 100),
    Skin("lime", "Toxic", (118, 255, 3), (118, 255, 3), 250),
    Skin("white", "Starlight", (255, 255, 255), (255, 255, 255), 500),
    Skin("red", "Fury", (255, 23, 68), (255, 23, 68), 1000),
)
DEFAULT_SKIN = SKINS[0]


def skin_by_id(skin_id: str) -> Skin:
    for skin in SKINS:
        if skin.id == skin_id:
            return skin
    raise KeyError(f"unknown skin {skin_id!r}")


@dataclass(frozen=True)
class SpawnRule:
    """Past `min_height`, a platform becomes `kind` with probability `chance`."""

    min_height: float
    kind: str
    chance: float


@dataclass(frozen=True)
class PhysicsConfig:
    gravity: float = GRAVITY
    jump_force: float = JUMP_FORCE
    lerp: float = MOVEMENT_LERP
    terminal_velocity: float = TERMINAL_VELOCITY
    clamp_fall_speed: bool = False
    platform_speed: float = PLATFORM_SPEED
    camera_bias: float = CAMERA_BIAS
    score_divisor: int = SCORE_DIVISOR


@dataclass(frozen=True)
class LevelConfig:
    width_min: float = PLATFORM_WIDTH_MIN
    width_max: float = PLATFORM_WIDTH_MAX
    gap_min: float = GAP_MIN
    gap_max: float = GAP_MAX
    lookahead: float = LOOKAHEAD_MARGIN
    initial_ladder: int = INITIAL_LADDER
    initial_spacing: float = INITIAL_SPACING
    start_platform_drop: float = START_PLATFORM_DROP
    coin_chance: float = COIN_CHANCE
    coin_lift: float = COIN_LIFT
    hazard_chance: float = HAZARD_CHANCE
    hazard_min_height: float = HAZARD_MIN_HEIGHT
    hazard_lift: float = HAZARD_LIFT
    orb_chance: float = ORB_CHANCE
    orb_min_height: float = BREAKING_MIN_HEIGHT
    # Evaluated top to bottom; the first rule that fires decides the variant.
    spawn_rules: Tuple[SpawnRule, ...] = (
        SpawnRule(MOVING_MIN_HEIGHT, "moving", MOVING_CHANCE),
        SpawnRule(BREAKING_MIN_HEIGHT, "breaking", BREAKING_CHANCE),
    )


@dataclass(frozen=True)
class EffectsConfig:
    decay: float = PARTICLE_DECAY
    speed: float = PARTICLE_SPEED
    jump_burst: int = JUMP_BURST
    break_burst: int = BREAK_BURST
    coin_burst: int = COIN_BURST


@dataclass(frozen=True)
class SimConfig:
    """Everything a Simulation needs; override with dataclasses.replace."""

    world_width: float = GAME_WIDTH
    view_height: float = VIEW_HEIGHT
    start_offset: float = START_OFFSET
    player_radius: float = PLAYER_RADIUS
    coin_radius: float = COIN_RADIUS
    hazard_radius: float = HAZARD_RADIUS
    landing_tolerance: float = LANDING_TOLERANCE
    fall_margin: float = FALL_MARGIN
    cleanup_margin: float = CLEANUP_MARGIN
    physics: PhysicsConfig = field(default_factory=PhysicsConfig)
    level: LevelConfig = field(default_factory=LevelConfig)
    effects: EffectsConfig = field(default_factory=EffectsConfig)
