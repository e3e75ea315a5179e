# ascender/env/observations.py
from __future__ import annotations
from typing import List, Tuple
import numpy as np

from ascender.game.config import GAME_WIDTH, VIEW_HEIGHT, JUMP_FORCE
from ascender.game.entities import STATIC, MOVING, BREAKING
from ascender.game.world import WorldSnapshot

N_PLATFORMS = 5         # nearest solid platforms, by vertical distance
PLATFORM_FEATS = 4      # dx, dy, width, kind
HAZARD_FEATS = 3        # dx, dy, present
OBS_SIZE = 3 + N_PLATFORMS * PLATFORM_FEATS + HAZARD_FEATS

KIND_CODE = {STATIC: 0.0, MOVING: 0.5, BREAKING: 1.0}
# Padding when fewer platforms are live: "far below, nothing there"
EMPTY_PLATFORM = (0.0, 1.0, 0.0, 0.0)
EMPTY_HAZARD = (0.0, -1.0, 0.0)


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)

def _clamp11(x: float) -> float:
    return -1.0 if x < -1.0 else (1.0 if x > 1.0 else x)


def observation_bounds() -> Tuple[np.ndarray, np.ndarray]:
    low = [0.0, -1.0, 0.0] + [-1.0, -1.0, 0.0, 0.0] * N_PLATFORMS + [-1.0, -1.0, 0.0]
    high = [1.0, 1.0, 1.0] + [1.0, 1.0, 1.0, 1.0] * N_PLATFORMS + [1.0, 1.0, 1.0]
    return np.array(low, dtype=np.float32), np.array(high, dtype=np.float32)


def build_observation(snap: WorldSnapshot,
                      world_width: float = GAME_WIDTH,
                      view_height: float = VIEW_HEIGHT) -> np.ndarray:
    """
    Returns a fixed (OBS_SIZE,) float32 vector:
      [ x_norm, vy_norm, y_in_view,
        (dx, dy, width, kind) x N_PLATFORMS,
        hazard_dx, hazard_dy, hazard_present ]
    - x_norm, y_in_view, width in [0,1]; dx, dy, vy_norm in [-1,1]
    - dx is scaled by world width, dy by view height, both relative to the avatar
    - vy_norm is vy / |JUMP_FORCE| clipped, so a fresh bounce reads -1
    """
    a = snap.avatar
    x_norm = _clamp01(a.x / world_width)
    vy_norm = _clamp11(a.vy / abs(JUMP_FORCE))
    y_in_view = _clamp01((a.y - snap.camera_y) / view_height)

    feats: List[float] = [x_norm, vy_norm, y_in_view]

    solid = [p for p in snap.platforms if not p.broken]
    solid.sort(key=lambda p: abs(p.y - a.y))
    for i in range(N_PLATFORMS):
        if i < len(solid):
            p = solid[i]
            feats.extend([
                _clamp11((p.x + p.width / 2 - a.x) / world_width),
                _clamp11((p.y - a.y) / view_height),
                _clamp01(p.width / world_width),
                KIND_CODE[p.platform_type],
            ])
        else:
            feats.extend(EMPTY_PLATFORM)

    if snap.hazards:
        h = min(snap.hazards, key=lambda h: (h.x - a.x) ** 2 + (h.y - a.y) ** 2)
        feats.extend([
            _clamp11((h.x - a.x) / world_width),
            _clamp11((h.y - a.y) / view_height),
            1.0,
        ])
    else:
        feats.extend(EMPTY_HAZARD)

    return np.asarray(feats, dtype=np.float32)
