# ascender/game/player.py
from __future__ import annotations
from dataclasses import dataclass
from .config import PhysicsConfig, GAME_WIDTH


@dataclass
class Avatar:
    """
    The bouncing ball:
    - (x, y) is the centre, +y points down the screen
    - target_x is written by the input layer, last write wins
    - vx is the horizontal displacement of the last tick (the follow is not velocity-driven)
    """
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    target_x: float = GAME_WIDTH / 2

    def update_physics(self, physics: PhysicsConfig, world_width: float):
        """One fixed-form step: follow the target, fall, wrap."""
        # Exponential smoothing toward the pointer, never overshoots
        dx = (self.target_x - self.x) * physics.lerp
        self.x += dx
        self.vx = dx

        self.vy += physics.gravity
        if physics.clamp_fall_speed and self.vy > physics.terminal_velocity:
            self.vy = physics.terminal_velocity
        self.y += self.vy

        self.wrap(world_width)

    def wrap(self, world_width: float):
        # Modulo so a far-off target can never leave the ball outside [0, W]
        if self.x > world_width or self.x < 0:
            self.x %= world_width

    def bounce(self, jump_force: float):
        self.vy = jump_force

    @property
    def falling(self) -> bool:
        return self.vy > 0.0
