# ascender/env/ascender_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from ascender.game.config import WIDTH, HEIGHT, FPS, SimConfig
from ascender.game.render import draw_snapshot, make_surface
from ascender.game.simulation import Simulation, RoundState
from ascender.env.observations import build_observation, observation_bounds

NOOP, LEFT, RIGHT = 0, 1, 2


class AscenderEnv(gym.Env):
    """
    Neon Ascender Gymnasium environment (vector observations).
    - Simulation runs at 60 ticks/s; the agent acts every `frame_skip` ticks.
    - Actions nudge the horizontal pointer target left/right by `target_step`.
    - Reward: height gained + 1 per coin this decision, -1 on the terminal transition.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 2,
                 target_step: float = 40.0,
                 max_decisions: Optional[int] = 3000,
                 config: Optional[SimConfig] = None):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.target_step = float(target_step)
        self.max_decisions = max_decisions
        self.config = config or SimConfig()

        self.action_space = gym.spaces.Discrete(3)
        low, high = observation_bounds()
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        self.sim = Simulation(config=self.config)
        self.target_x: float = self.config.world_width / 2
        self.timestep: int = 0
        self._end_reported = False

        self.screen = None
        self.clock = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)
        # A provided seed drives the level directly for strict reproducibility;
        # otherwise LevelGen randomizes internally.
        level_seed = int(seed) if seed is not None else None
        self.sim.start(seed=level_seed)
        self.target_x = self.config.world_width / 2
        self.sim.set_target_x(self.target_x)
        self.timestep = 0
        self._end_reported = False

        if self.render_mode == "human":
            self.render()
        return self._obs(), self._info()

    def step(self, action: int):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.sim.world is not None, "call reset() first"

        if action == LEFT:
            self.target_x = max(0.0, self.target_x - self.target_step)
        elif action == RIGHT:
            self.target_x = min(self.config.world_width, self.target_x + self.target_step)
        self.sim.set_target_x(self.target_x)

        world = self.sim.world
        score_before, coins_before = world.score, world.coins_collected
        for _ in range(self.frame_skip):
            if self.sim.state is not RoundState.RUNNING:
                break
            self.sim.tick()

        terminated = self.sim.state is RoundState.TERMINAL
        reward = float(world.score - score_before) + float(world.coins_collected - coins_before)
        if terminated:
            # The death penalty is paid on the step that ends the round, later steps pay nothing
            reward = 0.0 if self._end_reported else -1.0
            self._end_reported = True

        self.timestep += 1
        truncated = (not terminated and self.max_decisions is not None
                     and self.timestep >= self.max_decisions)

        if self.render_mode == "human":
            self.render()
        return self._obs(), reward, terminated, bool(truncated), self._info()

    # -------------------- Helpers --------------------

    def _obs(self) -> np.ndarray:
        return build_observation(self.sim.snapshot, self.config.world_width, self.config.view_height)

    def _info(self) -> Dict[str, Any]:
        snap = self.sim.snapshot
        return {
            "seed": self.sim.current_seed,
            "score": snap.score,
            "coins": snap.coins_collected,
            "camera_y": snap.camera_y,
            "timestep": self.timestep,
            "end_cause": snap.end_cause,
        }

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.sim.snapshot is None:
            return None

        if self.render_mode == "rgb_array":
            surf = make_surface()
            draw_snapshot(surf, self.sim.snapshot, self.sim.skin)
            arr = pygame.surfarray.array3d(surf)  # (W, H, 3)
            return np.transpose(arr, (1, 0, 2))

        if self.screen is None:
            pygame.init()
            self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
            pygame.display.set_caption("Neon Ascender - Gym Env")
            self.clock = pygame.time.Clock()

        # Pump the event queue so the OS doesn't think we're hung
        pygame.event.pump()
        draw_snapshot(self.screen, self.sim.snapshot, self.sim.skin)
        pygame.display.flip()
        self.clock.tick(self.metadata["render_fps"])
        return None

    def close(self):
        if self.screen is not None:
            pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
