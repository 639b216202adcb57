# smw_jump/env/jump_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from smw_jump.game.config import (
    WIDTH, HEIGHT, FPS,
    TILE_HEIGHT, PLAYER_WIDTH, PLAYER_HEIGHT, FLOOR_Y, PLAYER_START_X,
    COLOR_BG, COLOR_FLOOR, COLOR_PLAYER, COLOR_BAND,
)
from smw_jump.game.controller import JumpController
from smw_jump.game.tuning import JumpTuning, DEFAULT_TUNING
from smw_jump.env.observations import build_observation, OBS_SIZE

JUMP_KEY = "space"


class JumpEnv(gym.Env):
    """
    Variable-height jump Gymnasium environment.
    - Each episode requests a random apex between the short and long jump heights.
    - The jump key is pressed at reset; the agent decides when to let go.
    - Actions: 0 = key up, 1 = key held. Once released the key stays up.
    - Episode terminates on landing, reward is paid once at that point.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 1,
                 sim_fps: int = 120,
                 time_limit_seconds: Optional[float] = 5.0,
                 tuning: Optional[JumpTuning] = None):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert sim_fps >= 1, "sim_fps must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.sim_fps = int(sim_fps)
        self.dt = 1.0 / self.sim_fps
        self.tuning = tuning if tuning is not None else DEFAULT_TUNING

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        # --- Gym spaces ---
        self.action_space = gym.spaces.Discrete(2)
        # [offset, target, hold, velocity, decelerating, grounded]
        low = np.array([0.0, 0.0, 0.0, -1.0, 0.0, 0.0], dtype=np.float32)
        high = np.array([1.0, 1.0, 1.0, 1.0, 1.0, 1.0], dtype=np.float32)
        assert low.shape == (OBS_SIZE,)
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        # --- Runtime state ---
        self.controller: Optional[JumpController] = None
        self.target_height: float = 0.0
        self.key_held: bool = False
        self.timestep: int = 0

        # Rendering
        self.screen = None
        self.clock = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        lo, hi = self.tuning.short_jump_height, self.tuning.long_jump_height
        if options is not None and "target_height" in options:
            self.target_height = float(np.clip(options["target_height"], lo, hi))
        else:
            self.target_height = float(self.np_random.uniform(lo, hi))

        self.controller = JumpController(tuning=self.tuning)
        self.controller.on_press(JUMP_KEY)
        self.key_held = True
        self.timestep = 0

        obs = self._get_obs()
        info = {"target_height": self.target_height}
        if self.render_mode == "human":
            self.render()
        return obs, info

    def step(self, action: int):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.controller is not None, "Call reset() first."

        if int(action) == 0 and self.key_held:
            self.controller.on_release(JUMP_KEY)
            self.key_held = False

        for _ in range(self.frame_skip):
            self.controller.tick(self.dt)
            if self.controller.grounded:
                break

        self.timestep += 1
        terminated = self.controller.grounded
        truncated = False
        if (not terminated) and (self.time_limit_decisions is not None) \
                and (self.timestep >= self.time_limit_decisions):
            truncated = True

        apex = float(self.controller.jump.max_s)
        reward = 0.0
        if terminated:
            reward = float(np.clip(1.0 - abs(apex - self.target_height) / TILE_HEIGHT, -1.0, 1.0))

        obs = self._get_obs()
        info = {
            "timestep": self.timestep,
            "target_height": self.target_height,
            "apex": apex,
            "key_held": self.key_held,
            "grounded": self.controller.grounded,
        }

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.controller is not None
        return build_observation(self.controller, self.target_height)

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None:
            return

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("SMW jump — Gym Env")
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT))
            self.clock = pygame.time.Clock()

        if self.render_mode == "human":
            # Pump minimal event queue so the OS doesn't think we're hung
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    pass

        self.screen.fill(COLOR_BG)
        pygame.draw.rect(self.screen, COLOR_FLOOR, pygame.Rect(0, FLOOR_Y, WIDTH, HEIGHT - FLOOR_Y))
        target_y = FLOOR_Y - PLAYER_HEIGHT - self.target_height
        pygame.draw.line(self.screen, COLOR_BAND, (0, target_y), (WIDTH, target_y))

        offset = self.controller.vertical_offset if self.controller is not None else 0.0
        player_rect = pygame.Rect(int(PLAYER_START_X), int(FLOOR_Y - PLAYER_HEIGHT - offset),
                                  PLAYER_WIDTH, PLAYER_HEIGHT)
        pygame.draw.rect(self.screen, COLOR_PLAYER, player_rect)

        if self.render_mode == "human":
            pygame.display.flip()
            if self.clock is not None:
                self.clock.tick(self.metadata.get("render_fps", FPS))
            return None

        # Return an (H, W, 3) uint8 array
        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
