# smw_jump/game/tuning.py
from __future__ import annotations
from dataclasses import dataclass
from .config import (
    TILE_HEIGHT, SHORT_JUMP_TILES, LONG_JUMP_TILES,
    TOLERANCE_MIN_HEIGHT, TOLERANCE_MAX_HEIGHT,
    INITIAL_SPEED, GRAVITY, FALL_SPEED_LIMIT, MIN_DECELERATION_DISTANCE,
)


@dataclass(frozen=True)
class JumpTuning:
    """
    Immutable jump constants for one controller.
    Defaults come from config.py; tests and the env build their own when needed.
    """
    tile_height: float = TILE_HEIGHT
    short_jump_tiles: float = SHORT_JUMP_TILES
    long_jump_tiles: float = LONG_JUMP_TILES
    tolerance_min_height: float = TOLERANCE_MIN_HEIGHT
    tolerance_max_height: float = TOLERANCE_MAX_HEIGHT
    initial_speed: float = INITIAL_SPEED
    gravity: float = GRAVITY
    fall_speed_limit: float = FALL_SPEED_LIMIT
    min_deceleration_distance: float = MIN_DECELERATION_DISTANCE

    def __post_init__(self):
        if self.tile_height <= 0:
            raise ValueError(f"tile_height must be > 0, got {self.tile_height}")
        if self.initial_speed <= 0:
            raise ValueError(f"initial_speed must be > 0, got {self.initial_speed}")
        if self.gravity <= 0:
            raise ValueError(f"gravity must be > 0, got {self.gravity}")
        if self.fall_speed_limit <= 0:
            raise ValueError(f"fall_speed_limit must be > 0, got {self.fall_speed_limit}")
        if self.min_deceleration_distance <= 0:
            raise ValueError("min_deceleration_distance must be > 0")
        if self.short_jump_tiles <= 0 or self.long_jump_tiles < self.short_jump_tiles:
            raise ValueError(
                f"need 0 < short_jump_tiles <= long_jump_tiles, "
                f"got {self.short_jump_tiles} / {self.long_jump_tiles}"
            )
        if not (0.0 <= self.tolerance_min_height < self.tolerance_max_height):
            raise ValueError(
                f"need 0 <= tolerance_min_height < tolerance_max_height, "
                f"got {self.tolerance_min_height} / {self.tolerance_max_height}"
            )

    @property
    def short_jump_height(self) -> float:
        return self.short_jump_tiles * self.tile_height

    @property
    def long_jump_height(self) -> float:
        return self.long_jump_tiles * self.tile_height


DEFAULT_TUNING = JumpTuning()
