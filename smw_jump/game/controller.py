# smw_jump/game/controller.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
from .config import STEER_LEFT_KEY, STEER_RIGHT_KEY
from .fall import Fall
from .input_state import InputState
from .jump import JumpImpulse
from .tuning import JumpTuning, DEFAULT_TUNING


@dataclass(frozen=True)
class JumpSnapshot:
    """Read-only view for renderers / observations."""
    vertical_offset: float
    grounded: bool
    elapsed_time: float
    max_reached_offset: float
    hold_distance: float      # only meaningful while rising; stale otherwise
    decelerating: bool
    falling: bool


class JumpController:
    """
    Per-tick driver for one character.
    Owns the ascent and the fall, and performs the handoff between them:
    the jump reports its apex, the controller starts the fall from there.
    """

    def __init__(self, tuning: Optional[JumpTuning] = None):
        self.tuning = tuning if tuning is not None else DEFAULT_TUNING
        self.jump = JumpImpulse(tuning=self.tuning)
        self.fall = Fall(tuning=self.tuning)
        self.input = InputState()
        self.ticks = 0
        self.jumps_landed = 0

    # -------------------- Input edges --------------------

    def on_press(self, key: str) -> bool:
        """Returns True if this press started a jump."""
        if key == STEER_RIGHT_KEY:
            self.input.right = True
            return False
        if key == STEER_LEFT_KEY:
            self.input.left = True
            return False
        if not self.grounded:
            return False
        self.jump.start(key)
        self.input.jump_key = key
        return True

    def on_release(self, key: str):
        if key == STEER_RIGHT_KEY:
            self.input.right = False
        elif key == STEER_LEFT_KEY:
            self.input.left = False
        else:
            if key == self.input.jump_key:
                self.input.jump_key = None
            self.jump.release_key(key)

    # -------------------- Simulation --------------------

    def tick(self, dt: float):
        if dt < 0.0:
            raise ValueError(f"dt must be >= 0, got {dt}")
        self.ticks += 1

        if self.jump.active:
            if self.jump.update(dt):
                self.fall.start(self.jump.s, self.jump.t)

        if self.fall.active:
            self.fall.update(dt)
            if not self.fall.active:
                self.jumps_landed += 1

    # -------------------- Queries --------------------

    @property
    def grounded(self) -> bool:
        return not (self.jump.active or self.fall.active)

    @property
    def vertical_offset(self) -> float:
        if self.jump.active:
            return self.jump.s
        if self.fall.active:
            return self.fall.s
        return 0.0

    @property
    def elapsed_time(self) -> float:
        # Stopwatch keeps showing the last jump's total time while grounded.
        return self.jump.t if self.jump.active else self.fall.t

    @property
    def vertical_velocity(self) -> float:
        """Signed speed, positive upward."""
        if self.jump.active:
            return self.jump.velocity
        if self.fall.active:
            return -self.fall.v
        return 0.0

    def snapshot(self) -> JumpSnapshot:
        return JumpSnapshot(
            vertical_offset=self.vertical_offset,
            grounded=self.grounded,
            elapsed_time=self.elapsed_time,
            max_reached_offset=self.jump.max_s,
            hold_distance=self.jump.hold_distance,
            decelerating=self.jump.active and self.jump.decelerating,
            falling=self.fall.active,
        )
