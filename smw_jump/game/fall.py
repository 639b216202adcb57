# smw_jump/game/fall.py
from __future__ import annotations
from dataclasses import dataclass
from . import config
from .tuning import JumpTuning, DEFAULT_TUNING


@dataclass
class Fall:
    """Descent under capped gravity until the offset returns to the ground (0)."""
    tuning: JumpTuning = DEFAULT_TUNING
    active: bool = False
    s: float = 0.0
    v: float = 0.0    # fall speed, positive downward
    t: float = 0.0    # continues the jump's stopwatch
    a_t: float = 0.0

    def start(self, s: float, t: float):
        self.active = True
        self.s = float(s)
        self.t = float(t)
        self.v = 0.0
        self.a_t = 0.0

    def update(self, dt: float):
        """Euler-integrate speed, then offset. Lands (inactive, s == 0) once below ground."""
        if dt < 0.0:
            raise ValueError(f"dt must be >= 0, got {dt}")
        if not self.active:
            raise RuntimeError("Fall.update() called while inactive")

        self.t += dt
        self.a_t += dt

        self.v += self.tuning.gravity * dt
        if self.v > self.tuning.fall_speed_limit:
            self.v = self.tuning.fall_speed_limit

        self.s -= self.v * dt

        # Flat ground: reaching zero offset is landing.
        if self.s < 0.0:
            self.s = 0.0
            self.active = False
            if config.DEBUG_JUMP_LOGS:
                print(f"[fall] landed t={self.t:.4f}")
