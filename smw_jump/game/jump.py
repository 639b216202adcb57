# smw_jump/game/jump.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Union
from . import config
from .kinematics import (
    uniform_distance, accelerated_distance, velocity as velocity_at,
    target_apex_height, solve_deceleration,
)
from .tuning import JumpTuning, DEFAULT_TUNING


@dataclass
class Rising:
    """Key still held: constant speed, no acceleration."""


@dataclass
class Decelerating:
    """Solved deceleration toward `target_height`; `a_t` counts from its start."""
    a: float
    target_height: float
    a_t: float = 0.0


JumpPhase = Union[Rising, Decelerating]


@dataclass
class JumpImpulse:
    """
    Ascent of a jump.

    The rise runs at constant speed `u` while the key is held. Deceleration
    starts on release of the trigger key, or automatically once the offset
    reaches the top of the tolerance band; its acceleration is solved so the
    velocity hits zero exactly at the target apex:
      s = u*t + 1/2*a*aT^2
    where `t` is time since the jump started and `aT` time since deceleration.
    """
    tuning: JumpTuning = DEFAULT_TUNING
    active: bool = False
    s: float = 0.0
    u: float = 0.0
    t: float = 0.0
    phase: JumpPhase = field(default_factory=Rising)
    trigger_key: Optional[str] = None

    # --- debug ---
    max_s: float = 0.0
    hold_distance: float = 0.0

    @property
    def decelerating(self) -> bool:
        return isinstance(self.phase, Decelerating)

    @property
    def velocity(self) -> float:
        if not self.active:
            return 0.0
        if isinstance(self.phase, Decelerating):
            return velocity_at(self.u, self.phase.a, self.phase.a_t)
        return self.u

    @property
    def target_height(self) -> Optional[float]:
        if isinstance(self.phase, Decelerating):
            return self.phase.target_height
        return None

    def start(self, trigger_key: Optional[str] = None):
        if self.active:
            raise RuntimeError("JumpImpulse.start() called while a jump is active")
        self.active = True
        self.s = 0.0
        self.t = 0.0
        self.u = float(self.tuning.initial_speed)
        self.phase = Rising()
        self.trigger_key = trigger_key
        self.max_s = 0.0
        self.hold_distance = 0.0
        if config.DEBUG_JUMP_LOGS:
            print(f"[jump] start key={trigger_key!r} u={self.u:.1f}")

    def begin_deceleration(self):
        """Solve the deceleration from the current offset. Idempotent."""
        if isinstance(self.phase, Decelerating):
            return
        target = target_apex_height(self.s, self.tuning)
        desired = target - self.s
        # A late release can leave no room to slow down; stop almost immediately.
        if desired < self.tuning.min_deceleration_distance:
            desired = self.tuning.min_deceleration_distance
        a = solve_deceleration(self.u, desired)
        self.phase = Decelerating(a=a, target_height=self.s + desired)
        if config.DEBUG_JUMP_LOGS:
            print(f"[jump] decelerate at s={self.s:.3f} t={self.t:.4f} "
                  f"a={a:.1f} target={self.s + desired:.3f}")

    def release_key(self, key: Optional[str]):
        if self.active and key == self.trigger_key:
            self.begin_deceleration()

    def update(self, dt: float) -> bool:
        """
        Advance the ascent by `dt` seconds.
        Returns True on the tick the apex is crossed; the jump is then inactive.
        """
        if dt < 0.0:
            raise ValueError(f"dt must be >= 0, got {dt}")
        if not self.active:
            raise RuntimeError("JumpImpulse.update() called while inactive")

        self.t += dt
        uniform = uniform_distance(self.u, self.t)
        apex = False

        phase = self.phase
        if isinstance(phase, Decelerating):
            phase.a_t += dt
            self.s = uniform + accelerated_distance(phase.a, phase.a_t)
            if velocity_at(self.u, phase.a, phase.a_t) < 0.0:
                self.active = False
                apex = True
                if config.DEBUG_JUMP_LOGS:
                    print(f"[jump] apex s={self.s:.3f} t={self.t:.4f}")
        else:
            self.s = uniform
            self.hold_distance = uniform
            if self.s >= self.tuning.tolerance_max_height:
                self.begin_deceleration()

        if self.s > self.max_s:
            self.max_s = self.s
        return apex
