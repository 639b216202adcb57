# smw_jump/game/kinematics.py
"""
Classic kinematic ("suvat") equations used by the jump phases:
  v = u + a*t
  s = u*t + 1/2*a*t^2
  v^2 = u^2 + 2*a*s
"""
from __future__ import annotations
from .tuning import JumpTuning


def uniform_distance(u: float, t: float) -> float:
    return u * t


def accelerated_distance(a: float, t: float) -> float:
    return 0.5 * a * t * t


def velocity(u: float, a: float, t: float) -> float:
    return u + a * t


def blend_factor(s: float, lo: float, hi: float) -> float:
    """Where `s` sits inside [lo, hi], clamped to [0, 1]."""
    factor = (s - lo) / (hi - lo)
    return max(0.0, min(1.0, factor))


def target_apex_height(s: float, tuning: JumpTuning) -> float:
    """
    Apex the jump should reach when deceleration starts at offset `s`.
    Below the tolerance band the jump is forced short; inside it the apex is
    a linear blend between the short and long heights.
    """
    short_h = tuning.short_jump_height
    if s < tuning.tolerance_min_height:
        return short_h
    factor = blend_factor(s, tuning.tolerance_min_height, tuning.tolerance_max_height)
    return short_h + factor * (tuning.long_jump_height - short_h)


def release_offset_for_apex(height: float, tuning: JumpTuning) -> float:
    """
    Inverse of target_apex_height: offset at which to let go of the key to
    reach `height`. Short (or lower) targets release immediately; long (or
    higher) targets never need a release.
    """
    short_h, long_h = tuning.short_jump_height, tuning.long_jump_height
    if height <= short_h or long_h <= short_h:
        return 0.0
    if height >= long_h:
        return tuning.tolerance_max_height
    factor = (height - short_h) / (long_h - short_h)
    lo, hi = tuning.tolerance_min_height, tuning.tolerance_max_height
    return lo + factor * (hi - lo)


def solve_deceleration(u: float, distance: float) -> float:
    """
    Acceleration that brings speed `u` to zero after exactly `distance`.
    From v^2 = u^2 + 2*a*s with v = 0:  a = -u^2 / (2*s)
    """
    if distance <= 0.0:
        raise ValueError(f"distance must be > 0, got {distance}")
    return -(u * u) / (2.0 * distance)


def stopping_time(u: float, a: float) -> float:
    """Time for v = u + a*t to reach zero (a < 0)."""
    if a >= 0.0:
        raise ValueError(f"a must be < 0 to stop, got {a}")
    return -u / a
