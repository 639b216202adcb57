# smw_jump/env/observations.py
from __future__ import annotations
import numpy as np
from ..game.controller import JumpController

OBS_SIZE = 6
DEBUG_OBS = False  # Set to True to print every observation


def build_observation(controller: JumpController, target_height: float) -> np.ndarray:
    """
    Compact observation vector for the agent, float32 shape (6,):
      [offset_norm, target_norm, hold_norm, vel_norm, decelerating, grounded]

    Heights are normalized by the long jump height, velocity by the largest
    speed the controller can produce (rise speed or fall cap).
    """
    tuning = controller.tuning
    snap = controller.snapshot()
    height_scale = max(1.0, float(tuning.long_jump_height))
    speed_scale = max(1.0, float(tuning.initial_speed), float(tuning.fall_speed_limit))

    offset_norm = snap.vertical_offset / height_scale
    target_norm = target_height / height_scale
    # hold distance is stale once deceleration starts; report it only while rising
    hold = snap.hold_distance if (not snap.grounded and not snap.decelerating and not snap.falling) else 0.0
    hold_norm = hold / height_scale
    vel_norm = controller.vertical_velocity / speed_scale

    obs = np.array([
        np.clip(offset_norm, 0.0, 1.0),
        np.clip(target_norm, 0.0, 1.0),
        np.clip(hold_norm, 0.0, 1.0),
        np.clip(vel_norm, -1.0, 1.0),
        1.0 if snap.decelerating else 0.0,
        1.0 if snap.grounded else 0.0,
    ], dtype=np.float32)

    if DEBUG_OBS:
        print(f"OBS s={obs[0]:.3f} target={obs[1]:.3f} hold={obs[2]:.3f} "
              f"v={obs[3]:+.3f} decel={int(obs[4])} grounded={int(obs[5])}")
    return obs
