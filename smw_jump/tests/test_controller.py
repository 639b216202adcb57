# smw_jump/tests/test_controller.py
"""
Per-tick driver: input edges, jump -> fall handoff, snapshot, and the
reference jump scenarios (tile 64, short 3, long 5).
"""
import numpy as np
import pytest

from smw_jump.game.controller import JumpController
from smw_jump.game.tuning import JumpTuning

DT = 1e-4
APEX_TOL = 1e-3

SCENARIO_TUNING = JumpTuning(
    tile_height=64, short_jump_tiles=3, long_jump_tiles=5,
    initial_speed=1536.0, gravity=14080.0,
    tolerance_min_height=115.2, tolerance_max_height=192.0,
)


def run_until_grounded(c: JumpController, dt: float = DT, max_ticks: int = 200_000):
    for _ in range(max_ticks):
        c.tick(dt)
        assert not (c.jump.active and c.fall.active)
        if c.grounded:
            return
    raise AssertionError("never landed")


def test_idle_snapshot():
    c = JumpController()
    snap = c.snapshot()
    assert snap.grounded
    assert snap.vertical_offset == 0.0
    assert snap.elapsed_time == 0.0
    assert not snap.decelerating and not snap.falling
    c.tick(1.0 / 60.0)
    assert c.grounded and c.vertical_offset == 0.0


def test_steering_keys_update_input_state_only():
    c = JumpController()
    assert c.on_press("right") is False
    assert c.grounded
    assert c.input.right and c.input.steer_dir == 1
    c.on_press("left")
    assert c.input.steer_dir == 1
    c.on_release("right")
    assert c.input.steer_dir == -1
    c.on_release("left")
    assert c.input.steer_dir == 0


def test_press_starts_jump_only_when_grounded():
    c = JumpController()
    assert c.on_press("space") is True
    assert not c.grounded
    assert c.input.jump_key == "space"
    c.tick(0.01)
    assert c.on_press("a") is False
    assert c.jump.trigger_key == "space"
    c.on_release("space")
    assert c.input.jump_key is None
    assert c.jump.decelerating


def test_release_of_other_key_does_not_cut_jump():
    c = JumpController()
    c.on_press("space")
    c.tick(0.01)
    c.on_release("a")
    assert not c.jump.decelerating


def test_negative_dt_is_rejected():
    c = JumpController()
    with pytest.raises(ValueError):
        c.tick(-0.016)
    assert c.ticks == 0


def test_handoff_starts_fall_in_same_tick():
    c = JumpController()
    c.on_press("space")
    c.on_release("space")
    dt = 1.0 / 60.0
    while c.jump.active:
        c.tick(dt)
    assert c.fall.active
    # fall started at the apex state and advanced by the same dt
    assert c.fall.t == pytest.approx(c.jump.t + dt)
    assert c.fall.s < c.jump.s
    assert c.vertical_offset == c.fall.s
    assert c.elapsed_time == c.fall.t
    assert c.snapshot().falling


def test_landing_returns_to_idle():
    c = JumpController()
    c.on_press("space")
    c.on_release("space")
    run_until_grounded(c, dt=1.0 / 60.0)
    snap = c.snapshot()
    assert snap.grounded and snap.vertical_offset == 0.0
    assert snap.elapsed_time == c.fall.t > 0.0
    assert c.jumps_landed == 1
    # a new jump may start only now
    assert c.on_press("space") is True


def test_at_most_one_effect_active_under_random_input():
    rng = np.random.RandomState(7)
    c = JumpController()
    keys = ["space", "a", "left", "right"]
    for _ in range(5000):
        roll = rng.random_sample()
        key = keys[rng.randint(len(keys))]
        if roll < 0.05:
            c.on_press(key)
        elif roll < 0.10:
            c.on_release(key)
        c.tick(float(rng.uniform(0.0, 1.0 / 30.0)))
        assert not (c.jump.active and c.fall.active)
        assert c.vertical_offset >= 0.0
        assert c.grounded == (not c.jump.active and not c.fall.active)
    assert c.jumps_landed > 0


# ------------------------ Reference scenarios ------------------------

def test_scenario_tap_gives_three_tile_jump():
    c = JumpController(tuning=SCENARIO_TUNING)
    c.on_press("space")
    c.on_release("space")
    run_until_grounded(c)
    assert abs(c.snapshot().max_reached_offset - 192.0) < APEX_TOL


def test_scenario_hold_gives_five_tile_jump():
    c = JumpController(tuning=SCENARIO_TUNING)
    c.on_press("space")
    while not c.jump.decelerating:
        c.tick(DT)
    assert c.vertical_offset >= 192.0
    run_until_grounded(c)
    c.on_release("space")  # late release after landing changes nothing
    assert abs(c.snapshot().max_reached_offset - 320.0) < APEX_TOL
    assert c.grounded


def test_scenario_release_inside_band_blends():
    c = JumpController(tuning=SCENARIO_TUNING)
    c.on_press("space")
    while c.vertical_offset < 150.0:
        c.tick(DT)
    s0 = c.vertical_offset
    c.on_release("space")
    factor = min(1.0, max(0.0, (s0 - 115.2) / (192.0 - 115.2)))
    expected = 192.0 + factor * (320.0 - 192.0)
    run_until_grounded(c)
    apex = c.snapshot().max_reached_offset
    assert 192.0 < apex < 320.0
    assert abs(apex - expected) < APEX_TOL


def test_hold_distance_tracks_rise_then_freezes():
    c = JumpController(tuning=SCENARIO_TUNING)
    c.on_press("space")
    for _ in range(100):
        c.tick(DT)
    assert c.snapshot().hold_distance == c.vertical_offset
    c.on_release("space")
    held = c.snapshot().hold_distance
    for _ in range(100):
        c.tick(DT)
    assert c.snapshot().hold_distance == held
    assert c.vertical_offset > held
