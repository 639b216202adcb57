# smw_jump/tests/test_fall.py
import pytest

from smw_jump.game.fall import Fall
from smw_jump.game.tuning import JumpTuning, DEFAULT_TUNING


def test_start_sets_state():
    f = Fall()
    f.start(250.0, 0.3)
    assert f.active
    assert (f.s, f.t, f.v, f.a_t) == (250.0, 0.3, 0.0, 0.0)


def test_single_euler_step():
    f = Fall()
    f.start(100.0, 0.0)
    f.update(0.01)
    assert f.v == pytest.approx(DEFAULT_TUNING.gravity * 0.01)          # 140.8
    assert f.s == pytest.approx(100.0 - DEFAULT_TUNING.gravity * 0.01 * 0.01)
    assert f.t == pytest.approx(0.01) and f.a_t == pytest.approx(0.01)


def test_stopwatch_continues_from_jump_time():
    f = Fall()
    f.start(320.0, 0.42)
    f.update(1.0 / 60.0)
    assert f.t == pytest.approx(0.42 + 1.0 / 60.0)
    assert f.a_t == pytest.approx(1.0 / 60.0)


@pytest.mark.parametrize("s0", [0.5, 192.0, 320.0, 5000.0])
def test_fall_lands_exactly_on_ground(s0):
    f = Fall()
    f.start(s0, 0.0)
    prev = f.s
    for _ in range(10_000):
        f.update(1.0 / 60.0)
        assert f.s >= 0.0
        assert f.s <= prev
        prev = f.s
        if not f.active:
            break
    assert not f.active
    assert f.s == 0.0


def test_fall_speed_is_capped():
    tuning = JumpTuning(fall_speed_limit=DEFAULT_TUNING.tile_height * 5.0)
    f = Fall(tuning=tuning)
    f.start(1e6, 0.0)
    prev_v = 0.0
    for _ in range(600):
        f.update(1.0 / 60.0)
        assert f.v <= tuning.fall_speed_limit
        assert f.v >= prev_v
        prev_v = f.v
    assert f.v == tuning.fall_speed_limit


def test_update_contracts():
    f = Fall()
    with pytest.raises(RuntimeError):
        f.update(0.01)
    f.start(10.0, 0.0)
    with pytest.raises(ValueError):
        f.update(-1.0)
    assert f.active and f.s == 10.0
