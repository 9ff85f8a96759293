import pytest

from platformer2d.timing import TimeManager


class FakeClock:
    def __init__(self, step=0):
        self.now = 0
        self.step = step
        self.delays = []

    def ticks(self):
        value = self.now
        self.now += self.step
        return value

    def delay(self, ms):
        self.delays.append(ms)
        self.now += ms


def make(step=0):
    clock = FakeClock(step)
    return clock, TimeManager(ticks=clock.ticks, delay=clock.delay)


def test_before_update_smoothed_is_delta():
    _, tm = make()
    assert tm.smoothed_delta_time == tm.delta_time == 0.0
    assert tm.fps == 0


def test_delta_time_in_seconds():
    clock, tm = make()
    clock.now += 20
    tm.update()
    assert tm.delta_time == pytest.approx(20 / 1000)
    assert tm.smoothed_delta_time == pytest.approx(20 / 1000)


def test_delta_time_is_capped():
    clock, tm = make()
    clock.now += 500
    tm.update()
    assert tm.max_delta_time == 0.05
    assert tm.delta_time == 0.05


def test_custom_cap():
    clock, tm = make()
    tm.max_delta_time = 0.01
    clock.now += 40
    tm.update()
    assert tm.delta_time == 0.01


def test_smoothing_over_window():
    clock, tm = make()
    tm.smoothing_window = 2
    recorded = []
    for ms in (10, 20, 30):
        clock.now += ms
        tm.update()
        recorded.append(tm.delta_time)
    assert tm.smoothed_delta_time == pytest.approx(sum(recorded[-2:]) / 2)


def test_fps_from_smoothed():
    clock, tm = make()
    clock.now += 20
    tm.update()
    assert tm.fps == 50


def test_window_and_fps_are_clamped():
    _, tm = make()
    assert tm.smoothing_window == 10
    assert tm.target_fps is None
    tm.smoothing_window = 0
    tm.target_fps = 0
    assert tm.smoothing_window == 1
    assert tm.target_fps == 1


def test_frame_cap_waits_rest_of_frame():
    clock, tm = make()
    tm.target_fps = 60
    tm.update()
    assert clock.delays == [16]


def test_no_wait_when_frame_was_slow():
    clock, tm = make(step=20)
    tm.target_fps = 60
    tm.update()
    assert clock.delays == []


def test_disable_frame_cap():
    clock, tm = make()
    tm.target_fps = 60
    tm.disable_frame_cap()
    tm.update()
    assert tm.target_fps is None
    assert clock.delays == []