from ticket_portal.clock import WallClock


def test_wall_clock_never_goes_backwards():
    readings = iter([100, 250, 200, 300])
    clock = WallClock(source=lambda: next(readings))

    assert [clock() for _ in range(4)] == [100, 250, 250, 300]


def test_wall_clock_defaults_to_epoch_nanoseconds():
    reading = WallClock()()
    assert isinstance(reading, int)
    assert reading > 1_600_000_000 * 10**9
