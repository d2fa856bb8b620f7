from gridpath.render.textual_widgets import TimerHandle, cell_at


def test_cell_at_maps_two_column_cells() -> None:
    assert cell_at(0, 0) == (0, 0)
    assert cell_at(1, 0) == (0, 0)
    assert cell_at(2, 3) == (1, 3)
    assert cell_at(59, 29) == (29, 29)


def test_cell_at_keeps_outside_points_negative() -> None:
    assert cell_at(-1, 0) == (-1, 0)
    assert cell_at(0, -1) == (0, -1)


def test_timer_handle_stops_timer() -> None:
    class FakeTimer:
        stopped = False

        def stop(self) -> None:
            self.stopped = True

    timer = FakeTimer()
    TimerHandle(timer).cancel()
    assert timer.stopped
