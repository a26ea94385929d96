"""Unit tests for SystemTime and MockTime."""

import threading

import pytest

from apierror.clock import MockTime, SystemTime


# ---------------------------------------------------------------------------
# 1. MockTime arithmetic
# ---------------------------------------------------------------------------
def test_advance_clock() -> None:
    time = MockTime(0, 100, 200)
    assert time.milliseconds() == 100
    assert time.nanoseconds() == 200
    assert time.auto_ticked_ms() == 0

    time.sleep(1)
    assert time.milliseconds() == 101
    assert time.nanoseconds() == 1_000_200
    assert time.auto_ticked_ms() == 1

    time.sleep(10)
    assert time.milliseconds() == 111
    assert time.nanoseconds() == 11_000_200
    assert time.auto_ticked_ms() == 11

    time.reset_auto_ticked_record()
    assert time.auto_ticked_ms() == 0


def test_auto_tick_ms() -> None:
    time = MockTime(1, 100, 200)
    assert time.milliseconds() == 101
    assert time.nanoseconds() == 2_000_200
    assert time.milliseconds() == 103
    assert time.milliseconds() == 104


def test_hi_res_clock_ms_tracks_nanoseconds(mock_time: MockTime) -> None:
    before = mock_time.hi_res_clock_ms()
    mock_time.sleep(25)
    assert mock_time.hi_res_clock_ms() - before == 25


def test_set_current_time_moves_forward(mock_time: MockTime) -> None:
    start_ms, start_ns = mock_time.milliseconds(), mock_time.nanoseconds()
    mock_time.set_current_time_ms(start_ms + 500)
    assert mock_time.milliseconds() == start_ms + 500
    assert mock_time.nanoseconds() == start_ns + 500_000_000


def test_set_current_time_rejects_going_back(mock_time: MockTime) -> None:
    with pytest.raises(ValueError, match="not allowed"):
        mock_time.set_current_time_ms(mock_time.milliseconds() - 1)


# ---------------------------------------------------------------------------
# 2. Listeners
# ---------------------------------------------------------------------------
def test_listeners_run_on_every_advance(mock_time: MockTime) -> None:
    seen: list[int] = []
    mock_time.add_listener(lambda: seen.append(mock_time.milliseconds()))

    mock_time.sleep(5)
    mock_time.set_current_time_ms(mock_time.milliseconds() + 10)

    assert len(seen) == 2
    assert seen[1] - seen[0] == 10


def test_removed_listener_is_not_called(mock_time: MockTime) -> None:
    calls: list[None] = []

    def listener() -> None:
        calls.append(None)

    mock_time.add_listener(listener)
    mock_time.remove_listener(listener)
    mock_time.sleep(1)
    assert calls == []


def test_removing_unknown_listener_is_a_no_op(mock_time: MockTime) -> None:
    mock_time.remove_listener(lambda: None)
    mock_time.sleep(1)


# ---------------------------------------------------------------------------
# 3. wait_object
# ---------------------------------------------------------------------------
def test_wait_object_returns_when_predicate_holds(mock_time: MockTime) -> None:
    condition = threading.Condition()
    mock_time.wait_object(condition, lambda: True, mock_time.milliseconds() + 100)


def test_wait_object_times_out_with_auto_tick() -> None:
    time = MockTime(auto_tick_ms=10, current_time_ms=0, current_high_res_time_ns=0)
    condition = threading.Condition()
    with pytest.raises(TimeoutError):
        time.wait_object(condition, lambda: False, 50)
    assert time.milliseconds() > 50


def test_wait_object_wakes_when_another_thread_advances(mock_time: MockTime) -> None:
    condition = threading.Condition()
    deadline_ms = mock_time.milliseconds() + 1_000
    ready = threading.Event()

    def advance() -> None:
        ready.wait()
        mock_time.sleep(1_000)

    # The predicate never holds, so only the advance past the deadline can end the wait
    def predicate() -> bool:
        ready.set()
        return False

    thread = threading.Thread(target=advance)
    thread.start()
    with pytest.raises(TimeoutError):
        mock_time.wait_object(condition, predicate, deadline_ms)
    thread.join(timeout=5)
    assert not thread.is_alive()


def test_wait_object_sees_state_set_by_another_thread(mock_time: MockTime) -> None:
    condition = threading.Condition()
    done = threading.Event()
    started = threading.Event()

    def finish() -> None:
        started.wait()
        done.set()
        mock_time.sleep(1)

    def predicate() -> bool:
        started.set()
        return done.is_set()

    thread = threading.Thread(target=finish)
    thread.start()
    mock_time.wait_object(condition, predicate, mock_time.milliseconds() + 60_000)
    thread.join(timeout=5)
    assert done.is_set()


def test_wait_object_with_plain_lock_times_out_under_auto_tick() -> None:
    time = MockTime(auto_tick_ms=10, current_time_ms=0, current_high_res_time_ns=0)
    condition = threading.Condition(threading.Lock())
    outcome: list[type[BaseException]] = []

    def wait() -> None:
        try:
            time.wait_object(condition, lambda: False, 50)
        except TimeoutError as exc:
            outcome.append(type(exc))

    thread = threading.Thread(target=wait, daemon=True)
    thread.start()
    thread.join(timeout=5)
    assert not thread.is_alive()
    assert outcome == [TimeoutError]


def test_wait_object_predicate_advancing_clock_reaches_deadline(mock_time: MockTime) -> None:
    condition = threading.Condition(threading.Lock())
    deadline_ms = mock_time.milliseconds() + 30
    outcome: list[type[BaseException]] = []

    def predicate() -> bool:
        mock_time.sleep(10)
        return False

    def wait() -> None:
        try:
            mock_time.wait_object(condition, predicate, deadline_ms)
        except TimeoutError as exc:
            outcome.append(type(exc))

    thread = threading.Thread(target=wait, daemon=True)
    thread.start()
    thread.join(timeout=5)
    assert not thread.is_alive()
    assert outcome == [TimeoutError]


# ---------------------------------------------------------------------------
# 4. SystemTime
# ---------------------------------------------------------------------------
def test_system_time_is_monotonic() -> None:
    time = SystemTime()
    first = time.nanoseconds()
    time.sleep(1)
    assert time.nanoseconds() > first
    assert time.hi_res_clock_ms() >= first // 1_000_000


def test_system_time_wait_object_times_out() -> None:
    time = SystemTime()
    condition = threading.Condition()
    with pytest.raises(TimeoutError):
        time.wait_object(condition, lambda: False, time.milliseconds() + 20)


def test_system_time_wait_object_notified() -> None:
    time = SystemTime()
    condition = threading.Condition()
    flag: list[bool] = []

    def set_flag() -> None:
        with condition:
            flag.append(True)
            condition.notify_all()

    timer = threading.Timer(0.01, set_flag)
    timer.start()
    time.wait_object(condition, lambda: bool(flag), time.milliseconds() + 5_000)
    timer.join()
    assert flag == [True]
