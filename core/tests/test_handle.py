import threading

import pytest

from flightcache import (
    ComputationHandle,
    FlightCacheError,
    HandleAlreadyRunningError,
    HandleAlreadySettledError,
    HandleState,
    RecursiveComputationError,
    WaitTimeoutError,
)


def test_run_settles_with_value():
    calls = []
    handle = ComputationHandle(lambda: calls.append(1) or 42, key="answer")

    assert handle.state == HandleState.PENDING
    assert not handle.done()

    handle.run()

    assert handle.state == HandleState.COMPLETED
    assert handle.done()
    assert handle.result() == 42
    assert handle.result(timeout=0) == 42
    assert calls == [1]


def test_run_captures_failure_and_reraises_same_instance():
    error = ValueError("boom")

    def compute():
        raise error

    handle = ComputationHandle(compute)
    handle.run()

    assert handle.state == HandleState.FAILED
    for _ in range(2):
        with pytest.raises(ValueError) as exc_info:
            handle.result()
        assert exc_info.value is error


def test_run_twice_is_rejected():
    handle = ComputationHandle(lambda: 1)
    handle.run()
    with pytest.raises(HandleAlreadyRunningError) as exc_info:
        handle.run()
    assert isinstance(exc_info.value, FlightCacheError)


def test_settle_only_once():
    handle = ComputationHandle(lambda: 1)
    handle.set_result("first")

    with pytest.raises(HandleAlreadySettledError) as exc_info:
        handle.set_result("second")
    assert exc_info.value.state == HandleState.COMPLETED

    with pytest.raises(HandleAlreadySettledError):
        handle.set_exception(RuntimeError("late"))

    assert handle.result() == "first"


def test_result_times_out_while_pending():
    handle = ComputationHandle(lambda: 1, key="slow")

    with pytest.raises(WaitTimeoutError) as exc_info:
        handle.result(timeout=0.01)

    assert isinstance(exc_info.value, TimeoutError)
    assert exc_info.value.key == "slow"
    assert exc_info.value.timeout == 0.01
    assert handle.state == HandleState.PENDING


def test_waiters_observe_settlement_from_another_thread():
    handle = ComputationHandle(lambda: "value")
    results = []

    def wait():
        results.append(handle.result(timeout=5))

    waiters = [threading.Thread(target=wait) for _ in range(4)]
    for waiter in waiters:
        waiter.start()
    handle.run()
    for waiter in waiters:
        waiter.join()

    assert results == ["value"] * 4


def test_owner_waiting_on_itself_raises():
    holder = {}

    def compute():
        return holder["handle"].result()

    handle = ComputationHandle(compute, key="self")
    holder["handle"] = handle
    handle.run()

    assert handle.state == HandleState.FAILED
    with pytest.raises(RecursiveComputationError) as exc_info:
        handle.result()
    assert exc_info.value.key == "self"
