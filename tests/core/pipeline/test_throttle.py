"""Tests for UpdateThrottle batching and delivery."""

from __future__ import annotations

import threading

import pytest

from fsinspect.core.pipeline.throttle import UpdateThrottle
from fsinspect.shared.constants import ThrottleDefaults
from fsinspect.shared.errors import DomainError


class TestUpdateThrottle:
    """Test cases for UpdateThrottle with an injected clock and dispatcher."""

    def test_updates_within_interval_are_buffered(self, fake_clock, recording_dispatcher) -> None:
        # Given
        delivered: list[int] = []
        throttle = UpdateThrottle(0.1, dispatcher=recording_dispatcher, clock=fake_clock)

        # When
        result = throttle.schedule(lambda: delivered.append(1))

        # Then
        assert result is None
        assert delivered == []
        assert throttle.pending_count == 1
        assert recording_dispatcher.jobs == 0

    def test_elapsed_interval_flushes_whole_batch_in_order(
        self, fake_clock, recording_dispatcher
    ) -> None:
        # Given
        delivered: list[int] = []
        throttle = UpdateThrottle(0.1, dispatcher=recording_dispatcher, clock=fake_clock)
        throttle.schedule(lambda: delivered.append(1))
        throttle.schedule(lambda: delivered.append(2))

        # When
        fake_clock.advance(0.25)
        result = throttle.schedule(lambda: delivered.append(3))

        # Then
        assert result == "job-1"
        assert delivered == [1, 2, 3]
        assert throttle.pending_count == 0
        assert throttle.last_flush == pytest.approx(0.25)

    def test_flush_of_empty_batch_is_a_noop(self, fake_clock, recording_dispatcher) -> None:
        throttle = UpdateThrottle(0.1, dispatcher=recording_dispatcher, clock=fake_clock)
        fake_clock.advance(5)

        assert throttle.flush() is None
        assert recording_dispatcher.jobs == 0
        assert throttle.last_flush == 0.0

    def test_explicit_flush_ignores_interval(self, fake_clock, recording_dispatcher) -> None:
        delivered: list[str] = []
        throttle = UpdateThrottle(10, dispatcher=recording_dispatcher, clock=fake_clock)
        throttle.schedule(lambda: delivered.append("a"))

        throttle.flush()

        assert delivered == ["a"]
        assert recording_dispatcher.jobs == 1

    def test_zero_interval_delivers_every_update(self, fake_clock, recording_dispatcher) -> None:
        delivered: list[int] = []
        throttle = UpdateThrottle(0, dispatcher=recording_dispatcher, clock=fake_clock)

        for i in range(3):
            throttle.schedule(lambda i=i: delivered.append(i))

        assert delivered == [0, 1, 2]
        assert recording_dispatcher.jobs == 3

    def test_failing_callback_does_not_stop_the_batch(
        self, fake_clock, recording_dispatcher
    ) -> None:
        # Given
        delivered: list[str] = []

        def boom() -> None:
            raise RuntimeError("observer failed")

        throttle = UpdateThrottle(1, dispatcher=recording_dispatcher, clock=fake_clock)
        throttle.schedule(boom)
        throttle.schedule(lambda: delivered.append("after"))

        # When
        throttle.flush()

        # Then
        assert delivered == ["after"]

    def test_close_flushes_pending(self, fake_clock, recording_dispatcher) -> None:
        delivered: list[str] = []
        throttle = UpdateThrottle(1, dispatcher=recording_dispatcher, clock=fake_clock)
        throttle.schedule(lambda: delivered.append("late"))

        throttle.close()

        assert delivered == ["late"]

    def test_negative_interval_is_rejected(self) -> None:
        with pytest.raises(DomainError):
            UpdateThrottle(-0.5)


    def test_concurrent_flushes_reach_dispatcher_in_swap_order(self, fake_clock) -> None:
        # Given a dispatcher that stalls on the first batch it receives
        delivered: list[str] = []
        first_entered = threading.Event()
        release_first = threading.Event()

        def stalling_dispatcher(job) -> None:
            if not first_entered.is_set():
                first_entered.set()
                release_first.wait(timeout=5)
            job()

        throttle = UpdateThrottle(0, dispatcher=stalling_dispatcher, clock=fake_clock)
        producer = threading.Thread(
            target=throttle.schedule, args=(lambda: delivered.append("first"),)
        )
        producer.start()
        assert first_entered.wait(timeout=5)

        # When another producer flushes while the first batch is being dispatched
        follower = threading.Thread(
            target=throttle.schedule, args=(lambda: delivered.append("second"),)
        )
        follower.start()
        follower.join(timeout=0.2)
        release_first.set()
        producer.join(timeout=5)
        follower.join(timeout=5)

        # Then
        assert delivered == ["first", "second"]

    def test_dispatcher_may_flush_reentrantly(self, fake_clock) -> None:
        delivered: list[str] = []

        def inline_dispatcher(job) -> None:
            job()

        throttle = UpdateThrottle(0, dispatcher=inline_dispatcher, clock=fake_clock)

        throttle.schedule(lambda: throttle.schedule(lambda: delivered.append("nested")))

        assert delivered == ["nested"]


class TestDefaultDeliveryThread:
    """Test cases for the owned single delivery thread."""

    def test_batches_run_on_one_delivery_thread_in_order(self) -> None:
        # Given
        seen: list[tuple[int, str]] = []
        lock = threading.Lock()

        def record(i: int) -> None:
            with lock:
                seen.append((i, threading.current_thread().name))

        # When
        with UpdateThrottle(0) as throttle:
            for i in range(20):
                throttle.schedule(lambda i=i: record(i))

        # Then
        assert [i for i, _ in seen] == list(range(20))
        thread_names = {name for _, name in seen}
        assert len(thread_names) == 1
        assert thread_names.pop().startswith(ThrottleDefaults.DELIVERY_THREAD_PREFIX)

    def test_delivery_does_not_run_on_the_producer_thread(self) -> None:
        producer = threading.current_thread().name
        consumers: list[str] = []

        with UpdateThrottle(0) as throttle:
            throttle.schedule(lambda: consumers.append(threading.current_thread().name))

        assert consumers
        assert consumers[0] != producer
