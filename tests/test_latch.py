from __future__ import annotations

import threading

import pytest

from core.services.latch import CountdownLatch


def test_zero_count_is_released():
    latch = CountdownLatch(0)
    assert latch.wait(timeout=0)


def test_negative_count_rejected():
    with pytest.raises(ValueError):
        CountdownLatch(-1)


def test_exactly_one_caller_releases():
    latch = CountdownLatch(50)
    releases = []
    lock = threading.Lock()

    def worker():
        if latch.count_down():
            with lock:
                releases.append(threading.current_thread().name)

    threads = [threading.Thread(target=worker) for _ in range(50)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(releases) == 1
    assert latch.count == 0
    assert latch.wait(timeout=0)


def test_wait_times_out_while_pending():
    latch = CountdownLatch(2)
    latch.count_down()
    assert not latch.wait(timeout=0.05)


def test_count_down_after_release_raises():
    latch = CountdownLatch(1)
    assert latch.count_down()
    with pytest.raises(RuntimeError):
        latch.count_down()
