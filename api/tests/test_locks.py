import threading

import pytest

from mdd_api.core.locks import KeyedLock


def test_same_key_is_exclusive():
    locks = KeyedLock()
    held = threading.Event()
    release = threading.Event()

    def holder():
        with locks.hold(1, timeout=1):
            held.set()
            release.wait(timeout=5)

    thread = threading.Thread(target=holder)
    thread.start()
    try:
        assert held.wait(timeout=5)
        with pytest.raises(TimeoutError):
            with locks.hold(1, timeout=0.05):
                pass
    finally:
        release.set()
        thread.join()

    with locks.hold(1, timeout=1):
        pass


def test_different_keys_do_not_wait():
    locks = KeyedLock()

    with locks.hold(1, timeout=1):
        with locks.hold(2, timeout=0.05):
            pass

    assert len(locks) == 2


def test_lock_released_when_body_raises():
    locks = KeyedLock()

    with pytest.raises(ValueError):
        with locks.hold("topic", timeout=1):
            raise ValueError("boom")

    with locks.hold("topic", timeout=0.05):
        pass


def test_discard_forgets_key():
    locks = KeyedLock()
    with locks.hold(1, timeout=1):
        pass

    locks.discard(1)
    locks.discard(1)

    assert len(locks) == 0
