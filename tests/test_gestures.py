"""
tests/test_gestures.py

Covers:
  - Acquire/release of the single pointer gesture
  - Mutual exclusion of selection and scrollbar dragging
  - The process-wide owner and its reset
"""

import pytest

from timegrid.gestures import Gesture, GestureOwner, get_gesture_owner, reset_gesture_owner


@pytest.fixture
def owner():
    return GestureOwner()


class TestGestureOwner:

    def test_starts_idle(self, owner):
        assert owner.is_idle
        assert owner.active is Gesture.NONE

    def test_acquire_and_release(self, owner):
        assert owner.acquire(Gesture.SELECTING)
        assert owner.active is Gesture.SELECTING
        owner.release(Gesture.SELECTING)
        assert owner.is_idle

    def test_second_gesture_blocked(self, owner):
        owner.acquire(Gesture.SCROLLBAR_DRAGGING)
        assert not owner.acquire(Gesture.SELECTING)
        assert owner.active is Gesture.SCROLLBAR_DRAGGING

    def test_reacquire_same_gesture(self, owner):
        owner.acquire(Gesture.SELECTING)
        assert owner.acquire(Gesture.SELECTING)

    def test_release_by_non_owner_is_ignored(self, owner):
        owner.acquire(Gesture.SELECTING)
        owner.release(Gesture.SCROLLBAR_DRAGGING)
        assert owner.active is Gesture.SELECTING

    def test_acquire_none_raises(self, owner):
        with pytest.raises(ValueError):
            owner.acquire(Gesture.NONE)


class TestGlobalOwner:

    def test_singleton(self):
        assert get_gesture_owner() is get_gesture_owner()

    def test_reset_gives_fresh_owner(self):
        first = get_gesture_owner()
        first.acquire(Gesture.SELECTING)
        reset_gesture_owner()
        second = get_gesture_owner()
        assert second is not first
        assert second.is_idle
