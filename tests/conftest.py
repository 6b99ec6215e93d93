import pytest

from timegrid.config import set_debug
from timegrid.gestures import reset_gesture_owner


@pytest.fixture(autouse=True)
def fresh_process_state():
    """Every test starts with no active gesture and debug output off."""
    reset_gesture_owner()
    set_debug(False)
    yield
    reset_gesture_owner()
    set_debug(False)
