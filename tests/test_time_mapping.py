"""
tests/test_time_mapping.py

Covers:
  - "HH:MM" parsing and formatting, including malformed input
  - Minutes/pixel conversions at the default and a custom scale
  - Half-up rounding of snaps (no banker's rounding)
  - Drop position from an hour slot and a relative offset
  - Visual height floor for short items
"""

import pytest

from timegrid.config import GridConfig
from timegrid.time_mapping import (
    TimeFormatError,
    TimeMapper,
    duration_to_height_pixels,
    format_minutes,
    minutes_to_top_pixels,
    parse_time_to_minutes,
    pixels_to_minutes,
    pixels_to_minutes_in_slot,
    round_half_up,
    snap_minutes,
    snap_pixels,
    top_position,
)
from timegrid.timed_item import Task


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def mapper():
    """Default scale: 60px per hour, 15 minute drop snap."""
    return TimeMapper()


@pytest.fixture
def double_scale():
    return TimeMapper(px_per_hour=120)


def make_task(start, end):
    return Task(id="t", title="T", date="2024-01-15", start_time=start, end_time=end)


# ── Parsing and formatting ────────────────────────────────────────────────────

class TestParseTime:

    @pytest.mark.parametrize("text, expected", [
        ("00:00", 0),
        ("09:00", 540),
        ("9:05", 545),
        ("23:59", 1439),
        ("24:30", 1470),
    ])
    def test_valid(self, text, expected):
        assert parse_time_to_minutes(text) == expected

    @pytest.mark.parametrize("text", ["", "9", "09:5", "09-00", "ab:cd", "09:60", "123:00"])
    def test_malformed_raises(self, text):
        with pytest.raises(TimeFormatError):
            parse_time_to_minutes(text)

    def test_non_string_raises(self):
        with pytest.raises(TimeFormatError):
            parse_time_to_minutes(540)

    def test_format_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_time_to_minutes("nope")


class TestFormatMinutes:

    def test_zero_padded(self):
        assert format_minutes(65) == "01:05"

    def test_past_midnight(self):
        assert format_minutes(1470) == "24:30"

    def test_negative_raises(self):
        with pytest.raises(ValueError):
            format_minutes(-15)

    def test_parse_inverts_format(self):
        for m in (0, 59, 60, 615, 1439):
            assert parse_time_to_minutes(format_minutes(m)) == m


# ── Pixel conversions ─────────────────────────────────────────────────────────

class TestPixelConversions:

    def test_top_pixels_default_scale(self):
        assert minutes_to_top_pixels(90, 60) == 90

    def test_top_pixels_double_scale(self):
        assert minutes_to_top_pixels(90, 120) == 180

    def test_height_pixels(self):
        assert duration_to_height_pixels(540, 630, 60) == 90

    def test_top_position(self):
        assert top_position("10:30", 60) == 630

    def test_minutes_survive_pixel_round_trip(self, mapper, double_scale):
        for m in range(0, 24 * 60, 7):
            assert mapper.pixels_to_minutes(mapper.minutes_to_pixels(m)) == m
            assert double_scale.pixels_to_minutes(double_scale.minutes_to_pixels(m)) == m

    def test_pixels_to_minutes_rounds_half_up(self):
        # 0.5 minute at 60px/h is 0.5px
        assert pixels_to_minutes(0.5, 60) == 1
        assert pixels_to_minutes(2.5, 60) == 3


# ── Snapping ──────────────────────────────────────────────────────────────────

class TestSnapping:

    def test_round_half_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(-0.5) == 0
        assert round_half_up(2.49) == 2

    def test_snap_minutes_nearest(self):
        assert snap_minutes(607, 15) == 600
        assert snap_minutes(608, 15) == 615

    def test_snap_minutes_tie_goes_later(self):
        # 7.5 minutes past is exactly halfway between 600 and 615
        assert snap_minutes(607.5, 15) == 615

    def test_snap_pixels_quarter_hour(self):
        assert snap_pixels(62, 60) == 60
        assert snap_pixels(70, 60) == 75

    def test_snap_pixels_custom_divisions(self):
        assert snap_pixels(20, 60, divisions=2) == 30


# ── Drop position ─────────────────────────────────────────────────────────────

class TestDropMinutes:

    def test_slot_base_plus_offset(self):
        assert pixels_to_minutes_in_slot(10, 15, 60) == 615

    def test_slot_offset_scaled(self):
        assert pixels_to_minutes_in_slot(10, 30, 120) == 615

    def test_mapper_snaps_drop(self, mapper):
        assert mapper.drop_minutes(10, 17) == 615
        assert mapper.drop_minutes(10, 22) == 615
        assert mapper.drop_minutes(10, 23) == 630

    def test_from_config(self):
        mapper = TimeMapper.from_config(GridConfig(hour_height=80, drop_snap_minutes=30))
        assert mapper.px_per_hour == 80
        assert mapper.drop_minutes(9, 50) == 570


# ── Item geometry ─────────────────────────────────────────────────────────────

class TestItemGeometry:

    def test_regular_item(self, mapper):
        assert mapper.item_geometry(make_task("09:00", "10:30")) == (540, 90)

    def test_short_item_is_floored(self, mapper):
        top, height = mapper.item_geometry(make_task("09:00", "09:10"))
        assert top == 540
        assert height == 30

    def test_floor_leaves_times_alone(self, mapper):
        task = make_task("09:00", "09:10")
        mapper.item_geometry(task)
        assert task.end_time == "09:10"
