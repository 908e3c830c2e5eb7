import pytest

from app.calculation import compute_speed, format_remaining, remaining_seconds


class TestComputeSpeed:
    def test_one_minute(self):
        """120 characters in 60 seconds -> 120 per minute, 2 per second."""
        assert compute_speed(120, 60.0) == (120, 2)

    def test_floors_partial_values(self):
        # 100 chars in 45 s = 133.33 cpm, 2.22 cps
        assert compute_speed(100, 45.0) == (133, 2)

    def test_zero_elapsed(self):
        assert compute_speed(120, 0.0) == (0, 0)

    def test_zero_chars(self):
        assert compute_speed(0, 30.0) == (0, 0)

    def test_negative_elapsed_is_zero(self):
        assert compute_speed(10, -1.0) == (0, 0)


class TestRemaining:
    @pytest.mark.parametrize(
        "seconds, expected",
        [(180, "03:00"), (179.2, "03:00"), (61, "01:01"), (59.01, "01:00"), (0.5, "00:01"), (0, "00:00"), (-3, "00:00")],
    )
    def test_format(self, seconds, expected):
        assert format_remaining(seconds) == expected

    def test_remaining_clamps_at_zero(self):
        assert remaining_seconds(180, 30) == 150
        assert remaining_seconds(1, 5) == 0.0
