"""Tests for six-digit verification code generation."""

from unittest.mock import patch

from mydiary.services.verification_codes import (
    CODE_LOWER_BOUND,
    CODE_UPPER_BOUND,
    generate_code,
)


class TestGenerateCode:
    """Tests for generate_code()."""

    def test_codes_stay_in_range(self):
        for _ in range(1000):
            assert CODE_LOWER_BOUND <= generate_code() <= CODE_UPPER_BOUND

    def test_codes_have_six_digits(self):
        assert len(str(generate_code())) == 6

    def test_lowest_draw_maps_to_lower_bound(self):
        with patch("mydiary.services.verification_codes.secrets.randbelow", return_value=0):
            assert generate_code() == 100000

    def test_highest_draw_maps_to_upper_bound(self):
        with patch(
            "mydiary.services.verification_codes.secrets.randbelow",
            side_effect=lambda n: n - 1,
        ):
            assert generate_code() == 999999

    def test_codes_vary(self):
        assert len({generate_code() for _ in range(50)}) > 1
