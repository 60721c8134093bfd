import pytest

from sales_analytics.money import round_money


class TestRoundMoney:
    @pytest.mark.parametrize("amount, expected", [
        (1.005, 1.01),    # stored as 1.00499999...
        (2.675, 2.68),    # stored as 2.67499999...
        (0.125, 0.13),    # exact binary half rounds up
        (1.234, 1.23),
        (1.236, 1.24),
        (40, 40.0),
        (0, 0.0),
    ])
    def test_half_up_with_bias_correction(self, amount, expected):
        assert round_money(amount) == expected

    def test_negative_amounts_round_away_from_zero(self):
        assert round_money(-1.005) == -1.01
        assert round_money(-0.004) == 0.0

    def test_idempotent(self):
        for amount in (0.1 + 0.2, 1.005, 123.456, 99.995, -7.125, 1e6 / 3):
            once = round_money(amount)
            assert round_money(once) == once

    def test_huge_amounts_do_not_overflow_precision(self):
        assert round_money(1e30) == 1e30
        assert round_money(-1.5e300) == -1.5e300

    def test_returns_float(self):
        assert isinstance(round_money(3), float)
