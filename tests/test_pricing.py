# PHM/backend/tests/test_pricing.py

from datetime import datetime, timedelta
import pytest
from phm.services.pricing import duration_in_days, storage_price, transport_price, display_price

START = datetime(2025, 1, 1)


class TestDuration:
    def test_whole_days(self):
        assert duration_in_days(START, START + timedelta(days=30)) == 30

    def test_partial_day_counts_as_a_day(self):
        assert duration_in_days(START, START + timedelta(days=2, hours=1)) == 3

    def test_less_than_a_day(self):
        assert duration_in_days(START, START + timedelta(minutes=5)) == 1


class TestStoragePrice:
    def test_thirty_days_is_one_month(self):
        # 10 t at 1000 per ton per month for 30 days
        assert storage_price(1000, 10, START, START + timedelta(days=30)) == 10000

    def test_prorated_by_day(self):
        assert storage_price(3000, 2, START, START + timedelta(days=15)) == 3000

    def test_result_is_not_rounded(self):
        price = storage_price(1000, 1, START, START + timedelta(days=1))
        assert price == pytest.approx(33.3333, rel=1e-4)

    def test_partial_day_is_charged(self):
        assert storage_price(300, 1, START, START + timedelta(hours=25)) == 20


class TestTransportPrice:
    def test_flat_rate(self):
        assert transport_price(500, 20) == 10000

    def test_fractional_distance(self):
        assert transport_price(300, 12.5) == 3750


class TestDisplayPrice:
    @pytest.mark.parametrize("value, expected", [
        (33.3333, 33),
        (2.5, 3),
        (10000.0, 10000),
        (0.49, 0),
    ])
    def test_rounds_half_up(self, value, expected):
        assert display_price(value) == expected
