"""
Unit тесты для расчета стоимости аренды
"""
from datetime import date

import pytest
from pydantic import ValidationError

from driveeasy.services.pricing import PriceQuote, daily_rate, quote, rental_days


class TestRentalDays:
    """Тесты для функции rental_days"""

    def test_three_days(self):
        assert rental_days(date(2024, 6, 1), date(2024, 6, 4)) == 3

    def test_same_day(self):
        """Возврат в день получения - ноль суток"""
        assert rental_days(date(2024, 6, 1), date(2024, 6, 1)) == 0

    def test_return_before_pickup(self):
        assert rental_days(date(2024, 6, 4), date(2024, 6, 1)) == -3

    def test_across_month_boundary(self):
        assert rental_days(date(2024, 1, 30), date(2024, 2, 2)) == 3


class TestDailyRate:
    """Тесты для функции daily_rate"""

    def test_without_driver(self):
        assert daily_rate(4500, has_driver=False) == 4500

    def test_with_driver_default_fee(self):
        assert daily_rate(4500, has_driver=True) == 5000

    def test_with_custom_fee(self):
        assert daily_rate(4500, has_driver=True, driver_fee=1000) == 5500

    def test_fee_ignored_without_driver(self):
        assert daily_rate(4500, has_driver=False, driver_fee=1000) == 4500


class TestQuote:
    """Тесты для функции quote"""

    def test_three_days_without_driver(self):
        """3 дня по 4500 = 13500"""
        result = quote(4500, date(2024, 6, 1), date(2024, 6, 4))

        assert result.days == 3
        assert result.daily_rate == 4500
        assert result.total == 13500
        assert result.is_valid

    def test_three_days_with_driver(self):
        """3 дня по (4500 + 500) = 15000"""
        result = quote(4500, date(2024, 6, 1), date(2024, 6, 4), has_driver=True)

        assert result.daily_rate == 5000
        assert result.total == 15000

    def test_same_day_is_zero(self):
        result = quote(4500, date(2024, 6, 1), date(2024, 6, 1), has_driver=True)

        assert result.total == 0
        assert not result.is_valid

    def test_negative_range_is_zero(self):
        result = quote(8500, date(2024, 6, 10), date(2024, 6, 1))

        assert result.total == 0
        assert result.days < 0
        assert not result.is_valid

    def test_single_day(self):
        assert quote(3500, date(2024, 6, 1), date(2024, 6, 2)).total == 3500

    def test_quote_is_frozen(self):
        result = quote(4500, date(2024, 6, 1), date(2024, 6, 4))
        with pytest.raises(ValidationError):
            result.total = 1

    def test_quote_model(self):
        assert PriceQuote(days=1, daily_rate=10, total=10).is_valid
