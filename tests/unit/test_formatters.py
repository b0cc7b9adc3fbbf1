"""
Unit тесты для модуля formatters.py
"""
from datetime import date

import pytest
from driveeasy.utils.formatters import (
    format_booking_card,
    format_booking_status,
    format_car_card,
    format_dashboard,
    format_date,
    format_days_count,
    format_price,
    format_price_quote,
)


class TestFormatPrice:
    """Тесты для функции format_price"""

    def test_thousands_separator(self):
        assert format_price(13500) == "<code>₹13,500</code>"

    def test_zero(self):
        assert format_price(0) == "<code>₹0</code>"


class TestFormatDate:
    """Тесты для функции format_date"""

    def test_iso_string(self):
        assert format_date("2024-06-01") == "01.06.2024"

    def test_date_object(self):
        assert format_date(date(2024, 6, 1)) == "01.06.2024"

    def test_unparseable_string_returned_as_is(self):
        assert format_date("soon") == "soon"


class TestFormatDaysCount:
    """Тесты для функции format_days_count"""

    @pytest.mark.parametrize("days,expected", [
        (1, "1 день"),
        (3, "3 дня"),
        (5, "5 дней"),
        (11, "11 дней"),
        (21, "21 день"),
        (22, "22 дня"),
    ])
    def test_plural_forms(self, days, expected):
        assert format_days_count(days) == expected


class TestCards:
    """Тесты карточек"""

    def test_booking_status(self):
        assert format_booking_status('Approved') == "✅ <b>Approved</b>"

    def test_unknown_booking_status(self):
        assert "❓" in format_booking_status(None)

    def test_car_card(self, sample_car_data):
        text = format_car_card(sample_car_data)

        assert "Scorpio-N" in text
        assert "Mahindra" in text
        assert "₹4,500" in text
        assert "Доступен" in text

    def test_unavailable_car_card(self, sample_car_data):
        text = format_car_card({**sample_car_data, 'availability': False})

        assert "Недоступен" in text

    def test_price_quote_with_driver(self):
        text = format_price_quote(3, 5000, 15000, True)

        assert "3 дня" in text
        assert "₹15,000" in text
        assert "водитель" in text

    def test_booking_card_for_user_hides_client(self, sample_booking_data, sample_car_data, sample_user_data):
        booking = {**sample_booking_data, 'car': sample_car_data, 'user': sample_user_data}

        text = format_booking_card(booking)

        assert "Scorpio-N" in text
        assert "Pending" in text
        assert "user@driveeasy.com" not in text

    def test_booking_card_for_admin(self, sample_booking_data, sample_car_data, sample_user_data):
        booking = {**sample_booking_data, 'car': sample_car_data, 'user': sample_user_data}

        text = format_booking_card(booking, for_admin=True)

        assert "user@driveeasy.com" in text

    def test_booking_card_deleted_car(self, sample_booking_data):
        """Удаленный автомобиль не ломает карточку"""
        text = format_booking_card({**sample_booking_data, 'car': None, 'user': None}, for_admin=True)

        assert "удален" in text

    def test_booking_card_assigned_driver(self, sample_booking_data):
        text = format_booking_card({**sample_booking_data, 'driver_name': 'Suresh', 'driver_phone': '900'})

        assert "Suresh" in text

    def test_dashboard(self):
        text = format_dashboard(2, 3, 28500)

        assert "<b>2</b>" in text
        assert "<b>3</b>" in text
        assert "₹28,500" in text
