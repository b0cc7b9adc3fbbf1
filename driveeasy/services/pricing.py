"""
Расчет стоимости аренды
"""
import math
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict

from driveeasy.config import DRIVER_DAILY_FEE

SECONDS_PER_DAY = 24 * 60 * 60


class PriceQuote(BaseModel):
    """Расчет стоимости для формы бронирования"""
    model_config = ConfigDict(frozen=True)

    days: int
    daily_rate: int
    total: int

    @property
    def is_valid(self) -> bool:
        return self.total > 0


def rental_days(pickup: date, return_date: date) -> int:
    """Количество суток аренды, округленное вверх; может быть нулем или отрицательным"""
    seconds = (return_date - pickup).total_seconds()
    return math.ceil(seconds / SECONDS_PER_DAY)


def daily_rate(price_per_day: int, has_driver: bool, driver_fee: Optional[int] = None) -> int:
    """Цена за сутки с учетом доплаты за водителя"""
    fee = DRIVER_DAILY_FEE if driver_fee is None else driver_fee
    return price_per_day + fee if has_driver else price_per_day


def quote(
    price_per_day: int,
    pickup: date,
    return_date: date,
    has_driver: bool = False,
    driver_fee: Optional[int] = None
) -> PriceQuote:
    """
    Рассчитывает стоимость аренды.

    Если дата возврата не позже даты получения, стоимость равна нулю
    и бронирование должно быть отклонено.
    """
    days = rental_days(pickup, return_date)
    rate = daily_rate(price_per_day, has_driver, driver_fee)
    if days <= 0:
        return PriceQuote(days=days, daily_rate=rate, total=0)
    return PriceQuote(days=days, daily_rate=rate, total=days * rate)
