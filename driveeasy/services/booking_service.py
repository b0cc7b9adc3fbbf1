"""
Service для работы с бронированиями
Форма бронирования, переходы статусов и сводка для админ-консоли
"""
from datetime import date
from typing import Any, Dict, List, Optional
from pydantic import BaseModel
from driveeasy.database.repositories.booking_repository import BookingRepository
from driveeasy.models.booking_models import BookingCreate, BookingStatus, DriverDetails
from driveeasy.models.user_models import AuthState
from driveeasy.services.pricing import PriceQuote, quote
from driveeasy.utils.errors import AuthError, InvalidTransitionError, NotFoundError, ValidationError
import logging

logger = logging.getLogger(__name__)

# Допустимые переходы статусов через админ-консоль
ALLOWED_TRANSITIONS = {
    BookingStatus.PENDING: {BookingStatus.APPROVED, BookingStatus.REJECTED},
    BookingStatus.APPROVED: {BookingStatus.COMPLETED},
    BookingStatus.REJECTED: set(),
    BookingStatus.COMPLETED: set(),
}


class DashboardStats(BaseModel):
    """Сводка админ-консоли"""
    pending_requests: int
    active_fleet: int
    total_revenue: int


def can_transition(current: Any, target: BookingStatus) -> bool:
    """Проверяет, разрешен ли переход из текущего статуса в target"""
    try:
        current_status = BookingStatus(current)
    except ValueError:
        return False
    return target in ALLOWED_TRANSITIONS[current_status]


def get_dashboard_stats(bookings: List[Dict[str, Any]], cars: List[Dict[str, Any]]) -> DashboardStats:
    """
    Считает сводку: ожидающие заявки, доступные автомобили
    и выручку по завершенным бронированиям
    """
    return DashboardStats(
        pending_requests=sum(1 for b in bookings if b.get('status') == BookingStatus.PENDING.value),
        active_fleet=sum(1 for c in cars if c.get('availability')),
        total_revenue=sum(
            b.get('total_price') or 0
            for b in bookings
            if b.get('status') == BookingStatus.COMPLETED.value
        ),
    )


class BookingService:
    """Service для работы с бронированиями"""

    def __init__(self, booking_repository: BookingRepository) -> None:
        """
        Инициализация сервиса

        Args:
            booking_repository: Репозиторий для работы с бронированиями
        """
        self.booking_repository = booking_repository

    @staticmethod
    def quote_for_car(car: Dict[str, Any], pickup: date, return_date: date, has_driver: bool) -> PriceQuote:
        """Стоимость аренды автомобиля на выбранные даты"""
        return quote(car.get('price_per_day') or 0, pickup, return_date, has_driver)

    async def request_booking(
        self,
        session: AuthState,
        car: Dict[str, Any],
        pickup: date,
        return_date: date,
        has_driver: bool = False,
        driver_id_proof: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Создает заявку на бронирование со статусом Pending

        Raises:
            AuthError: Пользователь не вошел в систему
            ValidationError: Некорректные даты (стоимость равна нулю)
        """
        if not session.is_authenticated or session.user is None:
            raise AuthError("Login required", "Войдите, чтобы забронировать автомобиль")

        price = self.quote_for_car(car, pickup, return_date, has_driver)
        if not price.is_valid:
            raise ValidationError("Please select valid dates", "Выберите корректные даты")

        booking = BookingCreate(
            user_id=session.user.id,
            car_id=car['id'],
            pickup_date=pickup,
            return_date=return_date,
            total_price=price.total,
            status=BookingStatus.PENDING,
            has_driver=has_driver,
            driver_id_proof=driver_id_proof,
        )
        return await self.booking_repository.create(booking.to_record())

    async def get_all_bookings(self) -> List[Dict[str, Any]]:
        """Все бронирования для админ-консоли"""
        return await self.booking_repository.get_all()

    async def get_user_bookings(self, user_id: int) -> List[Dict[str, Any]]:
        """Бронирования пользователя"""
        return await self.booking_repository.get_by_user(user_id)

    async def get_booking(self, booking_id: int) -> Dict[str, Any]:
        """
        Получает бронирование по ID

        Raises:
            NotFoundError: Если бронирование не найдено
        """
        booking = await self.booking_repository.get_by_id(booking_id)
        if not booking:
            raise NotFoundError(f"Booking {booking_id} not found", "Бронирование не найдено")
        return booking

    async def _change_status(
        self,
        booking_id: int,
        target: BookingStatus,
        extra: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        booking = await self.get_booking(booking_id)
        if not can_transition(booking.get('status'), target):
            raise InvalidTransitionError(
                f"Booking {booking_id}: {booking.get('status')} -> {target.value} is not allowed",
                f"Нельзя перевести бронирование из статуса {booking.get('status')} в {target.value}"
            )

        updated = await self.booking_repository.update_status(
            booking_id, {'status': target.value, **(extra or {})}
        )
        if updated is None:
            raise NotFoundError(f"Booking {booking_id} not found", "Бронирование не найдено")

        logger.info(f"Бронирование {booking_id}: {booking.get('status')} -> {target.value}")
        return updated

    async def approve(self, booking_id: int, driver: Optional[DriverDetails] = None) -> Dict[str, Any]:
        """
        Подтверждает бронирование

        Raises:
            ValidationError: Запрошен водитель, но его данные не переданы
        """
        booking = await self.get_booking(booking_id)
        if booking.get('has_driver') and driver is None:
            raise ValidationError(
                f"Booking {booking_id} requires driver details",
                "Для этого бронирования нужно указать данные водителя"
            )
        extra = driver.to_fields() if driver and booking.get('has_driver') else None
        return await self._change_status(booking_id, BookingStatus.APPROVED, extra)

    async def reject(self, booking_id: int) -> Dict[str, Any]:
        """Отклоняет бронирование"""
        return await self._change_status(booking_id, BookingStatus.REJECTED)

    async def complete(self, booking_id: int) -> Dict[str, Any]:
        """Завершает подтвержденное бронирование"""
        return await self._change_status(booking_id, BookingStatus.COMPLETED)
