"""
Repository для работы с бронированиями
"""
from typing import List, Optional, Dict, Any
from driveeasy.database.store import JsonStore, StoreData, next_id, store as default_store
import logging

logger = logging.getLogger(__name__)


def _join(booking: Dict[str, Any], data: StoreData) -> Dict[str, Any]:
    """Добавляет к бронированию текущие записи автомобиля и пользователя"""
    return {
        **booking,
        'car': next((c for c in data['cars'] if c.get('id') == booking.get('car_id')), None),
        'user': next((u for u in data['users'] if u.get('id') == booking.get('user_id')), None),
    }


class BookingRepository:
    """Repository для работы с бронированиями"""

    def __init__(self, store: Optional[JsonStore] = None) -> None:
        self.store = store or default_store

    async def get_all(self) -> List[Dict[str, Any]]:
        """Получает все бронирования с автомобилем и пользователем"""
        data = await self.store.load()
        return [_join(b, data) for b in data['bookings']]

    async def get_by_user(self, user_id: int) -> List[Dict[str, Any]]:
        """Получает бронирования пользователя"""
        data = await self.store.load()
        return [_join(b, data) for b in data['bookings'] if b.get('user_id') == user_id]

    async def get_by_id(self, booking_id: int) -> Optional[Dict[str, Any]]:
        """Получает бронирование по ID"""
        data = await self.store.load()
        booking = next((b for b in data['bookings'] if b.get('id') == booking_id), None)
        return _join(booking, data) if booking else None

    async def create(self, booking: Dict[str, Any]) -> Dict[str, Any]:
        """Создает бронирование. Статус и стоимость передаются вызывающим кодом"""
        data = await self.store.load()
        booking = dict(booking)
        booking['id'] = next_id(data['bookings'])

        data['bookings'].append(booking)
        await self.store.save(data)

        logger.info(f"Создано бронирование с ID {booking['id']}")
        return booking

    async def update_status(self, booking_id: int, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Объединяет переданные поля с бронированием.

        Returns:
            Обновленное бронирование или None, если бронирование не найдено
            (в этом случае хранилище не перезаписывается)
        """
        data = await self.store.load()
        bookings = data['bookings']
        index = next((i for i, b in enumerate(bookings) if b.get('id') == booking_id), None)

        if index is None:
            logger.warning(f"Бронирование с ID {booking_id} не найдено")
            return None

        bookings[index] = {**bookings[index], **fields}
        await self.store.save(data)

        logger.info(f"Бронирование с ID {booking_id} обновлено: {sorted(fields)}")
        return bookings[index]
