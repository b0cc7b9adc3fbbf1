"""
Repository для работы с автомобилями
"""
from typing import List, Optional, Dict, Any
from driveeasy.database.store import JsonStore, next_id, store as default_store
import logging

logger = logging.getLogger(__name__)


class CarRepository:
    """Repository для работы с автомобилями"""

    def __init__(self, store: Optional[JsonStore] = None) -> None:
        self.store = store or default_store

    async def get_all(self) -> List[Dict[str, Any]]:
        """Получает все автомобили"""
        data = await self.store.load()
        return data['cars']

    async def get_by_id(self, car_id: int) -> Optional[Dict[str, Any]]:
        """Получает автомобиль по ID"""
        data = await self.store.load()
        return next((c for c in data['cars'] if c.get('id') == car_id), None)

    async def upsert(self, car: Dict[str, Any]) -> Dict[str, Any]:
        """
        Сохраняет автомобиль целиком.

        Если ID указан и найден - запись заменяется полностью,
        если указан, но не найден - запись добавляется как есть,
        если ID нет - назначается следующий ID.
        """
        data = await self.store.load()
        cars = data['cars']
        car = dict(car)

        if car.get('id'):
            index = next((i for i, c in enumerate(cars) if c.get('id') == car['id']), None)
            if index is not None:
                cars[index] = car
                logger.info(f"Автомобиль с ID {car['id']} обновлен")
            else:
                cars.append(car)
                logger.info(f"Автомобиль с ID {car['id']} добавлен")
        else:
            car['id'] = next_id(cars)
            cars.append(car)
            logger.info(f"Автомобиль добавлен с новым ID {car['id']}")

        await self.store.save(data)
        return car

    async def delete(self, car_id: int) -> bool:
        """Удаляет автомобиль. Бронирования этого автомобиля не трогаются"""
        data = await self.store.load()
        remaining = [c for c in data['cars'] if c.get('id') != car_id]
        removed = len(remaining) != len(data['cars'])

        data['cars'] = remaining
        await self.store.save(data)

        if removed:
            logger.info(f"Автомобиль с ID {car_id} удален")
        else:
            logger.warning(f"Попытка удалить несуществующий автомобиль с ID: {car_id}")
        return removed
