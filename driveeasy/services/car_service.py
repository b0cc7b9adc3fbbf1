"""
Service для работы с автомобилями
Бизнес-логика каталога и управления автопарком
"""
from typing import Any, Dict, List, Optional, Tuple
from pydantic import ValidationError as PydanticValidationError
from driveeasy.database.repositories.car_repository import CarRepository
from driveeasy.models.car_models import CarForm
from driveeasy.utils.errors import ValidationError, NotFoundError, DatabaseError
import logging

logger = logging.getLogger(__name__)

DOCUMENT_FIELDS = ('rc_doc', 'insurance_doc')


def _matches(value: Any, wanted: str) -> bool:
    """Пустой фильтр пропускает все; иначе сравнение без учета регистра"""
    return not wanted or str(value or '').lower() == wanted.lower()


def _validation_message(error: PydanticValidationError) -> str:
    """Первое сообщение об ошибке pydantic в читаемом виде"""
    first = error.errors()[0]
    field = '.'.join(str(part) for part in first.get('loc', ()))
    return f"{field}: {first.get('msg')}" if field else first.get('msg', str(error))


class CarService:
    """Service для работы с автомобилями"""

    def __init__(self, car_repository: CarRepository) -> None:
        """
        Инициализация сервиса

        Args:
            car_repository: Репозиторий для работы с автомобилями
        """
        self.car_repository = car_repository

    async def get_all_cars(self) -> List[Dict[str, Any]]:
        """Весь автопарк, включая недоступные автомобили"""
        return await self.car_repository.get_all()

    async def get_catalog(self, brand: str = '', fuel_type: str = '') -> List[Dict[str, Any]]:
        """
        Каталог для пользователей: только доступные автомобили

        Args:
            brand: Фильтр по марке (пустая строка - любая)
            fuel_type: Фильтр по типу топлива (пустая строка - любой)
        """
        cars = await self.car_repository.get_all()
        return [
            car for car in cars
            if car.get('availability')
            and _matches(car.get('brand'), brand)
            and _matches(car.get('fuel_type'), fuel_type)
        ]

    async def get_filter_options(self) -> Tuple[List[str], List[str]]:
        """Уникальные марки и типы топлива по всему автопарку, в порядке появления"""
        cars = await self.car_repository.get_all()
        brands = list(dict.fromkeys(c['brand'] for c in cars if c.get('brand')))
        fuels = list(dict.fromkeys(c['fuel_type'] for c in cars if c.get('fuel_type')))
        return brands, fuels

    async def get_car_by_id(self, car_id: int) -> Dict[str, Any]:
        """
        Получает автомобиль по ID

        Raises:
            NotFoundError: Если автомобиль не найден
        """
        car = await self.car_repository.get_by_id(car_id)
        if not car:
            raise NotFoundError(f"Car {car_id} not found", "Автомобиль не найден")
        return car

    async def save_car(self, car_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Сохраняет автомобиль из формы админ-консоли

        Args:
            car_data: Поля формы; наличие id означает редактирование

        Returns:
            Сохраненная запись

        Raises:
            ValidationError: При ошибках валидации (в том числе без изображения)
        """
        try:
            form = CarForm(**car_data)
        except PydanticValidationError as e:
            logger.warning(f"Ошибка валидации автомобиля: {e}")
            raise ValidationError(str(e), _validation_message(e))

        record = form.model_dump(exclude_none=True)
        return await self.car_repository.upsert(record)

    async def set_availability(self, car_id: int, available: bool) -> Dict[str, Any]:
        """Меняет доступность автомобиля, сохраняя запись целиком"""
        car = await self.get_car_by_id(car_id)
        return await self.car_repository.upsert({**car, 'availability': available})

    async def attach_document(self, car_id: int, field: str, file_ref: str) -> Dict[str, Any]:
        """
        Прикрепляет документ (свидетельство о регистрации или страховку)

        Raises:
            ValidationError: Неизвестное поле документа
        """
        if field not in DOCUMENT_FIELDS:
            raise ValidationError(f"Unknown document field: {field}", "Неизвестный тип документа")
        car = await self.get_car_by_id(car_id)
        return await self.car_repository.upsert({**car, field: file_ref})

    async def delete_car(self, car_id: int) -> bool:
        """
        Удаляет автомобиль

        Raises:
            NotFoundError: Если автомобиль не найден
            DatabaseError: Если запись не была удалена
        """
        await self.get_car_by_id(car_id)
        removed = await self.car_repository.delete(car_id)
        if not removed:
            raise DatabaseError(f"Car {car_id} was not deleted")
        return removed

    @staticmethod
    def merge_for_edit(existing: Optional[Dict[str, Any]], changes: Dict[str, Any]) -> Dict[str, Any]:
        """Данные формы редактирования: существующая запись, поверх - изменения"""
        return {**(existing or {}), **changes}
