"""
JSON-хранилище: один документ с коллекциями cars, users, bookings
"""
import asyncio
import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from driveeasy.config import DB_FILE
from driveeasy.database.seed import SAMPLE_CARS, SAMPLE_USERS
from driveeasy.utils.errors import StoreError

logger = logging.getLogger(__name__)

COLLECTIONS = ('cars', 'users', 'bookings')

StoreData = Dict[str, List[Dict[str, Any]]]


def empty_data() -> StoreData:
    """Пустая структура хранилища"""
    return {name: [] for name in COLLECTIONS}


def next_id(records: List[Dict[str, Any]]) -> int:
    """Следующий ID: максимальный существующий + 1 (1 для пустой коллекции)"""
    ids = [r['id'] for r in records if isinstance(r.get('id'), int)]
    return max(ids) + 1 if ids else 1


class JsonStore:
    """
    Хранилище в виде одного JSON-файла.

    Чтение и запись всегда выполняются целиком. Блокировок нет:
    при конкурентной записи побеждает последний писатель.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read(self) -> StoreData:
        if not self.path.exists():
            return empty_data()

        try:
            with self.path.open('r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise StoreError(f"Файл хранилища поврежден: {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise StoreError(f"Файл хранилища должен содержать JSON-объект: {self.path}")

        for name in COLLECTIONS:
            data.setdefault(name, [])
        return data

    def _write(self, data: StoreData) -> None:
        if self.path.parent and not self.path.parent.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open('w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    async def load(self) -> StoreData:
        """Прочитать весь документ"""
        return await asyncio.to_thread(self._read)

    async def save(self, data: StoreData) -> None:
        """Перезаписать весь документ"""
        await asyncio.to_thread(self._write, data)

    async def initialize(self, seed: bool = True) -> None:
        """
        Подготовка хранилища при старте сервера.

        Тестовые автомобили и пользователи записываются только в новое
        хранилище: файла нет или все коллекции пусты. Существующие
        пользователи и бронирования не затираются.
        """
        data = await self.load()
        if not seed or any(data[name] for name in COLLECTIONS):
            logger.info(f"Хранилище готово: {self.path}")
            return

        data['cars'] = copy.deepcopy(SAMPLE_CARS)
        data['users'] = copy.deepcopy(SAMPLE_USERS)
        await self.save(data)
        logger.info(
            f"Хранилище {self.path} заполнено тестовыми данными: "
            f"{len(data['cars'])} автомобиля, {len(data['users'])} пользователя"
        )


def create_store(path: Optional[Union[str, Path]] = None) -> JsonStore:
    """Создает хранилище по пути из конфигурации или переданному пути"""
    return JsonStore(path or DB_FILE)


# Глобальный экземпляр хранилища
store = create_store()
