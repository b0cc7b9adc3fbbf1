"""
Repository для работы с пользователями
"""
from typing import List, Optional, Dict, Any
from driveeasy.database.store import JsonStore, next_id, store as default_store
import logging

logger = logging.getLogger(__name__)

DEFAULT_ROLE = 'user'


class UserRepository:
    """Repository для работы с пользователями"""

    def __init__(self, store: Optional[JsonStore] = None) -> None:
        self.store = store or default_store

    async def register(self, user: Dict[str, Any]) -> Dict[str, Any]:
        """
        Регистрирует пользователя.

        Уникальность email не проверяется, роль по умолчанию - user.
        """
        data = await self.store.load()
        user = dict(user)
        user['id'] = next_id(data['users'])
        user['role'] = user.get('role') or DEFAULT_ROLE

        data['users'].append(user)
        await self.store.save(data)

        logger.info(f"Зарегистрирован пользователь с ID {user['id']}")
        return user

    async def get_all(self) -> List[Dict[str, Any]]:
        """Получает всех пользователей"""
        data = await self.store.load()
        return data['users']

    async def get_by_id(self, user_id: int) -> Optional[Dict[str, Any]]:
        """Получает пользователя по ID"""
        data = await self.store.load()
        return next((u for u in data['users'] if u.get('id') == user_id), None)

    async def find_by_credentials(self, email: str, password: str) -> Optional[Dict[str, Any]]:
        """Ищет пользователя по точному совпадению email и пароля"""
        data = await self.store.load()
        return next(
            (u for u in data['users'] if u.get('email') == email and u.get('password') == password),
            None
        )
