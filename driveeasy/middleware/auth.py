"""
Middleware сессий: передает в handlers текущее состояние входа
"""
from typing import Callable, Dict, Any, Awaitable
from aiogram import BaseMiddleware
from aiogram.types import TelegramObject
from driveeasy.services.auth_service import SessionStore


class SessionMiddleware(BaseMiddleware):
    """Кладет AuthState пользователя в data['session']"""

    def __init__(self, sessions: SessionStore) -> None:
        self.sessions = sessions

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any]
    ) -> Any:
        user = data.get('event_from_user') or getattr(event, 'from_user', None)
        if user is not None:
            data['session'] = self.sessions.get(user.id)
            data['sessions'] = self.sessions
        return await handler(event, data)
