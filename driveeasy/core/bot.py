"""
Инициализация бота и диспетчера
"""
import logging
from typing import Optional
from aiogram import Bot, Dispatcher
from aiogram.fsm.storage.memory import MemoryStorage
from driveeasy.config import get_bot_token
from driveeasy.middleware.auth import SessionMiddleware
from driveeasy.services.auth_service import SessionStore, sessions

logger = logging.getLogger(__name__)


def create_bot(token: Optional[str] = None) -> Bot:
    """
    Создает экземпляр бота

    Raises:
        ValueError: Если токен не задан или невалиден
    """
    return Bot(token=get_bot_token(token))


def create_dispatcher(session_store: Optional[SessionStore] = None) -> Dispatcher:
    """Создает диспетчер с хранилищем состояний и middleware сессий"""
    dp = Dispatcher(storage=MemoryStorage())
    middleware = SessionMiddleware(session_store or sessions)
    dp.message.middleware(middleware)
    dp.callback_query.middleware(middleware)
    return dp
