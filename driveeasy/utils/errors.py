"""
Централизованная обработка ошибок
"""
import logging
from typing import Optional, Callable
from functools import wraps
from aiogram.types import Message, CallbackQuery
from aiogram.exceptions import TelegramBadRequest, TelegramForbiddenError
from driveeasy.utils.helpers import safe_callback_answer

logger = logging.getLogger(__name__)


class RentalError(Exception):
    """Базовое исключение приложения"""
    def __init__(self, message: str, user_message: Optional[str] = None):
        self.message = message
        self.user_message = user_message or message
        super().__init__(self.message)


class ValidationError(RentalError):
    """Ошибка валидации данных"""
    pass


class NotFoundError(RentalError):
    """Ошибка - объект не найден"""
    pass


class DatabaseError(RentalError):
    """Ошибка работы с хранилищем"""
    pass


class StoreError(DatabaseError):
    """Файл хранилища не читается или поврежден"""
    pass


class AuthError(RentalError):
    """Ошибка входа или недостаточно прав"""
    pass


class InvalidTransitionError(ValidationError):
    """Недопустимый переход статуса бронирования"""
    pass


async def _reply(obj, text: str) -> None:
    """Отправляет текст ошибки в ответ на Message или CallbackQuery"""
    if isinstance(obj, CallbackQuery):
        await safe_callback_answer(obj, text, show_alert=True)
    else:
        await obj.answer(f"❌ {text}")


def error_handler(func: Callable) -> Callable:
    """
    Декоратор для обработки ошибок в handlers

    Usage:
        @error_handler
        async def my_handler(message: Message):
            ...
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        obj = args[0] if args and isinstance(args[0], (Message, CallbackQuery)) else None
        try:
            return await func(*args, **kwargs)
        except (ValidationError, NotFoundError, AuthError) as e:
            logger.warning(f"{type(e).__name__} in {func.__name__}: {e.message}")
            if obj is not None:
                await _reply(obj, e.user_message)
            return None
        except DatabaseError as e:
            logger.error(f"Database error in {func.__name__}: {e.message}")
            if obj is not None:
                await _reply(obj, "Ошибка работы с базой данных. Попробуйте позже.")
            return None
        except TelegramBadRequest as e:
            logger.warning(f"Telegram API error in {func.__name__}: {e}")
            return None
        except TelegramForbiddenError as e:
            logger.warning(f"User blocked bot in {func.__name__}: {e}")
            return None
        except Exception as e:
            logger.exception(f"Unexpected error in {func.__name__}: {e}")
            if obj is not None:
                await _reply(obj, "Произошла ошибка. Попробуйте позже.")
            return None

    return wrapper
