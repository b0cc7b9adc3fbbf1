"""
Общие функции и декораторы для admin handlers
"""
from functools import wraps

from aiogram.types import CallbackQuery
from aiogram.fsm.context import FSMContext

from driveeasy.keyboards.user_keyboards import get_main_menu
from driveeasy.models.user_models import AuthState
from driveeasy.utils.helpers import safe_callback_answer


def admin_required(func):
    """
    Декоратор для проверки прав администратора.

    Вторым аргументом handler получает сессию пользователя (AuthState).
    """
    @wraps(func)
    async def wrapper(message_or_callback, session: AuthState, *args, **kwargs):
        if not session.is_admin:
            if isinstance(message_or_callback, CallbackQuery):
                await safe_callback_answer(
                    message_or_callback,
                    "❌ У вас нет прав администратора",
                    show_alert=True
                )
            else:
                await message_or_callback.answer(
                    "❌ У вас нет прав администратора.\n\nЭта функция доступна только для администраторов.",
                    reply_markup=get_main_menu(session)
                )
            return
        return await func(message_or_callback, session, *args, **kwargs)
    return wrapper


async def handle_cancel_action_callback(callback: CallbackQuery, session: AuthState, state: FSMContext):
    """Универсальный обработчик отмены действий"""
    await state.clear()
    # Импортируем здесь, чтобы избежать циклического импорта
    from .panel import handle_admin_panel_callback
    await handle_admin_panel_callback(callback, session)
