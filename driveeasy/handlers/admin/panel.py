"""
Обработчики главной панели администратора
"""
import logging
from aiogram.types import Message, CallbackQuery

from driveeasy.handlers.common import booking_service, car_service
from driveeasy.keyboards.admin_keyboards import get_admin_panel_keyboard
from driveeasy.models.user_models import AuthState
from driveeasy.services.booking_service import get_dashboard_stats
from driveeasy.utils.errors import error_handler
from driveeasy.utils.formatters import format_dashboard
from driveeasy.utils.helpers import safe_callback_answer, safe_delete_message
from .common import admin_required

logger = logging.getLogger(__name__)


async def _dashboard_text() -> str:
    bookings = await booking_service.get_all_bookings()
    cars = await car_service.get_all_cars()
    stats = get_dashboard_stats(bookings, cars)
    return format_dashboard(stats.pending_requests, stats.active_fleet, stats.total_revenue)


@admin_required
@error_handler
async def handle_admin_panel_button(message: Message, session: AuthState) -> None:
    """Обработчик кнопки 'Админ панель'"""
    await message.answer(
        await _dashboard_text(),
        reply_markup=get_admin_panel_keyboard(),
        parse_mode='HTML'
    )


@admin_required
@error_handler
async def handle_admin_panel_callback(callback: CallbackQuery, session: AuthState) -> None:
    """Возврат в главную админ панель"""
    # Удаляем предыдущее сообщение для чистоты чата
    await safe_delete_message(callback.message)

    await callback.message.answer(
        await _dashboard_text(),
        reply_markup=get_admin_panel_keyboard(),
        parse_mode='HTML'
    )
    await safe_callback_answer(callback)
