"""
Обработчики заявок на бронирование: просмотр и смена статуса
"""
import logging
from aiogram.types import Message, CallbackQuery
from aiogram.fsm.context import FSMContext
from pydantic import ValidationError as PydanticValidationError

from driveeasy.handlers.common import booking_service
from driveeasy.keyboards.admin_keyboards import (
    get_admin_booking_actions_keyboard, get_admin_bookings_keyboard,
    get_cancel_keyboard, get_driver_id_skip_keyboard
)
from driveeasy.models.booking_models import DriverDetails
from driveeasy.models.user_models import AuthState
from driveeasy.utils.errors import error_handler
from driveeasy.utils.formatters import format_booking_card, format_divider
from driveeasy.utils.helpers import (
    extract_file_id, parse_callback_id, safe_callback_answer, safe_delete_message
)
from .common import admin_required
from .states import DriverAssignmentStates

logger = logging.getLogger(__name__)


async def _send_bookings_list(callback: CallbackQuery, page: int = 0) -> None:
    bookings = await booking_service.get_all_bookings()
    # Свежие заявки сверху
    bookings = sorted(bookings, key=lambda b: b.get('id') or 0, reverse=True)

    if not bookings:
        text = "📭 <b>Заявок пока нет</b>"
    else:
        text = f"""📝 <b>ЗАЯВКИ НА БРОНИРОВАНИЕ</b>

{format_divider("thin")}
📊 <b>Всего:</b> {len(bookings)}
{format_divider("thin")}"""

    await safe_delete_message(callback.message)
    await callback.message.answer(
        text,
        reply_markup=get_admin_bookings_keyboard(bookings, page=page),
        parse_mode='HTML'
    )


async def _send_booking_details(message: Message, booking_id: int) -> None:
    booking = await booking_service.get_booking(booking_id)
    await message.answer(
        format_booking_card(booking, for_admin=True),
        reply_markup=get_admin_booking_actions_keyboard(booking),
        parse_mode='HTML'
    )


@admin_required
@error_handler
async def handle_admin_bookings_callback(callback: CallbackQuery, session: AuthState) -> None:
    """Список заявок"""
    await _send_bookings_list(callback)
    await safe_callback_answer(callback)


@admin_required
@error_handler
async def handle_admin_bookings_page_callback(callback: CallbackQuery, session: AuthState) -> None:
    """Пагинация списка заявок"""
    await _send_bookings_list(callback, page=parse_callback_id(callback.data))
    await safe_callback_answer(callback)


@admin_required
@error_handler
async def handle_admin_booking_callback(callback: CallbackQuery, session: AuthState) -> None:
    """Карточка заявки с действиями"""
    await safe_delete_message(callback.message)
    await _send_booking_details(callback.message, parse_callback_id(callback.data))
    await safe_callback_answer(callback)


@admin_required
@error_handler
async def handle_admin_approve_callback(callback: CallbackQuery, session: AuthState, state: FSMContext) -> None:
    """Подтверждение заявки; при заказе с водителем сначала запрашиваются его данные"""
    booking_id = parse_callback_id(callback.data)
    booking = await booking_service.get_booking(booking_id)

    if booking.get('has_driver'):
        await state.set_state(DriverAssignmentStates.waiting_for_name)
        await state.update_data(approve_booking_id=booking_id)
        await callback.message.answer(
            f"🧑‍✈️ <b>Назначение водителя для заявки #{booking_id}</b>\n\nВведите имя водителя:",
            reply_markup=get_cancel_keyboard(),
            parse_mode='HTML'
        )
        await safe_callback_answer(callback)
        return

    await booking_service.approve(booking_id)
    await safe_delete_message(callback.message)
    await _send_booking_details(callback.message, booking_id)
    await safe_callback_answer(callback, "Заявка подтверждена")


@admin_required
@error_handler
async def handle_driver_name_input(message: Message, session: AuthState, state: FSMContext) -> None:
    """Назначение водителя, шаг 1: имя"""
    name = (message.text or '').strip()
    if not name:
        await message.answer("❌ Имя не может быть пустым. Введите имя водителя:", reply_markup=get_cancel_keyboard())
        return

    await state.update_data(driver_name=name)
    await state.set_state(DriverAssignmentStates.waiting_for_phone)
    await message.answer("Введите телефон водителя:", reply_markup=get_cancel_keyboard())


@admin_required
@error_handler
async def handle_driver_phone_input(message: Message, session: AuthState, state: FSMContext) -> None:
    """Назначение водителя, шаг 2: телефон"""
    phone = (message.text or '').strip()
    if not phone:
        await message.answer("❌ Телефон не может быть пустым. Введите телефон водителя:", reply_markup=get_cancel_keyboard())
        return

    await state.update_data(driver_phone=phone)
    await state.set_state(DriverAssignmentStates.waiting_for_id_proof)
    await message.answer(
        "🪪 Прикрепите фото удостоверения водителя или пропустите шаг:",
        reply_markup=get_driver_id_skip_keyboard()
    )


async def _finish_approval(message: Message, state: FSMContext, id_proof=None) -> None:
    data = await state.get_data()
    booking_id = data['approve_booking_id']

    try:
        driver = DriverDetails(
            name=data.get('driver_name', ''),
            phone=data.get('driver_phone', ''),
            id_proof=id_proof
        )
    except PydanticValidationError:
        await state.clear()
        await message.answer("❌ Некорректные данные водителя. Начните подтверждение заново.")
        return

    await state.clear()
    await booking_service.approve(booking_id, driver)
    await message.answer(f"✅ Заявка #{booking_id} подтверждена, водитель назначен.")
    await _send_booking_details(message, booking_id)


@admin_required
@error_handler
async def handle_driver_id_proof_input(message: Message, session: AuthState, state: FSMContext) -> None:
    """Назначение водителя, шаг 3: удостоверение"""
    file_id = extract_file_id(message)
    if not file_id:
        await message.answer("❌ Отправьте фото или документ.", reply_markup=get_driver_id_skip_keyboard())
        return

    await _finish_approval(message, state, file_id)


@admin_required
@error_handler
async def handle_driver_skip_id_callback(callback: CallbackQuery, session: AuthState, state: FSMContext) -> None:
    """Назначение водителя без удостоверения"""
    await _finish_approval(callback.message, state)
    await safe_callback_answer(callback)


@admin_required
@error_handler
async def handle_admin_reject_callback(callback: CallbackQuery, session: AuthState) -> None:
    """Отклонение заявки"""
    booking_id = parse_callback_id(callback.data)
    await booking_service.reject(booking_id)

    await safe_delete_message(callback.message)
    await _send_booking_details(callback.message, booking_id)
    await safe_callback_answer(callback, "Заявка отклонена")


@admin_required
@error_handler
async def handle_admin_complete_callback(callback: CallbackQuery, session: AuthState) -> None:
    """Завершение аренды"""
    booking_id = parse_callback_id(callback.data)
    await booking_service.complete(booking_id)

    await safe_delete_message(callback.message)
    await _send_booking_details(callback.message, booking_id)
    await safe_callback_answer(callback, "Аренда завершена")
