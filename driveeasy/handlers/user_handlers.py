"""
Обработчики витрины: каталог, форма бронирования, мои бронирования
"""
import logging
from datetime import date
from typing import Any, Dict, List

from aiogram.types import Message, CallbackQuery
from aiogram.fsm.context import FSMContext

from driveeasy.handlers.common import booking_service, car_service
from driveeasy.handlers.states import BookingStates
from driveeasy.keyboards.user_keyboards import (
    get_booking_confirm_keyboard, get_booking_documents_keyboard,
    get_car_details_keyboard, get_cars_catalog_keyboard, get_catalog_filter_keyboard,
    get_driver_choice_keyboard, get_empty_catalog_keyboard, get_main_menu, get_skip_keyboard
)
from driveeasy.models.user_models import AuthState
from driveeasy.utils.errors import error_handler, NotFoundError
from driveeasy.utils.formatters import (
    format_booking_card, format_car_card, format_date, format_divider, format_price_quote
)
from driveeasy.utils.helpers import (
    extract_file_id, parse_callback_id, parse_date_input,
    safe_callback_answer, safe_delete_message, send_file_ref
)

logger = logging.getLogger(__name__)

DATE_HINT = "в формате ГГГГ-ММ-ДД или ДД.ММ.ГГГГ"


# === КАТАЛОГ ===

async def _catalog_filters(state: FSMContext) -> Dict[str, str]:
    data = await state.get_data()
    return {'brand': data.get('catalog_brand', ''), 'fuel_type': data.get('catalog_fuel', '')}


def _catalog_text(cars: List[Dict[str, Any]], filters: Dict[str, str]) -> str:
    active = [value for value in (filters['brand'], filters['fuel_type']) if value]
    filter_text = f"\n🔎 <b>Фильтр:</b> {', '.join(active)}" if active else ""

    return f"""🚗 <b>КАТАЛОГ АВТОМОБИЛЕЙ</b>

{format_divider("thin")}
📊 <b>Доступно:</b> {len(cars)}{filter_text}
{format_divider("thin")}

💡 <i>Выберите автомобиль для просмотра подробной информации</i>"""


EMPTY_CATALOG_TEXT = """<b>Подходящих автомобилей нет</b>

Попробуйте сбросить фильтры или загляните позже."""


async def _send_catalog(message: Message, state: FSMContext, page: int = 0, edit: bool = False) -> None:
    """Отправляет (или обновляет) сообщение каталога"""
    filters = await _catalog_filters(state)
    cars = await car_service.get_catalog(**filters)

    if cars:
        text, keyboard = _catalog_text(cars, filters), get_cars_catalog_keyboard(cars, page=page)
    else:
        text, keyboard = EMPTY_CATALOG_TEXT, get_empty_catalog_keyboard()

    if edit:
        await message.edit_text(text, reply_markup=keyboard, parse_mode='HTML')
    else:
        await message.answer(text, reply_markup=keyboard, parse_mode='HTML')


@error_handler
async def handle_cars_button(message: Message, state: FSMContext) -> None:
    """Обработчик кнопки 'Каталог автомобилей'"""
    await _send_catalog(message, state)


@error_handler
async def handle_cars_page_callback(callback: CallbackQuery, state: FSMContext) -> None:
    """Обработчик пагинации каталога автомобилей"""
    page = parse_callback_id(callback.data)
    await _send_catalog(callback.message, state, page=page, edit=True)
    await safe_callback_answer(callback)


@error_handler
async def handle_refresh_cars_callback(callback: CallbackQuery, state: FSMContext) -> None:
    """Обработчик обновления каталога"""
    await safe_delete_message(callback.message)
    await _send_catalog(callback.message, state)
    await safe_callback_answer(callback, "Каталог обновлен")


@error_handler
async def handle_catalog_filter_callback(callback: CallbackQuery) -> None:
    """Показывает доступные фильтры"""
    brands, fuels = await car_service.get_filter_options()
    await callback.message.edit_text(
        "🔎 <b>Фильтр каталога</b>\n\nВыберите марку или тип топлива:",
        reply_markup=get_catalog_filter_keyboard(brands, fuels),
        parse_mode='HTML'
    )
    await safe_callback_answer(callback)


@error_handler
async def handle_filter_value_callback(callback: CallbackQuery, state: FSMContext) -> None:
    """Применяет фильтр по марке ('filter_brand:N') или топливу ('filter_fuel:N')"""
    kind = callback.data.partition(':')[0]
    index = parse_callback_id(callback.data)
    brands, fuels = await car_service.get_filter_options()
    options = brands if kind == 'filter_brand' else fuels

    # Автопарк мог измениться с момента показа клавиатуры
    if not 0 <= index < len(options):
        await safe_callback_answer(callback, "Фильтр устарел, откройте его заново", show_alert=True)
        return

    if kind == 'filter_brand':
        await state.update_data(catalog_brand=options[index])
    else:
        await state.update_data(catalog_fuel=options[index])

    await _send_catalog(callback.message, state, edit=True)
    await safe_callback_answer(callback)


@error_handler
async def handle_filter_reset_callback(callback: CallbackQuery, state: FSMContext) -> None:
    """Сбрасывает фильтры каталога"""
    await state.update_data(catalog_brand='', catalog_fuel='')
    await _send_catalog(callback.message, state, edit=True)
    await safe_callback_answer(callback, "Фильтры сброшены")


@error_handler
async def handle_back_to_catalog_callback(callback: CallbackQuery, state: FSMContext) -> None:
    """Обработчик возврата к каталогу"""
    # Предыдущее сообщение может быть фотографией, его нельзя отредактировать в текст
    await safe_delete_message(callback.message)
    await _send_catalog(callback.message, state)
    await safe_callback_answer(callback)


@error_handler
async def handle_car_details_callback(callback: CallbackQuery) -> None:
    """Обработчик просмотра детальной информации об автомобиле"""
    car_id = parse_callback_id(callback.data)
    car = await car_service.get_car_by_id(car_id)

    if not car.get('availability'):
        raise NotFoundError(f"Car {car_id} unavailable", "Автомобиль не найден или недоступен")

    await safe_delete_message(callback.message)

    text = format_car_card(car)
    keyboard = get_car_details_keyboard(car_id)

    if car.get('image'):
        await callback.message.answer_photo(
            photo=car['image'],
            caption=text,
            reply_markup=keyboard,
            parse_mode='HTML'
        )
    else:
        await callback.message.answer(text, reply_markup=keyboard, parse_mode='HTML')

    await safe_callback_answer(callback)


async def handle_page_info_callback(callback: CallbackQuery) -> None:
    """Обработчик нажатия на номер страницы"""
    await safe_callback_answer(callback)


# === ФОРМА БРОНИРОВАНИЯ ===

@error_handler
async def handle_book_car_callback(callback: CallbackQuery, state: FSMContext, session: AuthState) -> None:
    """Начало бронирования: требуется вход"""
    if not session.is_authenticated:
        await safe_callback_answer(
            callback,
            "Войдите или зарегистрируйтесь, чтобы забронировать автомобиль",
            show_alert=True
        )
        await callback.message.answer(
            "🔑 Сначала войдите в аккаунт.",
            reply_markup=get_main_menu(session)
        )
        return

    car_id = parse_callback_id(callback.data)
    car = await car_service.get_car_by_id(car_id)

    await state.set_state(BookingStates.waiting_for_pickup_date)
    await state.update_data(booking_car_id=car_id)

    await callback.message.answer(
        f"📅 <b>Бронирование: {car.get('name')}</b>\n\nВведите дату получения {DATE_HINT}:",
        parse_mode='HTML'
    )
    await safe_callback_answer(callback)


async def handle_pickup_date_input(message: Message, state: FSMContext) -> None:
    """Шаг 1: дата получения"""
    pickup = parse_date_input(message.text)
    if pickup is None:
        await message.answer(f"❌ Не удалось распознать дату. Введите дату {DATE_HINT}:")
        return

    await state.update_data(pickup_date=pickup.isoformat())
    await state.set_state(BookingStates.waiting_for_return_date)
    await message.answer(f"Введите дату возврата {DATE_HINT}:")


@error_handler
async def handle_return_date_input(message: Message, state: FSMContext) -> None:
    """Шаг 2: дата возврата; даты проверяются расчетом стоимости"""
    return_date = parse_date_input(message.text)
    if return_date is None:
        await message.answer(f"❌ Не удалось распознать дату. Введите дату {DATE_HINT}:")
        return

    data = await state.get_data()
    car = await car_service.get_car_by_id(data['booking_car_id'])
    pickup = date.fromisoformat(data['pickup_date'])

    price = booking_service.quote_for_car(car, pickup, return_date, has_driver=False)
    if not price.is_valid:
        await message.answer("❌ Выберите корректные даты: возврат должен быть позже получения.")
        return

    await state.update_data(return_date=return_date.isoformat())
    await state.set_state(BookingStates.waiting_for_driver_choice)
    await message.answer(
        f"{format_price_quote(price.days, price.daily_rate, price.total, False)}\n\n"
        "🧑‍✈️ Нужен профессиональный водитель?",
        reply_markup=get_driver_choice_keyboard(),
        parse_mode='HTML'
    )


async def _show_booking_summary(message: Message, state: FSMContext) -> None:
    data = await state.get_data()
    car = await car_service.get_car_by_id(data['booking_car_id'])
    pickup = date.fromisoformat(data['pickup_date'])
    return_date = date.fromisoformat(data['return_date'])
    has_driver = data.get('has_driver', False)

    price = booking_service.quote_for_car(car, pickup, return_date, has_driver)

    await state.set_state(BookingStates.waiting_for_confirmation)
    await message.answer(
        f"""📋 <b>Проверьте заявку</b>

🚗 <b>{car.get('name')}</b>
📅 {format_date(pickup)} — {format_date(return_date)}
{format_price_quote(price.days, price.daily_rate, price.total, has_driver)}""",
        reply_markup=get_booking_confirm_keyboard(),
        parse_mode='HTML'
    )


@error_handler
async def handle_driver_choice_callback(callback: CallbackQuery, state: FSMContext) -> None:
    """Шаг 3: выбор водителя"""
    has_driver = callback.data.endswith(':yes')
    await state.update_data(has_driver=has_driver)

    if has_driver:
        await state.set_state(BookingStates.waiting_for_id_proof)
        await callback.message.answer(
            "🪪 Прикрепите фото удостоверения личности (необязательно):",
            reply_markup=get_skip_keyboard("book_skip_id_proof")
        )
    else:
        await _show_booking_summary(callback.message, state)

    await safe_callback_answer(callback)


@error_handler
async def handle_id_proof_input(message: Message, state: FSMContext) -> None:
    """Шаг 4 (необязательный): удостоверение личности"""
    file_id = extract_file_id(message)
    if not file_id:
        await message.answer("❌ Отправьте фото или документ, либо нажмите 'Пропустить'.")
        return

    await state.update_data(driver_id_proof=file_id)
    await message.answer("✅ Удостоверение прикреплено")
    await _show_booking_summary(message, state)


@error_handler
async def handle_skip_id_proof_callback(callback: CallbackQuery, state: FSMContext) -> None:
    """Пропуск загрузки удостоверения"""
    await _show_booking_summary(callback.message, state)
    await safe_callback_answer(callback)


@error_handler
async def handle_booking_confirm_callback(callback: CallbackQuery, state: FSMContext, session: AuthState) -> None:
    """Отправка заявки"""
    data = await state.get_data()
    car = await car_service.get_car_by_id(data['booking_car_id'])

    booking = await booking_service.request_booking(
        session,
        car,
        date.fromisoformat(data['pickup_date']),
        date.fromisoformat(data['return_date']),
        has_driver=data.get('has_driver', False),
        driver_id_proof=data.get('driver_id_proof')
    )
    await state.clear()

    await callback.message.edit_text(
        f"✅ <b>Заявка #{booking['id']} отправлена!</b>\n\n"
        "Статус: ⏳ Pending. Мы сообщим, когда администратор ее рассмотрит.",
        parse_mode='HTML'
    )
    await safe_callback_answer(callback, "Бронирование запрошено")


async def handle_booking_cancel_callback(callback: CallbackQuery, state: FSMContext) -> None:
    """Отмена формы бронирования"""
    await state.clear()
    await callback.message.answer("Бронирование отменено.")
    await safe_callback_answer(callback)


# === МОИ БРОНИРОВАНИЯ ===

@error_handler
async def handle_my_bookings_button(message: Message, session: AuthState) -> None:
    """Обработчик кнопки 'Мои бронирования'"""
    if not session.is_authenticated:
        await message.answer("🔑 Войдите, чтобы увидеть свои бронирования.", reply_markup=get_main_menu(session))
        return

    bookings = await booking_service.get_user_bookings(session.user.id)
    if not bookings:
        await message.answer("📭 Бронирований пока нет.")
        return

    for booking in bookings:
        await message.answer(
            format_booking_card(booking),
            reply_markup=get_booking_documents_keyboard(booking),
            parse_mode='HTML'
        )


@error_handler
async def handle_view_document_callback(callback: CallbackQuery, session: AuthState) -> None:
    """Просмотр документа: 'view_doc:<booking_id>:<field>'"""
    _, booking_id, field = callback.data.split(':')
    booking = await booking_service.get_booking(int(booking_id))

    if not session.is_authenticated or (
        not session.is_admin and booking.get('user_id') != session.user.id
    ):
        raise NotFoundError(f"Booking {booking_id} not visible", "Документ недоступен")

    source = booking if field == 'driver_id_proof' else (booking.get('car') or {})
    file_ref = source.get(field)
    if not file_ref:
        raise NotFoundError(f"Document {field} missing for booking {booking_id}", "Документ не найден")

    await send_file_ref(callback.message, file_ref)
    await safe_callback_answer(callback)
