from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton
from typing import List, Dict, Any
from driveeasy.models.booking_models import BookingStatus
from driveeasy.utils.formatters import STATUS_EMOJI


def get_admin_panel_keyboard() -> InlineKeyboardMarkup:
    """Создает главную админ панель"""
    keyboard = [
        [InlineKeyboardButton(text="📝 Заявки", callback_data="admin_bookings")],
        [InlineKeyboardButton(text="📋 Автопарк", callback_data="admin_manage_cars")],
        [InlineKeyboardButton(text="➕ Добавить автомобиль", callback_data="admin_add_car")],
        [InlineKeyboardButton(text="🔄 Обновить", callback_data="back_to_admin_panel")]
    ]

    return InlineKeyboardMarkup(inline_keyboard=keyboard)


def _nav_row(total: int, page: int, per_page: int, page_prefix: str) -> List[InlineKeyboardButton]:
    """Кнопки навигации по страницам"""
    nav_buttons = []
    if page > 0:
        nav_buttons.append(InlineKeyboardButton(text="← Назад", callback_data=f"{page_prefix}:{page - 1}"))

    total_pages = (total - 1) // per_page + 1 if total else 1
    nav_buttons.append(InlineKeyboardButton(text=f"{page + 1}/{total_pages}", callback_data="page_info"))

    if (page + 1) * per_page < total:
        nav_buttons.append(InlineKeyboardButton(text="Вперед →", callback_data=f"{page_prefix}:{page + 1}"))
    return nav_buttons


def get_admin_bookings_keyboard(bookings: List[Dict[str, Any]], page: int = 0, per_page: int = 5) -> InlineKeyboardMarkup:
    """Список заявок на бронирование"""
    keyboard = []

    for booking in bookings[page * per_page:(page + 1) * per_page]:
        car_name = (booking.get('car') or {}).get('name') or 'удален'
        user_name = (booking.get('user') or {}).get('name') or f"ID: {booking.get('user_id')}"
        emoji = STATUS_EMOJI.get(booking.get('status'), '❓')
        keyboard.append([InlineKeyboardButton(
            text=f"{emoji} #{booking['id']} {car_name} • {user_name}",
            callback_data=f"admin_booking:{booking['id']}"
        )])

    keyboard.append(_nav_row(len(bookings), page, per_page, "admin_bookings_page"))
    keyboard.append([InlineKeyboardButton(text="🔙 Назад в админ панель", callback_data="back_to_admin_panel")])

    return InlineKeyboardMarkup(inline_keyboard=keyboard)


def get_admin_booking_actions_keyboard(booking: Dict[str, Any]) -> InlineKeyboardMarkup:
    """Действия с бронированием в зависимости от статуса"""
    booking_id = booking['id']
    status = booking.get('status')
    keyboard = []

    if status == BookingStatus.PENDING.value:
        keyboard.append([
            InlineKeyboardButton(text="✅ Подтвердить", callback_data=f"admin_approve:{booking_id}"),
            InlineKeyboardButton(text="⛔ Отклонить", callback_data=f"admin_reject:{booking_id}")
        ])
    elif status == BookingStatus.APPROVED.value:
        keyboard.append([
            InlineKeyboardButton(text="🏁 Завершить", callback_data=f"admin_complete:{booking_id}")
        ])

    if booking.get('driver_id_proof'):
        keyboard.append([InlineKeyboardButton(
            text="🪪 ID водителя",
            callback_data=f"view_doc:{booking_id}:driver_id_proof"
        )])

    keyboard.append([
        InlineKeyboardButton(text="🔙 К заявкам", callback_data="admin_bookings"),
        InlineKeyboardButton(text="🏠 Админ панель", callback_data="back_to_admin_panel")
    ])

    return InlineKeyboardMarkup(inline_keyboard=keyboard)


def get_admin_cars_management_keyboard(cars: List[Dict[str, Any]], page: int = 0, cars_per_page: int = 5) -> InlineKeyboardMarkup:
    """Создает клавиатуру управления автомобилями для админов"""
    keyboard = []

    for car in cars[page * cars_per_page:(page + 1) * cars_per_page]:
        status_emoji = "✅" if car.get('availability') else "❌"
        price_text = f"₹{car.get('price_per_day') or 0:,}"
        keyboard.append([InlineKeyboardButton(
            text=f"{status_emoji} {car.get('name', '—')} • {price_text}/день",
            callback_data=f"admin_car:{car['id']}"
        )])

    keyboard.append(_nav_row(len(cars), page, cars_per_page, "admin_cars_page"))
    keyboard.append([InlineKeyboardButton(text="➕ Добавить автомобиль", callback_data="admin_add_car")])
    keyboard.append([InlineKeyboardButton(text="🔙 Назад в админ панель", callback_data="back_to_admin_panel")])

    return InlineKeyboardMarkup(inline_keyboard=keyboard)


def get_admin_car_keyboard(car: Dict[str, Any]) -> InlineKeyboardMarkup:
    """Действия с автомобилем"""
    car_id = car['id']
    toggle_text = "🔴 Снять с аренды" if car.get('availability') else "🟢 Вернуть в аренду"
    rc_text = "📄 Заменить RC" if car.get('rc_doc') else "📄 Загрузить RC"
    insurance_text = "🛡 Заменить страховку" if car.get('insurance_doc') else "🛡 Загрузить страховку"

    keyboard = [
        [InlineKeyboardButton(text="✏️ Редактировать", callback_data=f"admin_edit_car:{car_id}")],
        [InlineKeyboardButton(text=toggle_text, callback_data=f"admin_toggle_car:{car_id}")],
        [
            InlineKeyboardButton(text=rc_text, callback_data=f"admin_car_doc:{car_id}:rc_doc"),
            InlineKeyboardButton(text=insurance_text, callback_data=f"admin_car_doc:{car_id}:insurance_doc")
        ],
        [InlineKeyboardButton(text="🗑 Удалить", callback_data=f"admin_delete_car:{car_id}")],
        [InlineKeyboardButton(text="🔙 К автопарку", callback_data="admin_manage_cars")]
    ]

    return InlineKeyboardMarkup(inline_keyboard=keyboard)


def get_car_delete_confirm_keyboard(car_id: int) -> InlineKeyboardMarkup:
    """Клавиатура подтверждения удаления автомобиля"""
    keyboard = [
        [
            InlineKeyboardButton(text="✅ Да, удалить", callback_data=f"admin_confirm_delete_car:{car_id}"),
            InlineKeyboardButton(text="❌ Отмена", callback_data=f"admin_car:{car_id}")
        ]
    ]

    return InlineKeyboardMarkup(inline_keyboard=keyboard)


def get_cancel_keyboard() -> InlineKeyboardMarkup:
    """Клавиатура с кнопкой отмены"""
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text="❌ Отмена", callback_data="cancel_action")]
    ])


def get_keep_value_keyboard() -> InlineKeyboardMarkup:
    """Клавиатура шага редактирования: оставить текущее значение или отменить"""
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text="⏭ Оставить как есть", callback_data="car_form_keep")],
        [InlineKeyboardButton(text="❌ Отмена", callback_data="cancel_action")]
    ])


def get_fuel_type_keyboard(keep_allowed: bool = False) -> InlineKeyboardMarkup:
    """Выбор типа топлива"""
    keyboard = [
        [
            InlineKeyboardButton(text="Petrol", callback_data="car_fuel:Petrol"),
            InlineKeyboardButton(text="Diesel", callback_data="car_fuel:Diesel")
        ],
        [
            InlineKeyboardButton(text="CNG", callback_data="car_fuel:CNG"),
            InlineKeyboardButton(text="Electric", callback_data="car_fuel:Electric")
        ]
    ]
    if keep_allowed:
        keyboard.append([InlineKeyboardButton(text="⏭ Оставить как есть", callback_data="car_form_keep")])
    keyboard.append([InlineKeyboardButton(text="❌ Отмена", callback_data="cancel_action")])

    return InlineKeyboardMarkup(inline_keyboard=keyboard)


def get_driver_id_skip_keyboard() -> InlineKeyboardMarkup:
    """Необязательная загрузка удостоверения водителя"""
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text="⏭ Без удостоверения", callback_data="driver_skip_id")],
        [InlineKeyboardButton(text="❌ Отмена", callback_data="cancel_action")]
    ])
