from aiogram.types import ReplyKeyboardMarkup, KeyboardButton, InlineKeyboardMarkup, InlineKeyboardButton
from typing import List, Dict, Any, Optional
from driveeasy.models.user_models import AuthState

# Тексты кнопок главного меню
BTN_CATALOG = "🚗 Каталог автомобилей"
BTN_MY_BOOKINGS = "📋 Мои бронирования"
BTN_LOGIN = "🔑 Войти"
BTN_REGISTER = "📝 Регистрация"
BTN_LOGOUT = "🚪 Выйти"
BTN_ADMIN_PANEL = "🔧 Админ панель"
BTN_HELP = "ℹ️ Помощь"


def get_main_menu(session: Optional[AuthState] = None):
    """Создает главное меню в зависимости от состояния сессии"""
    keyboard = [[KeyboardButton(text=BTN_CATALOG)]]

    if session is not None and session.is_authenticated:
        keyboard.append([KeyboardButton(text=BTN_MY_BOOKINGS)])
        if session.is_admin:
            keyboard.append([KeyboardButton(text=BTN_ADMIN_PANEL)])
        keyboard.append([KeyboardButton(text=BTN_LOGOUT), KeyboardButton(text=BTN_HELP)])
    else:
        keyboard.append([KeyboardButton(text=BTN_LOGIN), KeyboardButton(text=BTN_REGISTER)])
        keyboard.append([KeyboardButton(text=BTN_HELP)])

    return ReplyKeyboardMarkup(
        keyboard=keyboard,
        resize_keyboard=True,
        one_time_keyboard=False,
        input_field_placeholder="Выберите действие"
    )


def get_cars_catalog_keyboard(cars: List[Dict[str, Any]], page: int = 0, cars_per_page: int = 5) -> InlineKeyboardMarkup:
    """Создает клавиатуру каталога автомобилей с пагинацией"""
    keyboard = []

    # Рассчитываем границы страницы
    start_idx = page * cars_per_page
    end_idx = min(start_idx + cars_per_page, len(cars))

    for i in range(start_idx, end_idx):
        car = cars[i]
        price_text = f"₹{car.get('price_per_day') or 0:,}"
        button_text = f"{car.get('name', '—')} • {car.get('brand', '—')} • {price_text}/день"

        keyboard.append([InlineKeyboardButton(
            text=button_text,
            callback_data=f"car_details:{car['id']}"
        )])

    nav_buttons = []

    if page > 0:
        nav_buttons.append(InlineKeyboardButton(
            text="← Назад",
            callback_data=f"cars_page:{page - 1}"
        ))

    total_pages = (len(cars) - 1) // cars_per_page + 1 if cars else 1
    nav_buttons.append(InlineKeyboardButton(
        text=f"{page + 1}/{total_pages}",
        callback_data="page_info"
    ))

    if end_idx < len(cars):
        nav_buttons.append(InlineKeyboardButton(
            text="Вперед →",
            callback_data=f"cars_page:{page + 1}"
        ))

    keyboard.append(nav_buttons)
    keyboard.append([
        InlineKeyboardButton(text="🔎 Фильтр", callback_data="catalog_filter"),
        InlineKeyboardButton(text="🔄 Обновить", callback_data="refresh_cars")
    ])

    return InlineKeyboardMarkup(inline_keyboard=keyboard)


def get_catalog_filter_keyboard(brands: List[str], fuels: List[str]) -> InlineKeyboardMarkup:
    """
    Клавиатура фильтров каталога: марка и тип топлива

    В callback_data передается индекс значения в списке get_filter_options(),
    а не само значение: Telegram ограничивает callback_data 64 байтами.
    """
    keyboard = []

    keyboard.extend(
        [InlineKeyboardButton(text=f"🏷 {brand}", callback_data=f"filter_brand:{index}")]
        for index, brand in enumerate(brands)
    )
    keyboard.extend(
        [InlineKeyboardButton(text=f"⛽ {fuel}", callback_data=f"filter_fuel:{index}")]
        for index, fuel in enumerate(fuels)
    )
    keyboard.append([
        InlineKeyboardButton(text="♻️ Сбросить фильтры", callback_data="filter_reset"),
        InlineKeyboardButton(text="🔙 К каталогу", callback_data="back_to_catalog")
    ])

    return InlineKeyboardMarkup(inline_keyboard=keyboard)


def get_empty_catalog_keyboard() -> InlineKeyboardMarkup:
    """Клавиатура для пустого каталога"""
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text="♻️ Сбросить фильтры", callback_data="filter_reset")],
        [InlineKeyboardButton(text="🔄 Обновить", callback_data="refresh_cars")]
    ])


def get_car_details_keyboard(car_id: int) -> InlineKeyboardMarkup:
    """Клавиатура карточки автомобиля"""
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text="📅 Забронировать", callback_data=f"book_car:{car_id}")],
        [InlineKeyboardButton(text="🔙 К каталогу", callback_data="back_to_catalog")]
    ])


def get_driver_choice_keyboard() -> InlineKeyboardMarkup:
    """Выбор услуги водителя"""
    return InlineKeyboardMarkup(inline_keyboard=[
        [
            InlineKeyboardButton(text="🧑‍✈️ С водителем", callback_data="book_driver:yes"),
            InlineKeyboardButton(text="🚗 Без водителя", callback_data="book_driver:no")
        ],
        [InlineKeyboardButton(text="❌ Отмена", callback_data="book_cancel")]
    ])


def get_skip_keyboard(skip_callback: str, cancel_callback: str = "book_cancel") -> InlineKeyboardMarkup:
    """Клавиатура необязательного шага"""
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text="⏭ Пропустить", callback_data=skip_callback)],
        [InlineKeyboardButton(text="❌ Отмена", callback_data=cancel_callback)]
    ])


def get_booking_confirm_keyboard() -> InlineKeyboardMarkup:
    """Подтверждение заявки на бронирование"""
    return InlineKeyboardMarkup(inline_keyboard=[
        [
            InlineKeyboardButton(text="✅ Отправить заявку", callback_data="book_confirm"),
            InlineKeyboardButton(text="❌ Отмена", callback_data="book_cancel")
        ]
    ])


def get_booking_documents_keyboard(booking: Dict[str, Any]) -> Optional[InlineKeyboardMarkup]:
    """Кнопки просмотра документов автомобиля и удостоверения водителя"""
    car = booking.get('car') or {}
    buttons = []

    if car.get('rc_doc'):
        buttons.append(InlineKeyboardButton(text="📄 Vehicle RC", callback_data=f"view_doc:{booking['id']}:rc_doc"))
    if car.get('insurance_doc'):
        buttons.append(InlineKeyboardButton(text="🛡 Страховка", callback_data=f"view_doc:{booking['id']}:insurance_doc"))
    if booking.get('driver_id_proof'):
        buttons.append(InlineKeyboardButton(text="🪪 ID водителя", callback_data=f"view_doc:{booking['id']}:driver_id_proof"))

    if not buttons:
        return None
    return InlineKeyboardMarkup(inline_keyboard=[buttons])
