"""
Утилиты для форматирования сообщений
"""
from typing import Any, Dict, Optional
from datetime import datetime, date

from driveeasy.models.booking_models import BookingStatus

STATUS_EMOJI = {
    BookingStatus.PENDING.value: '⏳',
    BookingStatus.APPROVED.value: '✅',
    BookingStatus.REJECTED.value: '⛔',
    BookingStatus.COMPLETED.value: '🏁',
}


def format_info_line(label: str, value: str, emoji: str = "•") -> str:
    """Форматирует строку информации"""
    return f"{emoji} <b>{label}:</b> {value}"


def format_status_badge(status: str, is_active: bool = True) -> str:
    """Создает бейдж статуса"""
    if is_active:
        return f"🟢 <b>{status}</b>"
    else:
        return f"🔴 <b>{status}</b>"


def format_booking_status(status: Optional[str]) -> str:
    """Статус бронирования с эмодзи"""
    return f"{STATUS_EMOJI.get(status, '❓')} <b>{status or 'Неизвестно'}</b>"


def format_price(amount: float, currency: str = "₹") -> str:
    """Форматирует цену"""
    return f"<code>{currency}{amount:,.0f}</code>"


def format_date(date_obj, format_str: str = "%d.%m.%Y") -> str:
    """Форматирует дату"""
    if isinstance(date_obj, str):
        try:
            date_obj = datetime.fromisoformat(date_obj.replace('Z', '+00:00'))
        except ValueError:
            return date_obj
    if isinstance(date_obj, (datetime, date)):
        return date_obj.strftime(format_str)
    return str(date_obj)


def format_days_count(days: int) -> str:
    """Форматирует количество дней с правильным склонением"""
    if days % 100 in range(11, 15):
        return f"{days} дней"
    if days % 10 == 1:
        return f"{days} день"
    if days % 10 in (2, 3, 4):
        return f"{days} дня"
    return f"{days} дней"


def format_divider(style: str = "thin") -> str:
    """Создает разделитель"""
    if style == "thick":
        return "═══════════════════════"
    elif style == "dotted":
        return "┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄"
    else:
        return "━━━━━━━━━━━━━━━━━━━━━━"


def format_car_card(car: Dict[str, Any]) -> str:
    """Карточка автомобиля для каталога и админ-консоли"""
    available = bool(car.get('availability'))
    status_badge = format_status_badge("Доступен" if available else "Недоступен", available)

    return f"""🚗 <b>{car.get('name', 'Без названия')}</b>

{format_divider("thin")}
{format_info_line("Марка", car.get('brand') or '—', "🏷")}
{format_info_line("Топливо", car.get('fuel_type') or '—', "⛽")}
💰 <b>Цена:</b> {format_price(car.get('price_per_day') or 0)}/день
{status_badge}
{format_divider("thin")}"""


def format_price_quote(days: int, daily_rate: int, total: int, has_driver: bool) -> str:
    """Расчет стоимости в форме бронирования"""
    driver_text = "\n🧑‍✈️ Включен профессиональный водитель" if has_driver else ""
    return f"""📆 <b>Срок:</b> {format_days_count(days)}
💰 <b>Цена за день:</b> {format_price(daily_rate)}{driver_text}
💵 <b>Итого:</b> {format_price(total)}"""


def format_booking_card(booking: Dict[str, Any], for_admin: bool = False) -> str:
    """
    Карточка бронирования

    Args:
        booking: Бронирование с присоединенными car и user
        for_admin: Показывать данные клиента
    """
    car = booking.get('car') or {}
    user = booking.get('user') or {}

    lines = [
        f"📝 <b>Бронирование #{booking.get('id')}</b>",
        "",
        format_info_line("Автомобиль", car.get('name') or 'удален', "🚗"),
        format_info_line(
            "Даты",
            f"{format_date(booking.get('pickup_date'))} — {format_date(booking.get('return_date'))}",
            "📅"
        ),
        f"💵 <b>Стоимость:</b> {format_price(booking.get('total_price') or 0)}",
        format_info_line("Статус", format_booking_status(booking.get('status')), "📌"),
    ]

    if for_admin:
        lines.append(format_info_line(
            "Клиент",
            f"{user.get('name') or 'неизвестен'} ({user.get('email') or '—'}, {user.get('phone') or '—'})",
            "👤"
        ))

    lines.append(format_info_line("Водитель", "да" if booking.get('has_driver') else "нет", "🧑‍✈️"))

    if booking.get('driver_name'):
        lines.append(format_info_line(
            "Назначен водитель",
            f"{booking['driver_name']} • {booking.get('driver_phone') or '—'}",
            "🪪"
        ))

    return "\n".join(lines)


def format_dashboard(pending_requests: int, active_fleet: int, total_revenue: int) -> str:
    """Сводка админ-консоли"""
    return f"""🔧 <b>ПАНЕЛЬ АДМИНИСТРАТОРА</b>

{format_divider("thin")}
📊 <b>СВОДКА</b>
{format_divider("thin")}

⏳ Заявок в ожидании: <b>{pending_requests}</b>
🚗 Доступно автомобилей: <b>{active_fleet}</b>
💰 Выручка: {format_price(total_revenue)}

{format_divider("thin")}

💡 <i>Выберите действие из меню ниже</i>"""
