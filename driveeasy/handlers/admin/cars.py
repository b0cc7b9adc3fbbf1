"""
Обработчики управления автопарком
"""
import logging
from typing import Any, Dict, Optional

from aiogram.types import Message, CallbackQuery
from aiogram.fsm.context import FSMContext

from driveeasy.handlers.common import car_service
from driveeasy.keyboards.admin_keyboards import (
    get_admin_car_keyboard, get_admin_cars_management_keyboard, get_cancel_keyboard,
    get_car_delete_confirm_keyboard, get_fuel_type_keyboard, get_keep_value_keyboard
)
from driveeasy.models.user_models import AuthState
from driveeasy.utils.errors import error_handler
from driveeasy.utils.formatters import format_car_card, format_divider
from driveeasy.utils.helpers import (
    extract_file_id, parse_callback_id, safe_callback_answer, safe_delete_message
)
from .common import admin_required
from .states import CarDocumentStates, CarFormStates

logger = logging.getLogger(__name__)

DOCUMENT_TITLES = {
    'rc_doc': "свидетельство о регистрации (RC)",
    'insurance_doc': "страховой полис",
}

# Шаги формы: состояние, поле записи, подсказка
FORM_STEPS = [
    (CarFormStates.waiting_for_name, 'name', "Введите название автомобиля:"),
    (CarFormStates.waiting_for_brand, 'brand', "Введите марку:"),
    (CarFormStates.waiting_for_price, 'price_per_day', "Введите цену за день (целое число, ₹):"),
    (CarFormStates.waiting_for_fuel_type, 'fuel_type', "Выберите тип топлива:"),
    (CarFormStates.waiting_for_image, 'image', "Отправьте фото автомобиля или ссылку на изображение:"),
]


# === АВТОПАРК ===

async def _send_fleet(message: Message, page: int = 0) -> None:
    cars = await car_service.get_all_cars()
    available = sum(1 for car in cars if car.get('availability'))

    text = f"""📋 <b>АВТОПАРК</b>

{format_divider("thin")}
🚗 Всего: <b>{len(cars)}</b> (доступно: {available})
{format_divider("thin")}"""

    await message.answer(
        text,
        reply_markup=get_admin_cars_management_keyboard(cars, page=page),
        parse_mode='HTML'
    )


async def _send_car(message: Message, car_id: int) -> None:
    car = await car_service.get_car_by_id(car_id)
    documents = [
        f"{'✅' if car.get(field) else '❌'} {title}"
        for field, title in DOCUMENT_TITLES.items()
    ]
    text = f"{format_car_card(car)}\n\n📎 <b>Документы:</b>\n" + "\n".join(documents)
    await message.answer(text, reply_markup=get_admin_car_keyboard(car), parse_mode='HTML')


@admin_required
@error_handler
async def handle_admin_manage_cars_callback(callback: CallbackQuery, session: AuthState) -> None:
    """Список всех автомобилей, включая недоступные"""
    await safe_delete_message(callback.message)
    await _send_fleet(callback.message)
    await safe_callback_answer(callback)


@admin_required
@error_handler
async def handle_admin_cars_page_callback(callback: CallbackQuery, session: AuthState) -> None:
    """Пагинация автопарка"""
    await safe_delete_message(callback.message)
    await _send_fleet(callback.message, page=parse_callback_id(callback.data))
    await safe_callback_answer(callback)


@admin_required
@error_handler
async def handle_admin_car_callback(callback: CallbackQuery, session: AuthState) -> None:
    """Карточка автомобиля с действиями"""
    await safe_delete_message(callback.message)
    await _send_car(callback.message, parse_callback_id(callback.data))
    await safe_callback_answer(callback)


@admin_required
@error_handler
async def handle_admin_toggle_car_callback(callback: CallbackQuery, session: AuthState) -> None:
    """Переключение доступности автомобиля"""
    car_id = parse_callback_id(callback.data)
    car = await car_service.get_car_by_id(car_id)
    updated = await car_service.set_availability(car_id, not car.get('availability'))

    await safe_delete_message(callback.message)
    await _send_car(callback.message, car_id)
    await safe_callback_answer(
        callback,
        "Автомобиль доступен для аренды" if updated.get('availability') else "Автомобиль снят с аренды"
    )


@admin_required
@error_handler
async def handle_admin_delete_car_callback(callback: CallbackQuery, session: AuthState) -> None:
    """Запрос подтверждения удаления"""
    car_id = parse_callback_id(callback.data)
    car = await car_service.get_car_by_id(car_id)

    await callback.message.edit_text(
        f"⚠️ Удалить <b>{car.get('name')}</b>?\n\nБронирования этого автомобиля останутся без данных о нем.",
        reply_markup=get_car_delete_confirm_keyboard(car_id),
        parse_mode='HTML'
    )
    await safe_callback_answer(callback)


@admin_required
@error_handler
async def handle_admin_confirm_delete_car_callback(callback: CallbackQuery, session: AuthState) -> None:
    """Удаление автомобиля"""
    car_id = parse_callback_id(callback.data)
    await car_service.delete_car(car_id)
    logger.info(f"Автомобиль {car_id} удален администратором {session.user.id}")

    await safe_delete_message(callback.message)
    await _send_fleet(callback.message)
    await safe_callback_answer(callback, "Автомобиль удален")


# === ДОКУМЕНТЫ ===

@admin_required
@error_handler
async def handle_admin_car_doc_callback(callback: CallbackQuery, session: AuthState, state: FSMContext) -> None:
    """Начало загрузки документа: 'admin_car_doc:<car_id>:<field>'"""
    _, car_id, field = callback.data.split(':')
    await car_service.get_car_by_id(int(car_id))

    await state.set_state(CarDocumentStates.waiting_for_document)
    await state.update_data(doc_car_id=int(car_id), doc_field=field)

    await callback.message.answer(
        f"📎 Отправьте {DOCUMENT_TITLES.get(field, 'документ')} (фото или файл):",
        reply_markup=get_cancel_keyboard()
    )
    await safe_callback_answer(callback)


@admin_required
@error_handler
async def handle_car_document_input(message: Message, session: AuthState, state: FSMContext) -> None:
    """Сохранение документа автомобиля"""
    file_id = extract_file_id(message)
    if not file_id:
        await message.answer("❌ Отправьте фото или файл документа.", reply_markup=get_cancel_keyboard())
        return

    data = await state.get_data()
    await car_service.attach_document(data['doc_car_id'], data['doc_field'], file_id)
    await state.clear()

    await message.answer("✅ Документ сохранен")
    await _send_car(message, data['doc_car_id'])


# === ФОРМА АВТОМОБИЛЯ ===

async def _ask_step(message: Message, state: FSMContext, index: int) -> None:
    """Переводит форму на шаг index и задает вопрос"""
    step_state, field, prompt = FORM_STEPS[index]
    data = await state.get_data()
    current: Optional[Any] = (data.get('car_form') or {}).get(field) if data.get('editing') else None

    await state.set_state(step_state)

    if current is not None and field != 'image':
        prompt = f"{prompt}\n\nТекущее значение: <b>{current}</b>"

    if field == 'fuel_type':
        keyboard = get_fuel_type_keyboard(keep_allowed=current is not None)
    elif current is not None:
        keyboard = get_keep_value_keyboard()
    else:
        keyboard = get_cancel_keyboard()

    await message.answer(prompt, reply_markup=keyboard, parse_mode='HTML')


async def _advance(message: Message, state: FSMContext, field: str, value: Any = None) -> None:
    """Сохраняет значение поля (None - оставить текущее) и переходит дальше"""
    data = await state.get_data()
    form: Dict[str, Any] = dict(data.get('car_form') or {})
    if value is not None:
        form[field] = value
    await state.update_data(car_form=form)

    index = next(i for i, step in enumerate(FORM_STEPS) if step[1] == field)
    if index + 1 < len(FORM_STEPS):
        await _ask_step(message, state, index + 1)
        return

    saved = await car_service.save_car(form)
    await state.clear()

    action = "обновлен" if data.get('editing') else "добавлен"
    logger.info(f"Автомобиль {saved['id']} {action}")
    await message.answer(f"✅ Автомобиль <b>{saved.get('name')}</b> {action}", parse_mode='HTML')
    await _send_car(message, saved['id'])


@admin_required
@error_handler
async def handle_admin_add_car_callback(callback: CallbackQuery, session: AuthState, state: FSMContext) -> None:
    """Начало добавления автомобиля"""
    await state.clear()
    await state.update_data(car_form={}, editing=False)

    await callback.message.answer("➕ <b>Новый автомобиль</b>", parse_mode='HTML')
    await _ask_step(callback.message, state, 0)
    await safe_callback_answer(callback)


@admin_required
@error_handler
async def handle_admin_edit_car_callback(callback: CallbackQuery, session: AuthState, state: FSMContext) -> None:
    """Начало редактирования: форма заполнена текущими значениями"""
    car = await car_service.get_car_by_id(parse_callback_id(callback.data))

    await state.clear()
    await state.update_data(car_form=car_service.merge_for_edit(car, {}), editing=True)

    await callback.message.answer(f"✏️ <b>Редактирование: {car.get('name')}</b>", parse_mode='HTML')
    await _ask_step(callback.message, state, 0)
    await safe_callback_answer(callback)


@admin_required
@error_handler
async def handle_car_form_keep_callback(callback: CallbackQuery, session: AuthState, state: FSMContext) -> None:
    """Оставить текущее значение поля"""
    current_state = await state.get_state()
    field = next((f for s, f, _ in FORM_STEPS if s.state == current_state), None)
    if field is None:
        await safe_callback_answer(callback, "Форма уже закрыта")
        return

    await _advance(callback.message, state, field)
    await safe_callback_answer(callback)


@admin_required
@error_handler
async def handle_car_text_input(message: Message, session: AuthState, state: FSMContext) -> None:
    """Текстовые поля формы: название и марка"""
    current_state = await state.get_state()
    field = 'name' if current_state == CarFormStates.waiting_for_name.state else 'brand'

    value = (message.text or '').strip()
    if not value:
        await message.answer("❌ Значение не может быть пустым. Попробуйте еще раз:", reply_markup=get_cancel_keyboard())
        return

    await _advance(message, state, field, value)


@admin_required
@error_handler
async def handle_car_price_input(message: Message, session: AuthState, state: FSMContext) -> None:
    """Цена за день"""
    try:
        price = int((message.text or '').strip().replace(' ', '').replace(',', ''))
    except ValueError:
        await message.answer("❌ Введите цену целым числом, например 4500:", reply_markup=get_cancel_keyboard())
        return

    if price <= 0:
        await message.answer("❌ Цена должна быть положительной:", reply_markup=get_cancel_keyboard())
        return

    await _advance(message, state, 'price_per_day', price)


@admin_required
@error_handler
async def handle_car_fuel_callback(callback: CallbackQuery, session: AuthState, state: FSMContext) -> None:
    """Тип топлива: 'car_fuel:<value>'"""
    await _advance(callback.message, state, 'fuel_type', callback.data.split(':', 1)[1])
    await safe_callback_answer(callback)


@admin_required
@error_handler
async def handle_car_image_input(message: Message, session: AuthState, state: FSMContext) -> None:
    """Изображение: фото или ссылка. Без изображения автомобиль не сохраняется"""
    image = extract_file_id(message)
    if not image and message.text and message.text.strip().startswith(('http://', 'https://')):
        image = message.text.strip()

    if not image:
        await message.answer(
            "❌ Изображение обязательно. Отправьте фото или ссылку на изображение:",
            reply_markup=get_cancel_keyboard()
        )
        return

    await _advance(message, state, 'image', image)
