import asyncio
import logging
from aiogram import F
from aiogram.filters import Command
from aiogram.types import Message, CallbackQuery
from aiogram.fsm.context import FSMContext

from driveeasy.config import LOG_LEVEL, SEED_SAMPLE_DATA
from driveeasy.core.bot import create_bot, create_dispatcher
from driveeasy.core.logging_config import setup_logging
from driveeasy.database.store import store
from driveeasy.models.user_models import AuthState
from driveeasy.services.auth_service import SessionStore
from driveeasy.keyboards.user_keyboards import (
    get_main_menu, BTN_CATALOG, BTN_MY_BOOKINGS, BTN_LOGIN, BTN_REGISTER,
    BTN_LOGOUT, BTN_ADMIN_PANEL, BTN_HELP
)
from driveeasy.handlers.states import LoginStates, RegistrationStates, BookingStates
from driveeasy.handlers.auth_handlers import (
    handle_login_button, handle_login_email_input, handle_login_password_input,
    handle_register_button, handle_register_name_input, handle_register_email_input,
    handle_register_phone_input, handle_register_password_input, handle_logout_button
)
from driveeasy.handlers.user_handlers import (
    handle_cars_button, handle_cars_page_callback, handle_refresh_cars_callback,
    handle_catalog_filter_callback, handle_filter_value_callback, handle_filter_reset_callback,
    handle_back_to_catalog_callback, handle_car_details_callback, handle_page_info_callback,
    handle_book_car_callback, handle_pickup_date_input, handle_return_date_input,
    handle_driver_choice_callback, handle_id_proof_input, handle_skip_id_proof_callback,
    handle_booking_confirm_callback, handle_booking_cancel_callback,
    handle_my_bookings_button, handle_view_document_callback
)
from driveeasy.handlers.admin.common import handle_cancel_action_callback
from driveeasy.handlers.admin.panel import handle_admin_panel_button, handle_admin_panel_callback
from driveeasy.handlers.admin.bookings import (
    handle_admin_bookings_callback, handle_admin_bookings_page_callback, handle_admin_booking_callback,
    handle_admin_approve_callback, handle_admin_reject_callback, handle_admin_complete_callback,
    handle_driver_name_input, handle_driver_phone_input, handle_driver_id_proof_input,
    handle_driver_skip_id_callback
)
from driveeasy.handlers.admin.cars import (
    handle_admin_manage_cars_callback, handle_admin_cars_page_callback, handle_admin_car_callback,
    handle_admin_toggle_car_callback, handle_admin_delete_car_callback,
    handle_admin_confirm_delete_car_callback, handle_admin_car_doc_callback, handle_car_document_input,
    handle_admin_add_car_callback, handle_admin_edit_car_callback, handle_car_form_keep_callback,
    handle_car_text_input, handle_car_price_input, handle_car_fuel_callback, handle_car_image_input
)
from driveeasy.handlers.admin.states import CarFormStates, CarDocumentStates, DriverAssignmentStates

logger = logging.getLogger(__name__)

dp = create_dispatcher()

# === ОБРАБОТЧИКИ КОМАНД (должны быть первыми) ===

@dp.message(Command("start"))
async def cmd_start(message: Message, state: FSMContext, session: AuthState):
    """Обработчик команды /start"""
    await state.clear()

    if session.is_authenticated:
        greeting = f"👋 <b>С возвращением, {session.user.name}!</b>"
    else:
        user_name = message.from_user.first_name if message.from_user else None
        greeting = f"👋 <b>Добро пожаловать, {user_name or 'гость'}!</b>"

    welcome_text = f"""{greeting}

🚗 <b>DriveEasy</b>
Аренда автомобилей с водителем и без

👇 Используйте кнопки меню для навигации."""

    await message.answer(welcome_text, reply_markup=get_main_menu(session), parse_mode='HTML')


@dp.message(Command("help"))
@dp.message(F.text == BTN_HELP)
async def cmd_help(message: Message):
    """Обработчик команды /help"""
    help_text = """<b>📚 Справка</b>

<b>Команды</b>
/start — главное меню
/cancel — отменить текущее действие
/help — эта справка

<b>Функции</b>
• 🚗 Каталог автомобилей — доступные машины, фильтр по марке и топливу
• 📋 Мои бронирования — статусы заявок и документы
• 🔑 Войти / 📝 Регистрация — нужны для бронирования

Используйте кнопки меню для навигации."""

    await message.answer(help_text, parse_mode='HTML')


@dp.message(Command("cancel"))
async def cmd_cancel(message: Message, state: FSMContext, session: AuthState):
    """Отмена любого многошагового действия"""
    await state.clear()
    await message.answer("Действие отменено.", reply_markup=get_main_menu(session))

# === КНОПКИ ГЛАВНОГО МЕНЮ ===

@dp.message(F.text == BTN_CATALOG)
async def button_catalog(message: Message, state: FSMContext):
    await handle_cars_button(message, state)

@dp.message(F.text == BTN_MY_BOOKINGS)
async def button_my_bookings(message: Message, session: AuthState):
    await handle_my_bookings_button(message, session)

@dp.message(F.text == BTN_LOGIN)
async def button_login(message: Message, state: FSMContext, session: AuthState):
    await handle_login_button(message, state, session)

@dp.message(F.text == BTN_REGISTER)
async def button_register(message: Message, state: FSMContext):
    await handle_register_button(message, state)

@dp.message(F.text == BTN_LOGOUT)
async def button_logout(message: Message, state: FSMContext, sessions: SessionStore):
    await handle_logout_button(message, state, sessions)

@dp.message(F.text == BTN_ADMIN_PANEL)
async def button_admin_panel(message: Message, session: AuthState):
    await handle_admin_panel_button(message, session)

# === FSM: ВХОД И РЕГИСТРАЦИЯ ===

@dp.message(LoginStates.waiting_for_email)
async def state_login_email(message: Message, state: FSMContext):
    await handle_login_email_input(message, state)

@dp.message(LoginStates.waiting_for_password)
async def state_login_password(message: Message, state: FSMContext, sessions: SessionStore):
    await handle_login_password_input(message, state, sessions)

@dp.message(RegistrationStates.waiting_for_name)
async def state_register_name(message: Message, state: FSMContext):
    await handle_register_name_input(message, state)

@dp.message(RegistrationStates.waiting_for_email)
async def state_register_email(message: Message, state: FSMContext):
    await handle_register_email_input(message, state)

@dp.message(RegistrationStates.waiting_for_phone)
async def state_register_phone(message: Message, state: FSMContext):
    await handle_register_phone_input(message, state)

@dp.message(RegistrationStates.waiting_for_password)
async def state_register_password(message: Message, state: FSMContext, sessions: SessionStore):
    await handle_register_password_input(message, state, sessions)

# === FSM: ФОРМА БРОНИРОВАНИЯ ===

@dp.message(BookingStates.waiting_for_pickup_date)
async def state_pickup_date(message: Message, state: FSMContext):
    await handle_pickup_date_input(message, state)

@dp.message(BookingStates.waiting_for_return_date)
async def state_return_date(message: Message, state: FSMContext):
    await handle_return_date_input(message, state)

@dp.message(BookingStates.waiting_for_id_proof)
async def state_id_proof(message: Message, state: FSMContext):
    await handle_id_proof_input(message, state)

# === FSM: АДМИН-КОНСОЛЬ ===

@dp.message(CarFormStates.waiting_for_name)
@dp.message(CarFormStates.waiting_for_brand)
async def state_car_text(message: Message, session: AuthState, state: FSMContext):
    await handle_car_text_input(message, session, state)

@dp.message(CarFormStates.waiting_for_price)
async def state_car_price(message: Message, session: AuthState, state: FSMContext):
    await handle_car_price_input(message, session, state)

@dp.message(CarFormStates.waiting_for_image)
async def state_car_image(message: Message, session: AuthState, state: FSMContext):
    await handle_car_image_input(message, session, state)

@dp.message(CarDocumentStates.waiting_for_document)
async def state_car_document(message: Message, session: AuthState, state: FSMContext):
    await handle_car_document_input(message, session, state)

@dp.message(DriverAssignmentStates.waiting_for_name)
async def state_driver_name(message: Message, session: AuthState, state: FSMContext):
    await handle_driver_name_input(message, session, state)

@dp.message(DriverAssignmentStates.waiting_for_phone)
async def state_driver_phone(message: Message, session: AuthState, state: FSMContext):
    await handle_driver_phone_input(message, session, state)

@dp.message(DriverAssignmentStates.waiting_for_id_proof)
async def state_driver_id_proof(message: Message, session: AuthState, state: FSMContext):
    await handle_driver_id_proof_input(message, session, state)

# === ОБРАБОТЧИКИ CALLBACK QUERIES (ПОЛЬЗОВАТЕЛИ) ===

@dp.callback_query(F.data.startswith("cars_page:"))
async def callback_cars_page(callback: CallbackQuery, state: FSMContext):
    """Обработчик пагинации каталога"""
    await handle_cars_page_callback(callback, state)

@dp.callback_query(F.data == "refresh_cars")
async def callback_refresh_cars(callback: CallbackQuery, state: FSMContext):
    await handle_refresh_cars_callback(callback, state)

@dp.callback_query(F.data == "catalog_filter")
async def callback_catalog_filter(callback: CallbackQuery):
    await handle_catalog_filter_callback(callback)

@dp.callback_query(F.data.startswith("filter_brand:") | F.data.startswith("filter_fuel:"))
async def callback_filter_value(callback: CallbackQuery, state: FSMContext):
    await handle_filter_value_callback(callback, state)

@dp.callback_query(F.data == "filter_reset")
async def callback_filter_reset(callback: CallbackQuery, state: FSMContext):
    await handle_filter_reset_callback(callback, state)

@dp.callback_query(F.data == "back_to_catalog")
async def callback_back_to_catalog(callback: CallbackQuery, state: FSMContext):
    """Обработчик возврата к каталогу"""
    await handle_back_to_catalog_callback(callback, state)

@dp.callback_query(F.data.startswith("car_details:"))
async def callback_car_details(callback: CallbackQuery):
    """Обработчик детальной информации об автомобиле"""
    await handle_car_details_callback(callback)

@dp.callback_query(F.data == "page_info")
async def callback_page_info(callback: CallbackQuery):
    await handle_page_info_callback(callback)

@dp.callback_query(F.data.startswith("book_car:"))
async def callback_book_car(callback: CallbackQuery, state: FSMContext, session: AuthState):
    await handle_book_car_callback(callback, state, session)

@dp.callback_query(BookingStates.waiting_for_driver_choice, F.data.startswith("book_driver:"))
async def callback_driver_choice(callback: CallbackQuery, state: FSMContext):
    await handle_driver_choice_callback(callback, state)

@dp.callback_query(BookingStates.waiting_for_id_proof, F.data == "book_skip_id_proof")
async def callback_skip_id_proof(callback: CallbackQuery, state: FSMContext):
    await handle_skip_id_proof_callback(callback, state)

@dp.callback_query(BookingStates.waiting_for_confirmation, F.data == "book_confirm")
async def callback_booking_confirm(callback: CallbackQuery, state: FSMContext, session: AuthState):
    await handle_booking_confirm_callback(callback, state, session)

@dp.callback_query(F.data == "book_cancel")
async def callback_booking_cancel(callback: CallbackQuery, state: FSMContext):
    await handle_booking_cancel_callback(callback, state)

@dp.callback_query(F.data.startswith("view_doc:"))
async def callback_view_document(callback: CallbackQuery, session: AuthState):
    await handle_view_document_callback(callback, session)

# === ОБРАБОТЧИКИ CALLBACK QUERIES (АДМИНИСТРАТОРЫ) ===

@dp.callback_query(F.data == "back_to_admin_panel")
async def callback_back_to_admin_panel(callback: CallbackQuery, session: AuthState):
    await handle_admin_panel_callback(callback, session)

@dp.callback_query(F.data == "cancel_action")
async def callback_cancel_action(callback: CallbackQuery, session: AuthState, state: FSMContext):
    await handle_cancel_action_callback(callback, session, state)

@dp.callback_query(F.data == "admin_bookings")
async def callback_admin_bookings(callback: CallbackQuery, session: AuthState):
    await handle_admin_bookings_callback(callback, session)

@dp.callback_query(F.data.startswith("admin_bookings_page:"))
async def callback_admin_bookings_page(callback: CallbackQuery, session: AuthState):
    await handle_admin_bookings_page_callback(callback, session)

@dp.callback_query(F.data.startswith("admin_booking:"))
async def callback_admin_booking(callback: CallbackQuery, session: AuthState):
    await handle_admin_booking_callback(callback, session)

@dp.callback_query(F.data.startswith("admin_approve:"))
async def callback_admin_approve(callback: CallbackQuery, session: AuthState, state: FSMContext):
    await handle_admin_approve_callback(callback, session, state)

@dp.callback_query(DriverAssignmentStates.waiting_for_id_proof, F.data == "driver_skip_id")
async def callback_driver_skip_id(callback: CallbackQuery, session: AuthState, state: FSMContext):
    await handle_driver_skip_id_callback(callback, session, state)

@dp.callback_query(F.data.startswith("admin_reject:"))
async def callback_admin_reject(callback: CallbackQuery, session: AuthState):
    await handle_admin_reject_callback(callback, session)

@dp.callback_query(F.data.startswith("admin_complete:"))
async def callback_admin_complete(callback: CallbackQuery, session: AuthState):
    await handle_admin_complete_callback(callback, session)

@dp.callback_query(F.data == "admin_manage_cars")
async def callback_admin_manage_cars(callback: CallbackQuery, session: AuthState):
    await handle_admin_manage_cars_callback(callback, session)

@dp.callback_query(F.data.startswith("admin_cars_page:"))
async def callback_admin_cars_page(callback: CallbackQuery, session: AuthState):
    await handle_admin_cars_page_callback(callback, session)

@dp.callback_query(F.data.startswith("admin_car:"))
async def callback_admin_car(callback: CallbackQuery, session: AuthState):
    await handle_admin_car_callback(callback, session)

@dp.callback_query(F.data.startswith("admin_toggle_car:"))
async def callback_admin_toggle_car(callback: CallbackQuery, session: AuthState):
    await handle_admin_toggle_car_callback(callback, session)

@dp.callback_query(F.data.startswith("admin_delete_car:"))
async def callback_admin_delete_car(callback: CallbackQuery, session: AuthState):
    await handle_admin_delete_car_callback(callback, session)

@dp.callback_query(F.data.startswith("admin_confirm_delete_car:"))
async def callback_admin_confirm_delete_car(callback: CallbackQuery, session: AuthState):
    await handle_admin_confirm_delete_car_callback(callback, session)

@dp.callback_query(F.data.startswith("admin_car_doc:"))
async def callback_admin_car_doc(callback: CallbackQuery, session: AuthState, state: FSMContext):
    await handle_admin_car_doc_callback(callback, session, state)

@dp.callback_query(F.data == "admin_add_car")
async def callback_admin_add_car(callback: CallbackQuery, session: AuthState, state: FSMContext):
    await handle_admin_add_car_callback(callback, session, state)

@dp.callback_query(F.data.startswith("admin_edit_car:"))
async def callback_admin_edit_car(callback: CallbackQuery, session: AuthState, state: FSMContext):
    await handle_admin_edit_car_callback(callback, session, state)

@dp.callback_query(F.data == "car_form_keep")
async def callback_car_form_keep(callback: CallbackQuery, session: AuthState, state: FSMContext):
    await handle_car_form_keep_callback(callback, session, state)

@dp.callback_query(CarFormStates.waiting_for_fuel_type, F.data.startswith("car_fuel:"))
async def callback_car_fuel(callback: CallbackQuery, session: AuthState, state: FSMContext):
    await handle_car_fuel_callback(callback, session, state)

# === УНИВЕРСАЛЬНЫЙ ОБРАБОТЧИК ТЕКСТОВЫХ СООБЩЕНИЙ (должен быть последним) ===

@dp.message(F.text)
async def handle_text_messages(message: Message, session: AuthState):
    """Обработчик остальных текстовых сообщений (не команды и не в FSM состоянии)"""
    await message.answer(
        """<b>Команда не распознана</b>

Используйте кнопки меню для навигации.
Отправьте /help для справки.""",
        reply_markup=get_main_menu(session),
        parse_mode='HTML'
    )


async def main():
    """Главная функция запуска бота"""
    setup_logging(LOG_LEVEL)

    await store.initialize(seed=SEED_SAMPLE_DATA)

    bot = create_bot()
    try:
        logger.info("Бот запущен")
        await dp.start_polling(bot)
    finally:
        await bot.session.close()
        logger.info("Бот остановлен, соединения закрыты")


def run():
    """Точка входа консольной команды driveeasy-bot"""
    asyncio.run(main())


if __name__ == "__main__":
    run()
