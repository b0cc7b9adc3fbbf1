"""
Обработчики входа, регистрации и выхода
"""
import logging
from aiogram.types import Message
from aiogram.fsm.context import FSMContext
from pydantic import ValidationError as PydanticValidationError

from driveeasy.handlers.common import auth_service
from driveeasy.handlers.states import LoginStates, RegistrationStates
from driveeasy.keyboards.user_keyboards import get_main_menu
from driveeasy.models.user_models import AuthState, UserRegister
from driveeasy.services.auth_service import SessionStore
from driveeasy.utils.errors import error_handler
from driveeasy.utils.helpers import safe_delete_message

logger = logging.getLogger(__name__)


def _text(message: Message) -> str:
    return (message.text or '').strip()


async def handle_login_button(message: Message, state: FSMContext, session: AuthState) -> None:
    """Обработчик кнопки 'Войти'"""
    if session.is_authenticated:
        await message.answer(
            f"Вы уже вошли как <b>{session.user.name}</b>.",
            reply_markup=get_main_menu(session),
            parse_mode='HTML'
        )
        return

    await state.clear()
    await state.set_state(LoginStates.waiting_for_email)
    await message.answer("🔑 <b>Вход</b>\n\nВведите email:", parse_mode='HTML')


async def handle_login_email_input(message: Message, state: FSMContext) -> None:
    """Шаг 1 входа: email"""
    await state.update_data(email=_text(message))
    await state.set_state(LoginStates.waiting_for_password)
    await message.answer("Введите пароль:")


@error_handler
async def handle_login_password_input(message: Message, state: FSMContext, sessions: SessionStore) -> None:
    """Шаг 2 входа: пароль и проверка учетных данных"""
    data = await state.get_data()
    await state.clear()

    # Пароль не должен оставаться в истории чата
    await safe_delete_message(message)

    new_session = await auth_service.login(data.get('email', ''), message.text or '')
    sessions.set(message.from_user.id, new_session)

    await message.answer(
        f"👋 <b>Добро пожаловать, {new_session.user.name}!</b>",
        reply_markup=get_main_menu(new_session),
        parse_mode='HTML'
    )


async def handle_register_button(message: Message, state: FSMContext) -> None:
    """Обработчик кнопки 'Регистрация'"""
    await state.clear()
    await state.set_state(RegistrationStates.waiting_for_name)
    await message.answer("📝 <b>Регистрация</b>\n\nВведите ваше имя:", parse_mode='HTML')


async def handle_register_name_input(message: Message, state: FSMContext) -> None:
    """Шаг 1 регистрации: имя"""
    await state.update_data(name=_text(message))
    await state.set_state(RegistrationStates.waiting_for_email)
    await message.answer("Введите email (он будет логином):")


async def handle_register_email_input(message: Message, state: FSMContext) -> None:
    """Шаг 2 регистрации: email"""
    await state.update_data(email=_text(message))
    await state.set_state(RegistrationStates.waiting_for_phone)
    await message.answer("Введите номер телефона:")


async def handle_register_phone_input(message: Message, state: FSMContext) -> None:
    """Шаг 3 регистрации: телефон"""
    await state.update_data(phone=_text(message))
    await state.set_state(RegistrationStates.waiting_for_password)
    await message.answer("Придумайте пароль:")


@error_handler
async def handle_register_password_input(message: Message, state: FSMContext, sessions: SessionStore) -> None:
    """Шаг 4 регистрации: пароль, создание пользователя и вход"""
    data = await state.get_data()

    try:
        form = UserRegister(
            name=data.get('name', ''),
            email=data.get('email', ''),
            phone=data.get('phone', ''),
            password=message.text or ''
        )
    except PydanticValidationError:
        await state.clear()
        await message.answer("❌ Все поля обязательны. Начните регистрацию заново.")
        return

    await state.clear()
    new_session = await auth_service.register(form)
    sessions.set(message.from_user.id, new_session)

    await message.answer(
        f"✅ <b>Регистрация завершена!</b>\n\nДобро пожаловать, {new_session.user.name}.",
        reply_markup=get_main_menu(new_session),
        parse_mode='HTML'
    )


async def handle_logout_button(message: Message, state: FSMContext, sessions: SessionStore) -> None:
    """Обработчик кнопки 'Выйти'"""
    await state.clear()
    sessions.clear(message.from_user.id)
    await message.answer(
        "🚪 Вы вышли из аккаунта.",
        reply_markup=get_main_menu(auth_service.logout())
    )
