"""
FSM States для пользовательских handlers
"""
from aiogram.fsm.state import State, StatesGroup


class LoginStates(StatesGroup):
    """Состояния входа"""
    waiting_for_email = State()
    waiting_for_password = State()


class RegistrationStates(StatesGroup):
    """Состояния регистрации"""
    waiting_for_name = State()
    waiting_for_email = State()
    waiting_for_phone = State()
    waiting_for_password = State()


class BookingStates(StatesGroup):
    """Состояния формы бронирования"""
    waiting_for_pickup_date = State()
    waiting_for_return_date = State()
    waiting_for_driver_choice = State()
    waiting_for_id_proof = State()
    waiting_for_confirmation = State()
