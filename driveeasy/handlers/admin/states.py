"""
FSM States для admin handlers
"""
from aiogram.fsm.state import State, StatesGroup


class CarFormStates(StatesGroup):
    """Состояния формы автомобиля (создание и редактирование)"""
    waiting_for_name = State()
    waiting_for_brand = State()
    waiting_for_price = State()
    waiting_for_fuel_type = State()
    waiting_for_image = State()


class CarDocumentStates(StatesGroup):
    """Загрузка документов автомобиля"""
    waiting_for_document = State()


class DriverAssignmentStates(StatesGroup):
    """Назначение водителя при подтверждении бронирования"""
    waiting_for_name = State()
    waiting_for_phone = State()
    waiting_for_id_proof = State()
