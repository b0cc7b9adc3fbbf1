"""
Pydantic модели для валидации данных
"""
from .car_models import CarForm
from .user_models import UserRole, UserRegister, UserResponse, AuthState
from .booking_models import BookingStatus, BookingCreate, DriverDetails

__all__ = [
    'CarForm',
    'UserRole',
    'UserRegister',
    'UserResponse',
    'AuthState',
    'BookingStatus',
    'BookingCreate',
    'DriverDetails',
]
