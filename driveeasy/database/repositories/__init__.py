"""
Repository Pattern для работы с хранилищем
"""
from .car_repository import CarRepository
from .user_repository import UserRepository
from .booking_repository import BookingRepository

__all__ = [
    'CarRepository',
    'UserRepository',
    'BookingRepository',
]
