"""
Зависимости FastAPI: репозитории поверх хранилища приложения
"""
from fastapi import Request
from driveeasy.database.repositories import BookingRepository, CarRepository, UserRepository
from driveeasy.database.store import JsonStore


def get_store(request: Request) -> JsonStore:
    return request.app.state.store


def get_car_repository(request: Request) -> CarRepository:
    return CarRepository(get_store(request))


def get_user_repository(request: Request) -> UserRepository:
    return UserRepository(get_store(request))


def get_booking_repository(request: Request) -> BookingRepository:
    return BookingRepository(get_store(request))
