"""
Общие сервисы для handlers
"""
from driveeasy.database.repositories import BookingRepository, CarRepository, UserRepository
from driveeasy.services.auth_service import AuthService
from driveeasy.services.booking_service import BookingService
from driveeasy.services.car_service import CarService

car_service = CarService(CarRepository())
booking_service = BookingService(BookingRepository())
auth_service = AuthService(UserRepository())
