"""
Бизнес-логика: цены, сессии, каталог и бронирования
"""
from .auth_service import AuthService, SessionStore, sessions
from .booking_service import BookingService, DashboardStats, get_dashboard_stats
from .car_service import CarService
from .pricing import PriceQuote, quote

__all__ = [
    'AuthService',
    'SessionStore',
    'sessions',
    'BookingService',
    'DashboardStats',
    'get_dashboard_stats',
    'CarService',
    'PriceQuote',
    'quote',
]
