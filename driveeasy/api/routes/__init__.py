from .cars import router as cars_router
from .users import router as users_router
from .bookings import router as bookings_router

__all__ = [
    'cars_router',
    'users_router',
    'bookings_router',
]
