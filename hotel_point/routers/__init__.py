# API Routers
from hotel_point.routers import auth, bookings, points, admin

__all__ = ['auth', 'bookings', 'points', 'admin']
