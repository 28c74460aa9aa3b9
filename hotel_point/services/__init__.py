# Business services
from hotel_point.services.date_rule_calendar import DateRuleCalendar, DayCost
from hotel_point.services.availability_checker import AvailabilityChecker
from hotel_point.services.point_ledger import PointLedger
from hotel_point.services.booking_engine import BookingEngine
from hotel_point.services.account_service import AccountService

__all__ = [
    'DateRuleCalendar', 'DayCost', 'AvailabilityChecker', 'PointLedger',
    'BookingEngine', 'AccountService'
]
