"""
Initial data script
Creates: admin account, sample hotels and rooms, national holidays of the
current year

Default admin account: admin@hotelpoint.local / admin123
"""
from datetime import date

from hotel_point.database import SessionLocal, init_db
from hotel_point.models.entities import DayType, Hotel, Room, UserRole
from hotel_point.repositories import Stores
from hotel_point.services.account_service import AccountService
from hotel_point.services.date_rule_calendar import DateRuleCalendar

ADMIN_POINTS = 100

HOTELS = [
    {
        "name": "Grand Bali Resort",
        "description": "Beachfront resort",
        "address": "Jl. Pantai Kuta No. 1",
        "city": "Bali",
        "rooms": [("Deluxe 101", 2), ("Deluxe 102", 2), ("Family Suite 201", 4)],
    },
    {
        "name": "Jakarta City Hotel",
        "description": "Business hotel in the city centre",
        "address": "Jl. Sudirman No. 10",
        "city": "Jakarta",
        "rooms": [("Standard 301", 2), ("Executive 401", 2)],
    },
]

HOLIDAYS = [
    (1, 1, "New Year"),
    (8, 17, "Independence Day"),
    (12, 25, "Christmas"),
]


def init_admin(db):
    """Admin account, topped up to ADMIN_POINTS"""
    stores = Stores.from_session(db)
    if stores.users.find_user_by_email("admin@hotelpoint.local"):
        return None
    accounts = AccountService(stores.users)
    admin = accounts.register("Administrator", "admin@hotelpoint.local", "admin123",
                              role=UserRole.ADMIN)
    top_up = ADMIN_POINTS - admin.point_balance
    if top_up > 0:
        accounts.ledger.grant(admin.id, top_up, "seed")
    return admin


def init_hotels(db):
    """Sample hotels and rooms"""
    if db.query(Hotel).count() > 0:
        return 0
    created = 0
    for data in HOTELS:
        hotel = Hotel(name=data["name"], description=data["description"],
                      address=data["address"], city=data["city"])
        db.add(hotel)
        db.flush()
        for room_name, capacity in data["rooms"]:
            db.add(Room(hotel_id=hotel.id, name=room_name, capacity=capacity))
            created += 1
    db.commit()
    return created


def init_holidays(db):
    """Holidays of the current year, 3 points each"""
    calendar = DateRuleCalendar(Stores.from_session(db).calendar)
    year = date.today().year
    for month, day, name in HOLIDAYS:
        calendar.upsert_rule(date(year, month, day), DayType.HOLIDAY, 3, name)
    return len(HOLIDAYS)


def main():
    """Entry point"""
    init_db()
    db = SessionLocal()
    try:
        admin = init_admin(db)
        print(f"admin: {'created' if admin else 'exists'}")
        print(f"rooms created: {init_hotels(db)}")
        print(f"holidays set: {init_holidays(db)}")
    finally:
        db.close()


if __name__ == '__main__':
    main()
