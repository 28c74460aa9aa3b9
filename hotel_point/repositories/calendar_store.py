"""
Calendar store - special date rules
"""
from datetime import datetime
from typing import List, Optional

from hotel_point.models.entities import DateRule
from hotel_point.repositories.base import SqlStore
from hotel_point.repositories.interfaces import CalendarStore
from hotel_point.timeutils import end_of_day, start_of_day


class SqlCalendarStore(SqlStore, CalendarStore):

    def find_rules_in_range(self, start: datetime, end: datetime) -> List[DateRule]:
        with self.guard("find date rules"):
            return self.db.query(DateRule).filter(
                DateRule.date >= start_of_day(start),
                DateRule.date <= end_of_day(end)
            ).order_by(DateRule.date, DateRule.id).all()

    def find_rule_for_date(self, day: datetime) -> Optional[DateRule]:
        with self.guard("find date rule"):
            return self.db.query(DateRule).filter(
                DateRule.date >= start_of_day(day),
                DateRule.date <= end_of_day(day)
            ).order_by(DateRule.id).first()

    def find_rule_by_id(self, rule_id: int) -> Optional[DateRule]:
        with self.guard("find date rule"):
            return self.db.query(DateRule).filter(DateRule.id == rule_id).first()

    def create_rule(self, rule: DateRule) -> DateRule:
        return self.save(rule, "create date rule")

    def update_rule(self, rule: DateRule) -> DateRule:
        return self.save(rule, "update date rule")

    def delete_rule(self, rule: DateRule) -> None:
        with self.guard("delete date rule"):
            self.db.delete(rule)
            self.db.commit()
