"""
Date rule calendar
Maps calendar days to a point cost and day type
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Union

from hotel_point.errors import NotFoundError, ValidationError
from hotel_point.models.entities import DateRule, DayType
from hotel_point.repositories.interfaces import CalendarStore
from hotel_point.timeutils import DateLike, is_weekend, iter_days, start_of_day

logger = logging.getLogger(__name__)

WEEKEND_COST = 2
REGULAR_COST = 1
MIN_RULE_COST = 1
MAX_RULE_COST = 3


@dataclass(frozen=True)
class DayCost:
    """Point cost of one night"""
    date: datetime
    point_cost: int
    day_type: DayType
    name: str = ""


def default_day_cost(day: datetime) -> DayCost:
    """Weekday default: Saturday/Sunday are weekend (2), anything else regular (1)"""
    if is_weekend(day):
        return DayCost(day, WEEKEND_COST, DayType.WEEKEND)
    return DayCost(day, REGULAR_COST, DayType.REGULAR)


def rule_day_cost(day: datetime, rule: DateRule) -> DayCost:
    return DayCost(day, rule.point_cost, DayType(rule.type), rule.name or "")


class DateRuleCalendar:
    """Date rule calendar - a special rule always overrides the weekday default"""

    def __init__(self, store: CalendarStore):
        self.store = store

    def cost_for_date(self, day: DateLike) -> DayCost:
        """Cost, day type and name of a single day"""
        day = start_of_day(day)
        rule = self.store.find_rule_for_date(day)
        if rule is not None:
            return rule_day_cost(day, rule)
        return default_day_cost(day)

    def cost_for_range(self, start: DateLike, end_exclusive: DateLike) -> List[DayCost]:
        """Per-night costs for [start, end_exclusive): the check-out day is not charged"""
        start = start_of_day(start)
        end = start_of_day(end_exclusive)
        if end <= start:
            return []

        rules = self.store.find_rules_in_range(start, end - timedelta(days=1))
        by_day = {}
        for rule in rules:
            # first rule wins if duplicates slipped in
            by_day.setdefault(start_of_day(rule.date).date(), rule)

        result = []
        for day in iter_days(start, end):
            rule = by_day.get(day.date())
            result.append(rule_day_cost(day, rule) if rule else default_day_cost(day))
        return result

    def total_for_range(self, start: DateLike, end_exclusive: DateLike) -> int:
        return sum(d.point_cost for d in self.cost_for_range(start, end_exclusive))

    # ============== Administration ==============

    def list_rules(self, start: DateLike, end: DateLike) -> List[DateRule]:
        return self.store.find_rules_in_range(start_of_day(start), start_of_day(end))

    def upsert_rule(self, day: Optional[DateLike], day_type: Union[str, DayType],
                    point_cost: int, name: str = "") -> DateRule:
        """
        Set the rule of a calendar day.

        An existing rule for the same day is updated in place; a second rule
        for the day is never created.
        """
        if day is None:
            raise ValidationError("invalid date rule data: date is required")
        try:
            day_type = DayType(day_type)
        except ValueError:
            raise ValidationError("invalid date rule data: unknown day type")
        if not isinstance(point_cost, int) or not MIN_RULE_COST <= point_cost <= MAX_RULE_COST:
            raise ValidationError("invalid date rule data: point cost must be between 1 and 3")

        day = start_of_day(day)
        existing = self.store.find_rules_in_range(day, day)
        if existing:
            rule = existing[0]
            rule.type = day_type
            rule.point_cost = point_cost
            rule.name = name
            rule = self.store.update_rule(rule)
            logger.info(f"Date rule {day.date()} updated: {day_type.value}/{point_cost}")
            return rule

        rule = self.store.create_rule(DateRule(
            date=day, type=day_type, point_cost=point_cost, name=name
        ))
        logger.info(f"Date rule {day.date()} created: {day_type.value}/{point_cost}")
        return rule

    def delete_rule(self, rule_id: int) -> None:
        rule = self.store.find_rule_by_id(rule_id)
        if rule is None:
            raise NotFoundError("date rule not found")
        self.store.delete_rule(rule)
        logger.info(f"Date rule {rule_id} deleted")
