"""Date manipulation utilities"""

from datetime import date, timedelta
from typing import List


def generate_date_range(start: date, end: date) -> List[date]:
    """Generate list of dates from start to end (inclusive)"""
    days = (end - start).days + 1
    return [start + timedelta(days=i) for i in range(days)]


def start_of_week(day: date) -> date:
    """Monday of the ISO week containing day (Sunday belongs to the week before)"""
    return day - timedelta(days=day.weekday())
