"""Calendar week windows used to bucket transactions"""

from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Union

from finance_dashboard.domain.models import Transaction, WeekWindow
from finance_dashboard.utils.date_utils import start_of_week

END_OF_DAY = time(23, 59, 59, 999000)


def week_range(offset_weeks: int, now: Union[date, datetime]) -> WeekWindow:
    """
    Compute the Monday-to-Sunday window offset_weeks away from the week of now.

    Weeks always start on Monday (ISO); a Sunday belongs to the week that
    began six days earlier. Negative offsets walk into the past. The window
    is never clipped at month or year boundaries.
    """
    tzinfo = now.tzinfo if isinstance(now, datetime) else None
    today = now.date() if isinstance(now, datetime) else now

    monday = start_of_week(today) + timedelta(weeks=offset_weeks)
    sunday = monday + timedelta(days=6)

    return WeekWindow(
        start=datetime.combine(monday, time.min, tzinfo=tzinfo),
        end=datetime.combine(sunday, END_OF_DAY, tzinfo=tzinfo),
    )


def filter_by_window(transactions: Iterable[Transaction], window: WeekWindow) -> List[Transaction]:
    """Transactions dated within the window, both end days included, input order kept"""
    return [t for t in transactions if window.contains(t.date)]


def day_index(day: date) -> int:
    """Bucket index inside a week: 0 = Monday ... 6 = Sunday"""
    return day.weekday()
