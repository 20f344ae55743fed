"""Emergency fund sizing - how many months of expenses to keep liquid"""

from enum import Enum
from typing import List, Optional

from finance_dashboard.domain.models import EmergencyFundProfile, Recommendation, SavingsPlan
from finance_dashboard.utils.math_utils import safe_ratio


class HouseholdStatus(str, Enum):
    SINGLE = "single"
    MARRIED = "married"
    FAMILY = "family"


COVERAGE_MONTHS = {
    HouseholdStatus.SINGLE: 6,
    HouseholdStatus.MARRIED: 9,
    HouseholdStatus.FAMILY: 12,
}

SAVINGS_HORIZONS = (12, 24)

# Share of the target per instrument: savings account, time deposit, money-market fund
ALLOCATION_SPLIT = {"savings": 0.2, "deposit": 0.3, "money_market": 0.5}


def normalize_status(status: str) -> HouseholdStatus:
    """Unrecognized statuses get the single-person policy"""
    try:
        return HouseholdStatus(status)
    except ValueError:
        return HouseholdStatus.SINGLE


def months_of_coverage(status: str) -> int:
    """Months of expenses to hold for a household"""
    return COVERAGE_MONTHS[normalize_status(status)]


def _build_profile(target: int, current: int, months: int) -> EmergencyFundProfile:
    shortfall = max(0, target - current)
    percentage = min(100.0, safe_ratio(100 * current, target))

    return EmergencyFundProfile(
        target=target,
        current=current,
        shortfall=shortfall,
        percentage=percentage,
        months=months,
        savings_plan=tuple(SavingsPlan(months=h, monthly_amount=shortfall / h) for h in SAVINGS_HORIZONS),
    )


def calculate_emergency_fund(
    monthly_expense: int,
    household_status: str,
    current_savings: Optional[int] = None,
) -> EmergencyFundProfile:
    """
    Size the emergency fund for a household.

    Requirements:
    - target = monthly expense x months of coverage (6 / 9 / 12)
    - shortfall floored at 0
    - percentage capped at 100; a zero target reads as 0%, never NaN
    - two savings plans closing the shortfall in 12 and 24 months

    Negative inputs are clamped to 0 and missing savings default to 0.
    """
    months = months_of_coverage(household_status)
    monthly_expense = max(0, monthly_expense or 0)
    current = max(0, current_savings or 0)

    return _build_profile(monthly_expense * months, current, months)


def profile_from_snapshot(target: int, current: int, months: int = 0) -> EmergencyFundProfile:
    """Rebuild a profile from the stored {target, current} pair"""
    return _build_profile(max(0, target), max(0, current), months)


def emergency_recommendations(profile: EmergencyFundProfile, household_status: str) -> List[Recommendation]:
    """Progress tier, household tip and allocation split for the fund"""
    recommendations = []
    pct = round(profile.percentage)

    if profile.percentage >= 100:
        recommendations.append(Recommendation("success", "target_reached", {"percentage": pct}))
    elif profile.percentage >= 75:
        recommendations.append(
            Recommendation("info", "almost_there", {"percentage": pct, "shortfall": profile.shortfall})
        )
    elif profile.percentage >= 50:
        recommendations.append(Recommendation("info", "halfway", {"percentage": pct}))
    elif profile.percentage >= 25:
        recommendations.append(Recommendation("warning", "needs_improvement", {"percentage": pct}))
    else:
        recommendations.append(Recommendation("warning", "prioritize_fund", {"percentage": pct}))

    status = normalize_status(household_status)
    if status == HouseholdStatus.FAMILY:
        recommendations.append(Recommendation("info", "family_tip"))
    elif status == HouseholdStatus.MARRIED:
        recommendations.append(Recommendation("info", "married_tip"))
    else:
        recommendations.append(Recommendation("info", "single_tip"))

    recommendations.append(
        Recommendation(
            "info",
            "allocation_strategy",
            {name: profile.target * share for name, share in ALLOCATION_SPLIT.items()},
        )
    )

    return recommendations
