# This project was developed with assistance from AI tools.
"""Verifier dashboard service.

The backend computes the headline stats and monthly series; this module
reshapes the series from the backend's ``{_id, count}`` grouping into
``{name, value}`` chart points and normalizes the recent-activity rows.
"""

import logging

from ..schemas.auth import UserContext
from ..schemas.dashboard import (
    DEFAULT_ACTIVITY_REASON,
    ChartPoint,
    DashboardCharts,
    DashboardStats,
    RecentLoan,
    VerifierDashboardResponse,
)
from .backend import BackendClient

logger = logging.getLogger(__name__)

# Backend series key -> response field
_SERIES = {
    "loansReleasedMonthly": "loans_released_monthly",
    "outstandingLoansMonthly": "outstanding_loans_monthly",
    "repaymentsCollectedMonthly": "repayments_collected_monthly",
}


def to_chart_points(series) -> list[ChartPoint]:
    """Convert ``[{_id, count}, ...]`` into chart points.

    Anything that is not a list yields an empty series.
    """
    if not isinstance(series, list):
        if series is not None:
            logger.warning("Ignoring malformed chart series: %r", series)
        return []
    return [ChartPoint(name=str(item["_id"]), value=item.get("count", 0)) for item in series]


def _recent_loan(raw: dict) -> RecentLoan:
    loan = RecentLoan.model_validate(raw)
    if not loan.reason:
        loan = loan.model_copy(update={"reason": DEFAULT_ACTIVITY_REASON})
    return loan


async def get_verifier_dashboard(
    client: BackendClient, user: UserContext
) -> VerifierDashboardResponse:
    data = await client.get_verifier_dashboard(token=user.token)

    charts_raw = data.get("charts") or {}
    charts = DashboardCharts(
        **{field: to_chart_points(charts_raw.get(key)) for key, field in _SERIES.items()}
    )

    activity = data.get("recentActivity")
    recent = [_recent_loan(item) for item in activity] if isinstance(activity, list) else []

    return VerifierDashboardResponse(
        stats=DashboardStats.model_validate(data.get("stats") or {}),
        charts=charts,
        recent_activity=recent,
    )
