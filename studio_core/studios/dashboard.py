# studio_core/studios/dashboard.py
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, List, Tuple

from studio_core.clients.metrics import ZERO, parse_price, visit_date
from studio_core.common.store import VisitRecord


@dataclass(frozen=True)
class MonthlyRevenue:
    month: int
    revenue: Decimal = ZERO


@dataclass(frozen=True)
class DashboardStats:
    """
    Studio-wide financial summary.

    total_revenue spans every visit regardless of status or date;
    revenue_by_month only covers visits dated in `year`.
    """
    year: int
    total_clients: int = 0
    total_visits: int = 0
    total_revenue: Decimal = ZERO
    revenue_by_month: List[MonthlyRevenue] = field(default_factory=list)


def fold_revenue(visits: Iterable[VisitRecord], year: int) -> Tuple[int, Decimal, List[MonthlyRevenue]]:
    """
    (visit count, total revenue, 12 monthly buckets for `year`).
    Prices and dates go through the same parsing as client metrics.
    """
    count = 0
    total = ZERO
    months = [ZERO] * 12
    for visit in visits:
        count += 1
        price = parse_price(visit.price)
        total += price
        when = visit_date(visit)
        if when is not None and when.year == year:
            months[when.month - 1] += price
    return count, total, [MonthlyRevenue(month=i + 1, revenue=v) for i, v in enumerate(months)]


def build_stats(*, year: int, total_clients: int, visits: Iterable[VisitRecord]) -> DashboardStats:
    total_visits, total_revenue, by_month = fold_revenue(visits, year)
    return DashboardStats(
        year=year,
        total_clients=total_clients,
        total_visits=total_visits,
        total_revenue=total_revenue,
        revenue_by_month=by_month,
    )
