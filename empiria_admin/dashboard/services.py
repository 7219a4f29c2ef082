# dashboard/services.py
"""Aggregate revenue figures. Only completed orders count as revenue."""
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.db.models import Count, DecimalField, IntegerField, Sum, Value
from django.db.models.functions import Coalesce, TruncDate
from django.utils import timezone

from accounts.models import PlatformUser
from events.models import Event
from orders.models import Order

ZERO = Value(Decimal("0"), output_field=DecimalField(max_digits=14, decimal_places=2))


@dataclass
class DashboardKpis:
    total_revenue: Decimal
    platform_fees: Decimal
    total_orders: int
    total_users: int
    total_events: int
    total_tickets_sold: int
    currency: str

    @property
    def organizer_payouts(self):
        return self.total_revenue - self.platform_fees


@dataclass
class RevenuePoint:
    date: str
    revenue: Decimal
    platform_fees: Decimal
    orders: int


@dataclass
class EventRevenue:
    event_id: str
    event_title: str
    organizer_id: str
    total_revenue: Decimal
    platform_fees: Decimal
    organizer_payout: Decimal
    order_count: int
    currency: str

    @property
    def effective_fee_percent(self):
        if self.total_revenue <= 0:
            return "0"
        return f"{self.platform_fees / self.total_revenue * 100:.1f}"


def _completed_orders():
    return Order.objects.filter(status="completed")


def get_dashboard_kpis():
    totals = _completed_orders().aggregate(
        total_revenue=Coalesce(Sum("total_amount"), ZERO),
        platform_fees=Coalesce(Sum("platform_fee_amount"), ZERO),
        total_orders=Count("id"),
    )
    live_events = Event.objects.filter(deleted_at__isnull=True)
    return DashboardKpis(
        total_revenue=totals["total_revenue"],
        platform_fees=totals["platform_fees"],
        total_orders=totals["total_orders"],
        total_users=PlatformUser.objects.filter(deleted_at__isnull=True).count(),
        total_events=live_events.count(),
        total_tickets_sold=live_events.aggregate(
            sold=Coalesce(
                Sum("total_tickets_sold"), Value(0), output_field=IntegerField()
            )
        )["sold"],
        currency=getattr(settings, "REPORTING_CURRENCY", "cad"),
    )


def get_revenue_time_series(days=30):
    """Completed orders of the last ``days`` days, one point per calendar date."""
    since = timezone.now() - timedelta(days=days)
    rows = (
        _completed_orders()
        .filter(created_at__gte=since)
        .annotate(day=TruncDate("created_at"))
        .values("day")
        .annotate(
            revenue=Coalesce(Sum("total_amount"), ZERO),
            platform_fees=Coalesce(Sum("platform_fee_amount"), ZERO),
            orders=Count("id"),
        )
        .order_by("day")
    )
    return [
        RevenuePoint(
            date=row["day"].isoformat(),
            revenue=row["revenue"],
            platform_fees=row["platform_fees"],
            orders=row["orders"],
        )
        for row in rows
    ]


def get_revenue_by_event():
    """Completed-order totals per event, highest revenue first."""
    rows = (
        _completed_orders()
        .values("event_id", "event__title", "event__organizer_id")
        .annotate(
            total_revenue=Coalesce(Sum("total_amount"), ZERO),
            platform_fees=Coalesce(Sum("platform_fee_amount"), ZERO),
            organizer_payout=Coalesce(Sum("organizer_payout_amount"), ZERO),
            order_count=Count("id"),
        )
        .order_by()
    )
    # Ascending, so the newest order per event wins.
    currencies = dict(
        _completed_orders().order_by("created_at").values_list("event_id", "currency")
    )
    result = [
        EventRevenue(
            event_id=str(row["event_id"]),
            event_title=row["event__title"] or "Unknown",
            organizer_id=row["event__organizer_id"] or "",
            total_revenue=row["total_revenue"],
            platform_fees=row["platform_fees"],
            organizer_payout=row["organizer_payout"],
            order_count=row["order_count"],
            currency=currencies.get(row["event_id"], "cad"),
        )
        for row in rows
    ]
    return sorted(result, key=lambda r: r.total_revenue, reverse=True)


def chart_payload(points):
    """Plain lists for the revenue chart's json_script."""
    return {
        "labels": [p.date for p in points],
        "revenue": [float(p.revenue) for p in points],
        "platform_fees": [float(p.platform_fees) for p in points],
        "orders": [p.orders for p in points],
    }
