from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from dashboard import services
from events.models import Event

pytestmark = pytest.mark.django_db


def test_kpis_count_only_completed_orders(make_order, attendee, platform_admin, event):
    make_order(total="100.00", fee="5.00")
    make_order(total="50.00", fee="2.50")
    make_order(total="999.00", fee="50.00", status="refunded")
    make_order(total="10.00", fee="1.00", status="pending")
    Event.objects.filter(id=event.id).update(total_tickets_sold=7)

    kpis = services.get_dashboard_kpis()

    assert kpis.total_revenue == Decimal("150.00")
    assert kpis.platform_fees == Decimal("7.50")
    assert kpis.organizer_payouts == Decimal("142.50")
    assert kpis.total_orders == 2
    assert kpis.total_users == 3
    assert kpis.total_events == 1
    assert kpis.total_tickets_sold == 7
    assert kpis.currency == "cad"


def test_kpis_on_empty_database(db):
    kpis = services.get_dashboard_kpis()
    assert kpis.total_revenue == 0
    assert kpis.total_orders == 0
    assert kpis.total_tickets_sold == 0


def test_time_series_groups_by_day_inside_window(make_order):
    now = timezone.now()
    make_order(total="10.00", fee="1.00", created_at=now - timedelta(days=2))
    make_order(total="20.00", fee="2.00", created_at=now - timedelta(days=2))
    make_order(total="30.00", fee="3.00", created_at=now)
    make_order(total="99.00", fee="9.00", created_at=now - timedelta(days=45))
    make_order(total="77.00", fee="7.00", created_at=now, status="pending")

    points = services.get_revenue_time_series(30)

    assert [p.orders for p in points] == [2, 1]
    assert points[0].revenue == Decimal("30.00")
    assert points[0].platform_fees == Decimal("3.00")
    assert points[0].date < points[1].date

    payload = services.chart_payload(points)
    assert payload["revenue"] == [30.0, 30.0]
    assert payload["labels"] == [p.date for p in points]


def test_revenue_by_event_sorted_desc(make_order, event, organizer):
    other = Event.objects.create(organizer=organizer, title="Tech Summit", slug="tech")
    make_order(total="40.00", fee="2.00")
    make_order(total="500.00", fee="25.00", order_event=other, currency="usd")
    make_order(total="1000.00", fee="0", order_event=other, status="refunded")

    rows = services.get_revenue_by_event()

    assert [r.event_title for r in rows] == ["Tech Summit", "Jazz Night"]
    top = rows[0]
    assert top.total_revenue == Decimal("500.00")
    assert top.organizer_payout == Decimal("475.00")
    assert top.order_count == 1
    assert top.currency == "usd"
    assert top.organizer_id == "auth0|organizer"
    assert top.effective_fee_percent == "5.0"
