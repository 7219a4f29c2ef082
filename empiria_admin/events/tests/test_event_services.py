import uuid
from datetime import timedelta
from decimal import Decimal

import pytest
from django.http import Http404
from django.utils import timezone

from events import services
from events.models import Event
from tickets.models import Ticket, TicketTier

pytestmark = pytest.mark.django_db


def test_get_events_excludes_deleted_and_filters(event, organizer):
    Event.objects.create(organizer=organizer, title="Draft Gala", slug="draft-gala", status="draft")
    Event.objects.create(
        organizer=organizer, title="Old", slug="old", deleted_at=timezone.now()
    )

    assert services.get_events().total == 2
    assert [e.title for e in services.get_events(status="draft").rows] == ["Draft Gala"]
    assert [e.title for e in services.get_events(search="jazz").rows] == ["Jazz Night"]


def test_get_events_newest_first(event, organizer):
    newer = Event.objects.create(organizer=organizer, title="Newer", slug="newer")
    Event.objects.filter(id=event.id).update(created_at=timezone.now() - timedelta(days=1))

    assert services.get_events().rows[0] == newer


def test_get_event_by_id_orders_tiers_by_price(event, make_order):
    TicketTier.objects.create(event=event, name="VIP", price=Decimal("99"), initial_quantity=5)
    TicketTier.objects.create(event=event, name="Student", price=Decimal("10"), initial_quantity=5)
    make_order()

    found, tiers, orders = services.get_event_by_id(event.id)

    assert found == event
    assert [t.name for t in tiers] == ["Student", "VIP"]
    assert len(orders) == 1


def test_get_event_by_id_missing_is_404(db):
    with pytest.raises(Http404):
        services.get_event_by_id(uuid.uuid4())


def test_get_event_tickets(event, tier):
    Ticket.objects.create(event=event, tier=tier, attendee_name="A")
    assert len(services.get_event_tickets(event)) == 1


def test_update_event_status(event):
    services.update_event_status(event.id, "cancelled")
    event.refresh_from_db()
    assert event.status == "cancelled"


def test_update_event_status_rejects_unknown(event):
    with pytest.raises(ValueError):
        services.update_event_status(event.id, "archived")


def test_toggle_featured(event):
    assert services.toggle_event_featured(event.id, True).is_featured is True
    assert services.toggle_event_featured(event.id, False).is_featured is False


def test_update_platform_fee(event):
    services.update_platform_fee(event.id, "7.5", "0.99")
    event.refresh_from_db()
    assert event.platform_fee_percent == Decimal("7.50")
    assert event.platform_fee_fixed == Decimal("0.99")


@pytest.mark.parametrize("percent, fixed", [("-1", "0"), ("100.01", "0"), ("5", "-0.01")])
def test_update_platform_fee_bounds(event, percent, fixed):
    with pytest.raises(ValueError):
        services.update_platform_fee(event.id, percent, fixed)
    event.refresh_from_db()
    assert event.platform_fee_percent == Decimal("5")
