# conftest.py
from datetime import timedelta
from decimal import Decimal
from importlib import import_module

import pytest
from django.conf import settings
from django.utils import timezone

from accounts.guard import SESSION_IDENTITY_KEY
from accounts.models import PlatformUser
from events.models import Category, Event, EventOccurrence
from orders.models import Order, OrderItem
from tickets.models import Ticket, TicketTier


def sign_in(client, user=None, **identity):
    """
    Put an identity-provider session on the test client, the way the login
    callback does. Works with the signed-cookie session engine.
    """
    if user is not None:
        identity.setdefault("sub", user.auth0_id)
        identity.setdefault("email", user.email)
        identity.setdefault("name", user.full_name or "")
    engine = import_module(settings.SESSION_ENGINE)
    session = engine.SessionStore()
    session[SESSION_IDENTITY_KEY] = identity
    session.save()
    client.cookies[settings.SESSION_COOKIE_NAME] = session.session_key
    return client


@pytest.fixture
def platform_admin(db):
    return PlatformUser.objects.create(
        auth0_id="auth0|admin",
        email="admin@example.com",
        full_name="Ada Admin",
        role="admin",
    )


@pytest.fixture
def organizer(db):
    return PlatformUser.objects.create(
        auth0_id="auth0|organizer",
        email="org@example.com",
        full_name="Olive Organizer",
        role="organizer",
    )


@pytest.fixture
def attendee(db):
    return PlatformUser.objects.create(
        auth0_id="auth0|attendee",
        email="att@example.com",
        full_name="Andy Attendee",
        role="attendee",
    )


@pytest.fixture
def sign_in_as(client):
    """Sign the default test client in as any user or raw identity."""

    def _sign_in(user=None, **identity):
        return sign_in(client, user, **identity)

    return _sign_in


@pytest.fixture
def logged_in_admin_client(client, platform_admin):
    return sign_in(client, platform_admin)


@pytest.fixture
def category(db):
    return Category.objects.create(name="Music", slug="music")


@pytest.fixture
def event(organizer, category):
    event = Event.objects.create(
        organizer=organizer,
        title="Jazz Night",
        slug="jazz-night",
        category=category,
        start_at=timezone.now() + timedelta(days=10),
        venue_name="Massey Hall",
        city="Toronto",
        status="published",
        currency="cad",
        total_capacity=100,
    )
    EventOccurrence.objects.create(event=event, starts_at=event.start_at)
    return event


@pytest.fixture
def tier(event):
    return TicketTier.objects.create(
        event=event,
        name="General",
        price=Decimal("40.00"),
        currency="cad",
        initial_quantity=10,
        remaining_quantity=10,
    )


@pytest.fixture
def make_order(event, attendee):
    """Factory for orders, backdating ``created_at`` when asked."""

    def _make(
        total="100.00",
        fee="5.00",
        status="completed",
        created_at=None,
        order_event=None,
        currency="cad",
        **extra,
    ):
        total, fee = Decimal(total), Decimal(fee)
        order = Order.objects.create(
            buyer=extra.pop("buyer", attendee),
            event=order_event or event,
            total_amount=total,
            platform_fee_amount=fee,
            organizer_payout_amount=total - fee,
            currency=currency,
            status=status,
            **extra,
        )
        if created_at is not None:
            Order.objects.filter(id=order.id).update(created_at=created_at)
            order.refresh_from_db()
        return order

    return _make


@pytest.fixture
def paid_order(make_order, tier):
    """A completed order with one line item and two valid tickets."""
    order = make_order(total="80.00", fee="4.00", buyer_email="att@example.com")
    OrderItem.objects.create(
        order=order, tier=tier, quantity=2, unit_price=tier.price, subtotal=Decimal("80.00")
    )
    for _ in range(2):
        Ticket.objects.create(
            event=order.event,
            tier=tier,
            order=order,
            holder=order.buyer,
            attendee_name="Andy Attendee",
            attendee_email="att@example.com",
        )
    tier.remaining_quantity -= 2
    tier.save()
    order.event.total_tickets_sold += 2
    order.event.save()
    return order
