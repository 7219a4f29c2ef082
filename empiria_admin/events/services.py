# events/services.py
import logging
from decimal import Decimal

from django.db import IntegrityError, transaction
from django.shortcuts import get_object_or_404
from django.utils.text import slugify

from dashboard.pagination import paginate
from orders.models import Order
from tickets.models import Ticket, TicketTier

from .models import Category, Event, EVENT_STATUS_CHOICES

logger = logging.getLogger(__name__)

VALID_EVENT_STATUSES = {value for value, _ in EVENT_STATUS_CHOICES}


class CategoryError(ValueError):
    """User-facing problem creating or changing a category."""


# --- Events -----------------------------------------------------------------


def get_events(status=None, search=None, page=1, limit=None):
    """Live events, newest first, with organizer and occurrences joined."""
    queryset = (
        Event.objects.filter(deleted_at__isnull=True)
        .select_related("organizer", "category")
        .prefetch_related("occurrences")
        .order_by("-created_at")
    )
    if status:
        queryset = queryset.filter(status=status)
    if search:
        queryset = queryset.filter(title__icontains=search)
    return paginate(queryset, page, limit)


def get_event_by_id(event_id):
    """The event with organizer, its tiers by price and its 20 newest orders."""
    event = get_object_or_404(
        Event.objects.select_related("organizer", "category").prefetch_related(
            "occurrences"
        ),
        id=event_id,
    )
    tiers = list(TicketTier.objects.filter(event=event).order_by("price"))
    orders = list(
        Order.objects.filter(event=event)
        .select_related("buyer")
        .order_by("-created_at")[:20]
    )
    return event, tiers, orders


def get_event_tickets(event, limit=200):
    return list(
        Ticket.objects.filter(event=event)
        .select_related("tier", "order")
        .order_by("-created_at")[:limit]
    )


def _update_event(event_id, **fields):
    event = get_object_or_404(Event, id=event_id)
    for name, value in fields.items():
        setattr(event, name, value)
    event.save(update_fields=list(fields) + ["updated_at"])
    return event


def update_event_status(event_id, status):
    if status not in VALID_EVENT_STATUSES:
        raise ValueError(f"Unknown event status: {status}")
    event = _update_event(event_id, status=status)
    logger.info("Event %s status set to %s", event_id, status)
    return event


def toggle_event_featured(event_id, is_featured):
    event = _update_event(event_id, is_featured=bool(is_featured))
    logger.info("Event %s featured=%s", event_id, event.is_featured)
    return event


def update_platform_fee(event_id, fee_percent, fee_fixed):
    fee_percent = Decimal(fee_percent)
    fee_fixed = Decimal(fee_fixed)
    if not Decimal("0") <= fee_percent <= Decimal("100"):
        raise ValueError("Platform fee percent must be between 0 and 100")
    if fee_fixed < 0:
        raise ValueError("Fixed platform fee cannot be negative")
    event = _update_event(
        event_id, platform_fee_percent=fee_percent, platform_fee_fixed=fee_fixed
    )
    logger.info("Event %s platform fee set to %s%% + %s", event_id, fee_percent, fee_fixed)
    return event


# --- Categories -------------------------------------------------------------


def get_categories():
    return list(Category.objects.order_by("name"))


def create_category(name, slug=None):
    name = (name or "").strip()
    if not name:
        raise CategoryError("Category name is required.")
    slug = slugify(slug or name)
    if not slug:
        raise CategoryError("Category slug cannot be empty.")
    if Category.objects.filter(slug=slug).exists():
        raise CategoryError(f'A category with slug "{slug}" already exists.')
    try:
        with transaction.atomic():
            category = Category.objects.create(name=name, slug=slug)
    except IntegrityError as exc:
        raise CategoryError(f'A category with slug "{slug}" already exists.') from exc
    logger.info("Category %s created", slug)
    return category


def toggle_category_active(category_id, is_active):
    category = get_object_or_404(Category, id=category_id)
    category.is_active = bool(is_active)
    category.save(update_fields=["is_active"])
    return category
