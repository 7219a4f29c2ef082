# orders/services.py
import logging

from django.db.models import Q
from django.shortcuts import get_object_or_404

from dashboard.pagination import paginate
from tickets.models import Ticket

from .models import Order, OrderItem, ORDER_STATUS_CHOICES

logger = logging.getLogger(__name__)

VALID_ORDER_STATUSES = {value for value, _ in ORDER_STATUS_CHOICES}


def get_orders(status=None, search=None, page=1, limit=None):
    """Newest first; search matches the Stripe payment-intent or checkout-session id."""
    queryset = Order.objects.select_related("event", "buyer").order_by("-created_at")
    if status:
        queryset = queryset.filter(status=status)
    if search:
        queryset = queryset.filter(
            Q(stripe_payment_intent_id__icontains=search)
            | Q(stripe_checkout_session_id__icontains=search)
        )
    return paginate(queryset, page, limit)


def get_recent_orders(limit=5):
    return list(
        Order.objects.select_related("event", "buyer").order_by("-created_at")[:limit]
    )


def get_order_by_id(order_id):
    """The order with event and buyer, its line items with tier, and its tickets."""
    order = get_object_or_404(Order.objects.select_related("event", "buyer"), id=order_id)
    items = list(OrderItem.objects.filter(order=order).select_related("tier"))
    tickets = list(
        Ticket.objects.filter(order=order).select_related("tier").order_by("created_at")
    )
    return order, items, tickets


def update_order_status(order_id, status):
    if status not in VALID_ORDER_STATUSES:
        raise ValueError(f"Unknown order status: {status}")
    order = get_object_or_404(Order, id=order_id)
    order.status = status
    order.save(update_fields=["status", "updated_at"])
    logger.info("Order %s status set to %s", order_id, status)
    return order
