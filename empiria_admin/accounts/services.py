# accounts/services.py
import logging

from django.db.models import Q
from django.shortcuts import get_object_or_404
from django.utils import timezone

from dashboard.pagination import paginate
from events.models import Event
from orders.models import Order

from .models import PlatformUser, ROLE_CHOICES

logger = logging.getLogger(__name__)

VALID_ROLES = {value for value, _ in ROLE_CHOICES}


def get_users(role=None, search=None, page=1, limit=None):
    """Live users, newest first; search matches name or email."""
    queryset = PlatformUser.objects.filter(deleted_at__isnull=True).order_by(
        "-created_at"
    )
    if role:
        queryset = queryset.filter(role=role)
    if search:
        queryset = queryset.filter(
            Q(full_name__icontains=search) | Q(email__icontains=search)
        )
    return paginate(queryset, page, limit)


def get_user_by_id(user_id):
    """The user plus the ten newest events they organize and orders they placed."""
    user = get_object_or_404(PlatformUser, id=user_id)
    events = list(
        Event.objects.filter(organizer=user, deleted_at__isnull=True)
        .prefetch_related("occurrences")
        .order_by("-created_at")[:10]
    )
    orders = list(
        Order.objects.filter(buyer=user)
        .select_related("event")
        .order_by("-created_at")[:10]
    )
    return user, events, orders


def update_user_role(user_id, role):
    if role not in VALID_ROLES:
        raise ValueError(f"Unknown role: {role}")
    updated = PlatformUser.objects.filter(id=user_id).update(
        role=role, updated_at=timezone.now()
    )
    if not updated:
        raise PlatformUser.DoesNotExist(f"User {user_id} not found")
    logger.info("User %s role set to %s", user_id, role)


def soft_delete_user(user_id):
    now = timezone.now()
    updated = PlatformUser.objects.filter(id=user_id).update(
        deleted_at=now, updated_at=now
    )
    if not updated:
        raise PlatformUser.DoesNotExist(f"User {user_id} not found")
    logger.info("User %s soft-deleted", user_id)
