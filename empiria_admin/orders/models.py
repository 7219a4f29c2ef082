import uuid

from django.db import models

from accounts.models import PlatformUser
from events.models import Event
from tickets.models import TicketTier

ORDER_STATUS_CHOICES = (
    ("pending", "Pending"),
    ("completed", "Completed"),
    ("refunded", "Refunded"),
    ("cancelled", "Cancelled"),
)


class Order(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    # Null for orders created by an admin (manual issuance).
    buyer = models.ForeignKey(
        PlatformUser,
        to_field="auth0_id",
        db_column="user_id",
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="orders",
        null=True,
        blank=True,
    )
    event = models.ForeignKey(Event, on_delete=models.PROTECT, related_name="orders")

    # Stripe ids for reconciliation
    stripe_payment_intent_id = models.CharField(max_length=255, blank=True, null=True)
    stripe_checkout_session_id = models.CharField(max_length=255, blank=True, null=True)

    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    platform_fee_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    organizer_payout_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    currency = models.CharField(max_length=3, default="cad")
    payout_breakdown = models.JSONField(default=dict, blank=True)

    status = models.CharField(max_length=20, choices=ORDER_STATUS_CHOICES, default="pending")
    source_app = models.CharField(max_length=120, blank=True, null=True)

    buyer_email = models.EmailField(blank=True, null=True)
    buyer_name = models.CharField(max_length=255, blank=True, null=True)
    notes = models.TextField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]

    def __str__(self):
        return f"Order {self.short_id} ({self.status})"

    @property
    def short_id(self):
        return str(self.id)[:8]

    @property
    def buyer_display(self):
        if self.buyer is not None:
            return self.buyer.display_name
        return self.buyer_name or self.buyer_email or "Guest"

    def append_note(self, note):
        self.notes = f"{self.notes}\n{note}" if self.notes else note


class OrderItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    tier = models.ForeignKey(
        TicketTier, on_delete=models.PROTECT, related_name="order_items"
    )
    quantity = models.PositiveIntegerField(default=1)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    subtotal = models.DecimalField(max_digits=12, decimal_places=2, default=0)

    class Meta:
        db_table = "order_items"

    def __str__(self):
        return f"{self.quantity} x {self.tier.name}"
