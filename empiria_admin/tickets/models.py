import secrets
import uuid

from django.db import models

from accounts.models import PlatformUser
from events.models import Event

TICKET_STATUS_CHOICES = (
    ("valid", "Valid"),
    ("used", "Used"),
    ("cancelled", "Cancelled"),
    ("expired", "Expired"),
)


def new_qr_secret():
    return secrets.token_urlsafe(24)


class TicketTier(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, related_name="tiers", on_delete=models.CASCADE)
    name = models.CharField(max_length=120)
    description = models.TextField(blank=True, null=True)
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    currency = models.CharField(max_length=3, blank=True, default="")
    initial_quantity = models.PositiveIntegerField(default=0)
    remaining_quantity = models.IntegerField(default=0)
    max_per_order = models.PositiveIntegerField(default=10)
    sales_start_at = models.DateTimeField(blank=True, null=True)
    sales_end_at = models.DateTimeField(blank=True, null=True)
    is_hidden = models.BooleanField(default=False)

    class Meta:
        db_table = "ticket_tiers"
        ordering = ["price"]

    def __str__(self):
        return f"{self.event.title} - {self.name}"

    @property
    def sold(self):
        return self.initial_quantity - self.remaining_quantity

    @property
    def effective_currency(self):
        return self.currency or self.event.currency or "cad"


class Ticket(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, related_name="tickets", on_delete=models.CASCADE)
    tier = models.ForeignKey(TicketTier, related_name="tickets", on_delete=models.PROTECT)
    order = models.ForeignKey(
        "orders.Order",
        related_name="tickets",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
    )
    holder = models.ForeignKey(
        PlatformUser,
        to_field="auth0_id",
        db_column="user_id",
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="tickets",
        null=True,
        blank=True,
    )
    attendee_name = models.CharField(max_length=255, blank=True, null=True)
    attendee_email = models.EmailField(blank=True, null=True)
    qr_code_secret = models.CharField(max_length=160, unique=True, default=new_qr_secret)
    status = models.CharField(max_length=20, choices=TICKET_STATUS_CHOICES, default="valid")
    seat_label = models.CharField(max_length=40, blank=True, null=True)
    purchase_date = models.DateTimeField(auto_now_add=True)
    created_at = models.DateTimeField(auto_now_add=True)
    issued_by = models.CharField(
        max_length=255,
        blank=True,
        null=True,
        help_text="auth0 id of the admin who issued the ticket manually.",
    )
    issue_reason = models.TextField(blank=True, null=True)
    original_ticket = models.ForeignKey(
        "self",
        related_name="reissues",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
    )

    class Meta:
        db_table = "tickets"
        ordering = ["-purchase_date"]

    def __str__(self):
        return f"Ticket {self.short_id} ({self.status})"

    @property
    def short_id(self):
        return str(self.id)[:8]

    @property
    def is_valid(self):
        return self.status == "valid"
