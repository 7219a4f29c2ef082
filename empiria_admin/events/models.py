import uuid

from django.db import models

from accounts.models import PlatformUser

EVENT_STATUS_CHOICES = (
    ("draft", "Draft"),
    ("published", "Published"),
    ("cancelled", "Cancelled"),
    ("completed", "Completed"),
)

SEATING_CHOICES = (
    ("general_admission", "General admission"),
    ("reserved", "Reserved"),
)


class Category(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=120)
    slug = models.SlugField(max_length=140, unique=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "categories"
        ordering = ["name"]
        verbose_name_plural = "categories"

    def __str__(self):
        return self.name


class Event(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    # Events reference their organizer by identity-provider id, not row id.
    organizer = models.ForeignKey(
        PlatformUser,
        to_field="auth0_id",
        db_column="organizer_id",
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="organized_events",
        null=True,
        blank=True,
    )
    title = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True)
    description = models.JSONField(blank=True, null=True)
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        related_name="events",
        null=True,
        blank=True,
    )
    tags = models.JSONField(default=list, blank=True)
    cover_image_url = models.URLField(max_length=500, blank=True, null=True)
    start_at = models.DateTimeField(blank=True, null=True)
    end_at = models.DateTimeField(blank=True, null=True)
    location_type = models.CharField(max_length=30, default="physical")
    venue_name = models.CharField(max_length=255, blank=True, null=True)
    address_text = models.CharField(max_length=500, blank=True, null=True)
    city = models.CharField(max_length=120, blank=True, null=True)
    status = models.CharField(max_length=20, choices=EVENT_STATUS_CHOICES, default="draft")
    seating_type = models.CharField(
        max_length=30, choices=SEATING_CHOICES, default="general_admission"
    )
    is_featured = models.BooleanField(default=False)
    platform_fee_percent = models.DecimalField(max_digits=5, decimal_places=2, default=5)
    platform_fee_fixed = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    currency = models.CharField(max_length=3, default="cad")
    total_capacity = models.PositiveIntegerField(default=0)
    total_tickets_sold = models.PositiveIntegerField(default=0)
    source_app = models.CharField(max_length=120, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        db_table = "events"
        ordering = ["-created_at"]

    def __str__(self):
        return self.title

    @property
    def first_occurrence(self):
        """
        Earliest occurrence that is not cancelled, or None.
        Uses the prefetched ``occurrences`` when available.
        """
        live = [o for o in self.occurrences.all() if not o.is_cancelled]
        return min(live, key=lambda o: o.starts_at) if live else None

    @property
    def starts_at(self):
        occurrence = self.first_occurrence
        return occurrence.starts_at if occurrence else self.start_at

    @property
    def can_publish(self):
        return self.status == "draft"

    @property
    def can_cancel(self):
        return self.status in ("draft", "published")


class EventOccurrence(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="occurrences")
    starts_at = models.DateTimeField()
    ends_at = models.DateTimeField(blank=True, null=True)
    is_cancelled = models.BooleanField(default=False)

    class Meta:
        db_table = "event_occurrences"
        ordering = ["starts_at"]

    def __str__(self):
        return f"{self.event.title} - {self.starts_at:%Y-%m-%d %H:%M}"
