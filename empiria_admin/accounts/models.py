import uuid

from django.db import models

ROLE_CHOICES = (
    ("attendee", "Attendee"),
    ("organizer", "Organizer"),
    ("non_profit", "Non-profit"),
    ("admin", "Admin"),
)

ADMIN_ROLE = "admin"


class PlatformUser(models.Model):
    """
    A row of the platform-wide ``users`` table.

    Rows are created by the customer-facing apps on first sign-in; the admin
    dashboard only reads them and changes role or soft-deletes.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    auth0_id = models.CharField(max_length=255, unique=True)
    email = models.EmailField()
    full_name = models.CharField(max_length=255, blank=True, null=True)
    phone = models.CharField(max_length=50, blank=True, null=True)
    avatar_url = models.URLField(max_length=500, blank=True, null=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default="attendee")
    profile_data = models.JSONField(default=dict, blank=True)
    settings = models.JSONField(default=dict, blank=True)
    interests = models.JSONField(default=list, blank=True)
    stripe_account_id = models.CharField(max_length=255, blank=True, null=True)
    stripe_onboarding_completed = models.BooleanField(default=False)
    default_currency = models.CharField(max_length=3, default="cad")
    last_sign_in_at = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        db_table = "users"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.display_name} ({self.role})"

    @property
    def display_name(self):
        return self.full_name or self.email

    @property
    def is_admin(self):
        return self.role == ADMIN_ROLE

    @property
    def is_deleted(self):
        return self.deleted_at is not None
