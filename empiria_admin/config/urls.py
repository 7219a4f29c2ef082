"""URL configuration for the Empiria admin dashboard."""

from django.urls import include, path

from config.health import health_check
from dashboard import views as dashboard_views

urlpatterns = [
    path("", dashboard_views.index, name="index"),
    path("health/", health_check, name="health_check"),
    path("", include("accounts.urls")),
    path("dashboard/", include("dashboard.urls")),
    path("dashboard/", include("events.urls")),
    path("dashboard/orders/", include("orders.urls")),
    path("dashboard/tickets/", include("tickets.urls")),
]

handler403 = "dashboard.views.permission_denied_view"
