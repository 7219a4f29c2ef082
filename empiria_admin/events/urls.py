from django.urls import path

from . import views

app_name = "events"
urlpatterns = [
    path("events/", views.event_list, name="event_list"),
    path("events/<uuid:event_id>/", views.event_detail, name="event_detail"),
    path(
        "events/<uuid:event_id>/status/",
        views.event_update_status,
        name="event_update_status",
    ),
    path(
        "events/<uuid:event_id>/featured/",
        views.event_toggle_featured,
        name="event_toggle_featured",
    ),
    path("events/<uuid:event_id>/fee/", views.event_update_fee, name="event_update_fee"),
    path("categories/", views.category_list, name="category_list"),
    path(
        "categories/<uuid:category_id>/active/",
        views.category_toggle_active,
        name="category_toggle_active",
    ),
]
