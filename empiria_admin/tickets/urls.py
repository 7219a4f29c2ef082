from django.urls import path

from . import views

app_name = "tickets"

urlpatterns = [
    path("", views.ticket_list, name="ticket_list"),
    path("<uuid:ticket_id>/status/", views.ticket_update_status, name="ticket_update_status"),
    path("<uuid:ticket_id>/reissue/", views.reissue_ticket, name="reissue_ticket"),
    path("<uuid:ticket_id>/send/", views.send_tickets, name="send_tickets"),
    # Manual issuance is scoped to an event
    path("issue/<uuid:event_id>/", views.issue_tickets, name="issue_tickets"),
]
