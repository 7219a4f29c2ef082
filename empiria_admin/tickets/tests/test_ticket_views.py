from unittest.mock import patch

import pytest
from django.urls import reverse

from tickets.models import Ticket

pytestmark = pytest.mark.django_db


def _messages(response):
    return [str(m) for m in response.context["messages"]]


def test_ticket_list_search(logged_in_admin_client, paid_order):
    response = logged_in_admin_client.get(reverse("tickets:ticket_list"), {"search": "andy"})

    assert response.status_code == 200
    assert response.context["tickets"].total == 2

    response = logged_in_admin_client.get(reverse("tickets:ticket_list"), {"search": "nobody"})
    assert response.context["tickets"].total == 0


def test_ticket_list_status_filter(logged_in_admin_client, paid_order):
    paid_order.tickets.update(status="used")
    response = logged_in_admin_client.get(reverse("tickets:ticket_list"), {"status": "valid"})
    assert response.context["tickets"].total == 0


def test_ticket_list_invalid_status_keeps_search(logged_in_admin_client, paid_order):
    response = logged_in_admin_client.get(
        reverse("tickets:ticket_list"), {"status": "bogus", "search": "nobody"}
    )
    assert response.context["tickets"].total == 0


def test_ticket_status_returns_to_local_page(logged_in_admin_client, paid_order):
    ticket = paid_order.tickets.first()
    back = reverse("orders:order_detail", args=[paid_order.id])
    response = logged_in_admin_client.post(
        reverse("tickets:ticket_update_status", args=[ticket.id]),
        {"status": "used", "return_to": back},
    )

    assert response["Location"] == back
    ticket.refresh_from_db()
    assert ticket.status == "used"


def test_ticket_status_ignores_offsite_return(logged_in_admin_client, paid_order):
    ticket = paid_order.tickets.first()
    response = logged_in_admin_client.post(
        reverse("tickets:ticket_update_status", args=[ticket.id]),
        {"status": "expired", "return_to": "https://evil.example.com/"},
    )
    assert response["Location"] == reverse("tickets:ticket_list")


def test_issue_view_creates_tickets_and_emails(logged_in_admin_client, event, tier, mailoutbox):
    response = logged_in_admin_client.post(
        reverse("tickets:issue_tickets", args=[event.id]),
        {
            "tier": str(tier.id),
            "quantity": 2,
            "attendee_name": "Sam Sponsor",
            "attendee_email": "sam@example.com",
            "reason": "Sponsor comp",
            "is_free": "on",
            "send_email": "on",
        },
        follow=True,
    )

    assert response.redirect_chain[-1][0] == reverse("events:event_detail", args=[event.id])
    assert Ticket.objects.filter(attendee_email="sam@example.com").count() == 2
    assert len(mailoutbox) == 1
    assert "Email sent with 2 ticket(s)." in _messages(response)


def test_issue_view_reports_refusal(logged_in_admin_client, event, tier):
    response = logged_in_admin_client.post(
        reverse("tickets:issue_tickets", args=[event.id]),
        {
            "tier": str(tier.id),
            "quantity": 50,
            "attendee_name": "Sam",
            "attendee_email": "sam@example.com",
            "reason": "Comp",
        },
        follow=True,
    )

    assert 'Only 10 tickets remaining in "General"' in _messages(response)
    assert Ticket.objects.count() == 0


def test_issue_view_rejects_incomplete_form(logged_in_admin_client, event, tier):
    response = logged_in_admin_client.post(
        reverse("tickets:issue_tickets", args=[event.id]),
        {"tier": str(tier.id), "quantity": 1, "attendee_email": "not-an-email"},
        follow=True,
    )
    assert any(m.startswith("Could not issue tickets.") for m in _messages(response))
    assert Ticket.objects.count() == 0


def test_reissue_view_sends_replacement(logged_in_admin_client, paid_order, mailoutbox):
    old = paid_order.tickets.first()
    response = logged_in_admin_client.post(
        reverse("tickets:reissue_ticket", args=[old.id]),
        {
            "order_id": str(paid_order.id),
            "new_attendee_name": "Rita",
            "new_attendee_email": "rita@example.com",
            "reason": "Transfer",
        },
        follow=True,
    )

    old.refresh_from_db()
    assert old.status == "cancelled"
    assert "Ticket reissued and sent to rita@example.com" in _messages(response)
    assert mailoutbox[0].to == ["rita@example.com"]


def test_reissue_view_keeps_reissue_when_email_fails(logged_in_admin_client, paid_order):
    old = paid_order.tickets.first()
    with patch("tickets.services.EmailMessage.send", side_effect=OSError("smtp down")):
        response = logged_in_admin_client.post(
            reverse("tickets:reissue_ticket", args=[old.id]),
            {
                "order_id": str(paid_order.id),
                "new_attendee_name": "Rita",
                "new_attendee_email": "rita@example.com",
                "reason": "Transfer",
            },
            follow=True,
        )

    assert Ticket.objects.filter(attendee_email="rita@example.com", status="valid").exists()
    assert "Ticket reissued (email failed: smtp down)" in _messages(response)


def test_send_view(logged_in_admin_client, paid_order, mailoutbox):
    ticket = paid_order.tickets.first()
    response = logged_in_admin_client.post(
        reverse("tickets:send_tickets", args=[ticket.id]),
        {"recipient_name": "Andy", "recipient_email": "andy@example.com"},
        follow=True,
    )

    assert "Email sent with 1 ticket(s)." in _messages(response)
    assert mailoutbox[0].to == ["andy@example.com"]
