import uuid

import pytest
from django.urls import reverse

from accounts.models import PlatformUser

pytestmark = pytest.mark.django_db


def test_user_list_renders_rows(logged_in_admin_client, attendee, organizer):
    response = logged_in_admin_client.get(reverse("accounts:user_list"))

    assert response.status_code == 200
    assert "accounts/user_list.html" in [t.name for t in response.templates]
    assert response.context["users"].total == 3
    assert b"att@example.com" in response.content


def test_user_list_filters_by_role(logged_in_admin_client, attendee, organizer):
    response = logged_in_admin_client.get(reverse("accounts:user_list"), {"role": "organizer"})
    assert [u.email for u in response.context["users"].rows] == ["org@example.com"]


def test_user_list_invalid_role_filter_is_ignored(logged_in_admin_client, attendee):
    response = logged_in_admin_client.get(reverse("accounts:user_list"), {"role": "wizard"})
    assert response.status_code == 200
    assert response.context["users"].total == 2


def test_user_list_invalid_role_keeps_search(logged_in_admin_client, attendee):
    response = logged_in_admin_client.get(
        reverse("accounts:user_list"), {"role": "wizard", "search": "andy"}
    )
    assert [u.email for u in response.context["users"].rows] == ["att@example.com"]


def test_user_detail(logged_in_admin_client, organizer, event):
    response = logged_in_admin_client.get(reverse("accounts:user_detail", args=[organizer.id]))

    assert response.status_code == 200
    assert response.context["user_row"] == organizer
    assert response.context["events"] == [event]
    assert b"Jazz Night" in response.content


def test_user_detail_unknown_user_is_404(logged_in_admin_client):
    response = logged_in_admin_client.get(reverse("accounts:user_detail", args=[uuid.uuid4()]))
    assert response.status_code == 404


def test_update_role(logged_in_admin_client, attendee):
    url = reverse("accounts:user_update_role", args=[attendee.id])
    response = logged_in_admin_client.post(url, {"role": "organizer"})

    assert response.status_code == 302
    attendee.refresh_from_db()
    assert attendee.role == "organizer"


def test_update_role_rejects_invalid_choice(logged_in_admin_client, attendee):
    url = reverse("accounts:user_update_role", args=[attendee.id])
    response = logged_in_admin_client.post(url, {"role": "root"}, follow=True)

    attendee.refresh_from_db()
    assert attendee.role == "attendee"
    assert "Please pick a valid role." in [str(m) for m in response.context["messages"]]


def test_update_role_requires_post(logged_in_admin_client, attendee):
    url = reverse("accounts:user_update_role", args=[attendee.id])
    assert logged_in_admin_client.get(url).status_code == 405


def test_soft_delete(logged_in_admin_client, attendee):
    url = reverse("accounts:user_soft_delete", args=[attendee.id])
    response = logged_in_admin_client.post(url)

    assert response.status_code == 302
    assert response["Location"] == reverse("accounts:user_list")
    attendee.refresh_from_db()
    assert attendee.deleted_at is not None


def test_admin_cannot_delete_themselves(logged_in_admin_client, platform_admin):
    url = reverse("accounts:user_soft_delete", args=[platform_admin.id])
    logged_in_admin_client.post(url)

    assert PlatformUser.objects.get(id=platform_admin.id).deleted_at is None
