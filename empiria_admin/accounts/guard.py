from functools import wraps
from urllib.parse import urlencode

from django.shortcuts import redirect, resolve_url
from django.conf import settings

from .models import PlatformUser

SESSION_IDENTITY_KEY = "idp_user"


class AdminRedirect(Exception):
    """Carries the redirect the guard wants to issue."""

    def __init__(self, url):
        super().__init__(url)
        self.url = url


def get_session_identity(request):
    """The identity-provider claims stored at login, or None."""
    identity = request.session.get(SESSION_IDENTITY_KEY)
    if not identity or not identity.get("sub"):
        return None
    return identity


def get_session_user(request):
    """
    Non-redirecting lookup of the signed-in platform user.
    Returns None when there is no session, no row, or the row is soft-deleted.
    """
    identity = get_session_identity(request)
    if identity is None:
        return None
    return PlatformUser.objects.filter(
        auth0_id=identity["sub"], deleted_at__isnull=True
    ).first()


def require_admin(request):
    """
    Verify the current session belongs to a platform admin.

    - Not logged in -> AdminRedirect to the login page (with ``next``)
    - Logged in but no live users row -> AdminRedirect to /unauthorized
    - Logged in but role != admin -> AdminRedirect to /unauthorized
    - Admin -> the PlatformUser row
    """
    if get_session_identity(request) is None:
        login_url = resolve_url(settings.LOGIN_URL)
        raise AdminRedirect(f"{login_url}?{urlencode({'next': request.get_full_path()})}")

    user = get_session_user(request)
    if user is None or not user.is_admin:
        raise AdminRedirect(resolve_url("accounts:unauthorized"))
    return user


def admin_required(view_func):
    """View decorator: run the admin guard and expose the row as request.admin_user."""

    @wraps(view_func)
    def _wrapped_view(request, *args, **kwargs):
        try:
            request.admin_user = require_admin(request)
        except AdminRedirect as exc:
            return redirect(exc.url)
        return view_func(request, *args, **kwargs)

    return _wrapped_view
