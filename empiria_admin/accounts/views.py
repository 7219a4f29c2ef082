# accounts/views.py
import logging
import secrets

from django.contrib import messages
from django.shortcuts import redirect, render
from django.urls import reverse
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_POST
from django.conf import settings

from . import auth0, services
from .forms import UserFilterForm, UserRoleForm
from .guard import SESSION_IDENTITY_KEY, admin_required, get_session_identity, get_session_user
from .models import PlatformUser

logger = logging.getLogger(__name__)

STATE_SESSION_KEY = "oidc_state"
NEXT_SESSION_KEY = "oidc_next"


def _callback_uri(request):
    return request.build_absolute_uri(reverse("accounts:callback"))


def _safe_next(request, next_url):
    if next_url and url_has_allowed_host_and_scheme(
        next_url, allowed_hosts={request.get_host()}
    ):
        return next_url
    return reverse(settings.LOGIN_REDIRECT_URL)


# --- Identity provider flow -------------------------------------------------


def login(request):
    state = secrets.token_urlsafe(32)
    request.session[STATE_SESSION_KEY] = state
    request.session[NEXT_SESSION_KEY] = _safe_next(request, request.GET.get("next"))
    try:
        url = auth0.authorize_url(_callback_uri(request), state)
    except auth0.Auth0Error as exc:
        logger.error("Cannot start login: %s", exc)
        return render(request, "accounts/login_error.html", {"error": str(exc)}, status=503)
    return redirect(url)


def callback(request):
    expected_state = request.session.pop(STATE_SESSION_KEY, None)
    next_url = request.session.pop(NEXT_SESSION_KEY, None)

    if request.GET.get("error"):
        logger.warning(
            "Identity provider returned an error: %s", request.GET.get("error_description")
        )
        return render(
            request,
            "accounts/login_error.html",
            {"error": request.GET.get("error_description") or request.GET["error"]},
            status=400,
        )

    state = request.GET.get("state")
    code = request.GET.get("code")
    if not expected_state or state != expected_state or not code:
        logger.warning("Login callback with missing code or mismatched state")
        return render(
            request,
            "accounts/login_error.html",
            {"error": "Your sign-in link expired. Please try again."},
            status=400,
        )

    try:
        tokens = auth0.exchange_code(code, _callback_uri(request))
        claims = auth0.decode_id_token(tokens["id_token"])
    except auth0.Auth0Error:
        logger.exception("Login callback failed")
        return render(
            request,
            "accounts/login_error.html",
            {"error": "We could not verify your sign-in. Please try again."},
            status=400,
        )

    request.session.cycle_key()
    request.session[SESSION_IDENTITY_KEY] = {
        "sub": claims["sub"],
        "email": claims.get("email", ""),
        "name": claims.get("name", ""),
    }
    logger.info("Signed in %s", claims["sub"])
    return redirect(_safe_next(request, next_url))


def logout(request):
    request.session.flush()
    try:
        return redirect(auth0.logout_url(settings.APP_BASE_URL))
    except auth0.Auth0Error:
        return redirect("/")


def unauthorized(request):
    identity = get_session_identity(request)
    platform_user = get_session_user(request)
    return render(
        request,
        "accounts/unauthorized.html",
        {"identity": identity, "platform_user": platform_user},
        status=403,
    )


# --- Users ------------------------------------------------------------------


@admin_required
def user_list(request):
    form = UserFilterForm(request.GET or None)
    role = search = None
    if form.is_bound:
        form.full_clean()
        role = form.cleaned_data.get("role") or None
        search = form.cleaned_data.get("search") or None

    users = services.get_users(role=role, search=search, page=request.GET.get("page"))
    return render(
        request,
        "accounts/user_list.html",
        {"users": users, "filter_form": form},
    )


@admin_required
def user_detail(request, user_id):
    user, events, orders = services.get_user_by_id(user_id)
    return render(
        request,
        "accounts/user_detail.html",
        {
            "user_row": user,
            "events": events,
            "orders": orders,
            "role_choices": UserRoleForm.base_fields["role"].choices,
        },
    )


@require_POST
@admin_required
def user_update_role(request, user_id):
    form = UserRoleForm(request.POST)
    if not form.is_valid():
        messages.error(request, "Please pick a valid role.")
        return redirect("accounts:user_detail", user_id=user_id)
    try:
        services.update_user_role(user_id, form.cleaned_data["role"])
    except PlatformUser.DoesNotExist:
        messages.error(request, "User not found.")
        return redirect("accounts:user_list")
    messages.success(request, f"Role updated to {form.cleaned_data['role']}.")
    return redirect("accounts:user_detail", user_id=user_id)


@require_POST
@admin_required
def user_soft_delete(request, user_id):
    if str(request.admin_user.id) == str(user_id):
        messages.error(request, "You cannot delete your own account.")
        return redirect("accounts:user_detail", user_id=user_id)
    try:
        services.soft_delete_user(user_id)
    except PlatformUser.DoesNotExist:
        messages.error(request, "User not found.")
        return redirect("accounts:user_list")
    messages.success(request, "User deleted.")
    return redirect("accounts:user_list")
