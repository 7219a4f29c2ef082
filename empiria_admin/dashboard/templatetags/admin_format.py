from decimal import Decimal, InvalidOperation

from django import template
from django.utils import timezone

register = template.Library()

CURRENCIES = {
    "cad": ("CA$", 2),
    "usd": ("$", 2),
    "inr": ("₹", 2),
    "gbp": ("£", 2),
    "eur": ("€", 2),
    "aud": ("A$", 2),
    "nzd": ("NZ$", 2),
    "sgd": ("S$", 2),
    "hkd": ("HK$", 2),
    "jpy": ("¥", 0),
    "mxn": ("MX$", 2),
    "brl": ("R$", 2),
}

STATUS_COLORS = {
    "draft": "secondary",
    "published": "success",
    "cancelled": "danger",
    "completed": "primary",
    "pending": "warning",
    "refunded": "info",
    "valid": "success",
    "used": "primary",
    "expired": "secondary",
    "attendee": "info",
    "organizer": "primary",
    "non_profit": "success",
    "admin": "warning",
    "true": "success",
    "false": "secondary",
}


@register.filter
def currency(amount, code="cad"):
    """
    Usage: {{ order.total_amount|currency:order.currency }}
    Unknown codes fall back to the upper-cased code as prefix.
    """
    code = (code or "cad").lower()
    symbol, decimals = CURRENCIES.get(code, (f"{code.upper()} ", 2))
    try:
        value = Decimal(str(amount if amount is not None else 0))
    except InvalidOperation:
        return amount
    return f"{symbol}{value:,.{decimals}f}"


@register.filter
def currency_symbol(code="cad"):
    code = (code or "cad").lower()
    return CURRENCIES[code][0] if code in CURRENCIES else code.upper()


@register.filter
def short_date(value):
    if not value:
        return "—"
    if hasattr(value, "tzinfo") and timezone.is_aware(value):
        value = timezone.localtime(value)
    return value.strftime("%b %d, %Y").replace(" 0", " ")


@register.filter
def date_time(value):
    if not value:
        return "—"
    value = timezone.localtime(value) if timezone.is_aware(value) else value
    return value.strftime("%b %d, %Y, %H:%M").replace(" 0", " ", 1)


@register.filter
def time_ago(value, now=None):
    if not value:
        return "—"
    now = now or timezone.now()
    seconds = int((now - value).total_seconds())
    if seconds < 60:
        return "just now"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    days = hours // 24
    if days < 30:
        return f"{days}d ago"
    return short_date(value)


@register.filter
def truncate_chars(value, max_length=50):
    value = str(value or "")
    if len(value) <= max_length:
        return value
    return value[:max_length] + "…"


@register.filter
def short_id(value):
    return str(value or "")[:8]


@register.filter
def humanize_status(value):
    return str(value).replace("_", " ")


@register.filter
def status_color(value):
    return STATUS_COLORS.get(str(value).lower(), "secondary")


@register.simple_tag(takes_context=True)
def page_url(context, page):
    """
    Usage: <a href="{% page_url 3 %}">
    Keeps the current filters and swaps the page number.
    """
    request = context["request"]
    params = request.GET.copy()
    params["page"] = page
    return f"{request.path}?{params.urlencode()}"
