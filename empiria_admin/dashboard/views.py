from django.shortcuts import redirect, render

from accounts.guard import admin_required
from orders.services import get_recent_orders

from . import services


def index(request):
    return redirect("dashboard:overview")


@admin_required
def overview(request):
    days = 30
    series = services.get_revenue_time_series(days)
    return render(
        request,
        "dashboard/overview.html",
        {
            "kpis": services.get_dashboard_kpis(),
            "chart": services.chart_payload(series),
            "chart_days": days,
            "recent_orders": get_recent_orders(5),
        },
    )


@admin_required
def revenue(request):
    days = 90
    series = services.get_revenue_time_series(days)
    return render(
        request,
        "dashboard/revenue.html",
        {
            "kpis": services.get_dashboard_kpis(),
            "chart": services.chart_payload(series),
            "chart_days": days,
            "by_event": services.get_revenue_by_event(),
        },
    )


def permission_denied_view(request, exception):
    message = str(exception) or "You do not have permission to access this page."
    return render(request, "dashboard/403.html", {"error_message": message}, status=403)
