from django.contrib import messages
from django.shortcuts import redirect, render
from django.views.decorators.http import require_POST

from accounts.guard import admin_required
from tickets.models import TICKET_STATUS_CHOICES

from . import services
from .forms import OrderFilterForm, OrderStatusForm


@admin_required
def order_list(request):
    form = OrderFilterForm(request.GET or None)
    status = search = None
    if form.is_bound:
        # Invalid fields drop out of cleaned_data; the valid ones still filter.
        form.full_clean()
        status = form.cleaned_data.get("status") or None
        search = form.cleaned_data.get("search") or None

    orders = services.get_orders(status=status, search=search, page=request.GET.get("page"))
    return render(
        request,
        "orders/order_list.html",
        {"orders": orders, "filter_form": form},
    )


@admin_required
def order_detail(request, order_id):
    order, items, tickets = services.get_order_by_id(order_id)
    return render(
        request,
        "orders/order_detail.html",
        {
            "order": order,
            "items": items,
            "tickets": tickets,
            "status_choices": OrderStatusForm.base_fields["status"].choices,
            "ticket_status_choices": TICKET_STATUS_CHOICES,
        },
    )


@require_POST
@admin_required
def order_update_status(request, order_id):
    form = OrderStatusForm(request.POST)
    if form.is_valid():
        order = services.update_order_status(order_id, form.cleaned_data["status"])
        messages.success(request, f"Order {order.short_id} marked as {order.status}.")
    else:
        messages.error(request, "Invalid order status.")
    return redirect("orders:order_detail", order_id=order_id)
