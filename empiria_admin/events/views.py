from django.contrib import messages
from django.shortcuts import redirect, render
from django.views.decorators.http import require_POST

from accounts.guard import admin_required
from tickets.forms import IssueTicketsForm

from . import services
from .forms import (
    CategoryActiveForm,
    CategoryForm,
    EventFeatureForm,
    EventFilterForm,
    EventStatusForm,
    PlatformFeeForm,
)


# --- Events -----------------------------------------------------------------


@admin_required
def event_list(request):
    form = EventFilterForm(request.GET or None)
    status = search = None
    if form.is_bound:
        # Invalid fields drop out of cleaned_data; the valid ones still filter.
        form.full_clean()
        status = form.cleaned_data.get("status") or None
        search = form.cleaned_data.get("search") or None

    events = services.get_events(status=status, search=search, page=request.GET.get("page"))
    return render(
        request,
        "events/event_list.html",
        {"events": events, "filter_form": form},
    )


@admin_required
def event_detail(request, event_id):
    event, tiers, orders = services.get_event_by_id(event_id)
    tickets = services.get_event_tickets(event)
    return render(
        request,
        "events/event_detail.html",
        {
            "event": event,
            "tiers": tiers,
            "orders": orders,
            "tickets": tickets,
            "fee_form": PlatformFeeForm(
                initial={
                    "platform_fee_percent": event.platform_fee_percent,
                    "platform_fee_fixed": event.platform_fee_fixed,
                }
            ),
            "issue_form": IssueTicketsForm(tiers=tiers),
        },
    )


@require_POST
@admin_required
def event_update_status(request, event_id):
    form = EventStatusForm(request.POST)
    if form.is_valid():
        event = services.update_event_status(event_id, form.cleaned_data["status"])
        messages.success(request, f"Event marked as {event.status}.")
    else:
        messages.error(request, "Invalid event status.")
    return redirect("events:event_detail", event_id=event_id)


@require_POST
@admin_required
def event_toggle_featured(request, event_id):
    form = EventFeatureForm(request.POST)
    if form.is_valid():
        event = services.toggle_event_featured(event_id, form.cleaned_data["is_featured"])
        messages.success(
            request, "Event featured." if event.is_featured else "Event unfeatured."
        )
    else:
        messages.error(request, "Invalid feature flag.")
    if request.POST.get("next") == "list":
        return redirect("events:event_list")
    return redirect("events:event_detail", event_id=event_id)


@require_POST
@admin_required
def event_update_fee(request, event_id):
    form = PlatformFeeForm(request.POST)
    if form.is_valid():
        services.update_platform_fee(
            event_id,
            form.cleaned_data["platform_fee_percent"],
            form.cleaned_data["platform_fee_fixed"],
        )
        messages.success(request, "Platform fee updated.")
    else:
        messages.error(request, "Please enter a fee between 0 and 100% and a non-negative fixed amount.")
    return redirect("events:event_detail", event_id=event_id)


# --- Categories -------------------------------------------------------------


@admin_required
def category_list(request):
    if request.method == "POST":
        form = CategoryForm(request.POST)
        if form.is_valid():
            try:
                category = services.create_category(
                    form.cleaned_data["name"], form.cleaned_data["slug"]
                )
            except services.CategoryError as exc:
                messages.error(request, str(exc))
            else:
                messages.success(request, f'Category "{category.name}" created.')
                return redirect("events:category_list")
        else:
            messages.error(request, "Please fix the errors below.")
    else:
        form = CategoryForm()

    return render(
        request,
        "events/category_list.html",
        {"categories": services.get_categories(), "form": form},
    )


@require_POST
@admin_required
def category_toggle_active(request, category_id):
    form = CategoryActiveForm(request.POST)
    if form.is_valid():
        category = services.toggle_category_active(category_id, form.cleaned_data["is_active"])
        state = "activated" if category.is_active else "deactivated"
        messages.success(request, f'Category "{category.name}" {state}.')
    else:
        messages.error(request, "Invalid category flag.")
    return redirect("events:category_list")
