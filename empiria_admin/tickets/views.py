from django.contrib import messages
from django.shortcuts import get_object_or_404, redirect, render
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_POST

from accounts.guard import admin_required
from events.models import Event

from . import services
from .forms import (
    IssueTicketsForm,
    ReissueTicketForm,
    SendTicketsForm,
    TicketFilterForm,
    TicketStatusForm,
)
from .models import Ticket, TicketTier


def _form_errors(form):
    return "; ".join(
        f"{field.replace('_', ' ')}: {' '.join(errors)}"
        for field, errors in form.errors.items()
    )


@admin_required
def ticket_list(request):
    form = TicketFilterForm(request.GET or None)
    status = search = None
    if form.is_bound:
        # Invalid fields drop out of cleaned_data; the valid ones still filter.
        form.full_clean()
        status = form.cleaned_data.get("status") or None
        search = form.cleaned_data.get("search") or None

    tickets = services.get_tickets(status=status, search=search, page=request.GET.get("page"))
    return render(
        request,
        "tickets/ticket_list.html",
        {
            "tickets": tickets,
            "filter_form": form,
            "status_choices": TicketStatusForm.base_fields["status"].choices,
        },
    )


@require_POST
@admin_required
def ticket_update_status(request, ticket_id):
    form = TicketStatusForm(request.POST)
    if form.is_valid():
        ticket = services.update_ticket_status(ticket_id, form.cleaned_data["status"])
        messages.success(request, f"Ticket {ticket.short_id} marked as {ticket.status}.")
    else:
        messages.error(request, "Invalid ticket status.")
    return_to = request.POST.get("return_to")
    if return_to and url_has_allowed_host_and_scheme(
        return_to, allowed_hosts={request.get_host()}
    ):
        return redirect(return_to)
    return redirect("tickets:ticket_list")


@require_POST
@admin_required
def issue_tickets(request, event_id):
    event = get_object_or_404(Event, id=event_id)
    tiers = list(TicketTier.objects.filter(event=event).order_by("price"))
    form = IssueTicketsForm(request.POST, tiers=tiers)
    if not form.is_valid():
        messages.error(request, f"Could not issue tickets. {_form_errors(form)}")
        return redirect("events:event_detail", event_id=event_id)

    data = form.cleaned_data
    try:
        order, tickets = services.issue_tickets(
            admin=request.admin_user,
            event_id=event.id,
            tier_id=data["tier"],
            quantity=data["quantity"],
            attendee_name=data["attendee_name"].strip(),
            attendee_email=data["attendee_email"].strip(),
            reason=data["reason"].strip(),
            is_free=data["is_free"],
        )
    except services.TicketingError as exc:
        messages.error(request, str(exc))
        return redirect("events:event_detail", event_id=event_id)

    messages.success(
        request, f"Issued {len(tickets)} ticket(s) on order {order.short_id}."
    )

    if data["send_email"]:
        try:
            sent = services.send_tickets_to_email(
                [t.id for t in tickets], data["attendee_email"], data["attendee_name"]
            )
            messages.success(request, f"Email sent with {sent} ticket(s).")
        except services.TicketingError as exc:
            messages.warning(request, f"Tickets issued, but the email failed: {exc}")

    return redirect("events:event_detail", event_id=event_id)


@require_POST
@admin_required
def reissue_ticket(request, ticket_id):
    ticket = get_object_or_404(Ticket, id=ticket_id)
    form = ReissueTicketForm(request.POST)
    if not form.is_valid():
        messages.error(request, f"Could not reissue ticket. {_form_errors(form)}")
        return redirect("events:event_detail", event_id=ticket.event_id)

    data = form.cleaned_data
    new_name = data["new_attendee_name"].strip()
    new_email = data["new_attendee_email"].strip()
    try:
        new_ticket = services.reissue_ticket(
            admin=request.admin_user,
            order_id=data["order_id"],
            old_ticket_id=ticket.id,
            new_attendee_name=new_name,
            new_attendee_email=new_email,
            reason=data["reason"].strip(),
        )
    except services.TicketingError as exc:
        messages.error(request, str(exc))
        return redirect("events:event_detail", event_id=ticket.event_id)

    # The reissue stands even if the email does not go out.
    try:
        services.send_tickets_to_email([new_ticket.id], new_email, new_name)
    except services.TicketingError as exc:
        messages.warning(request, f"Ticket reissued (email failed: {exc})")
    else:
        messages.success(request, f"Ticket reissued and sent to {new_email}")

    return redirect("events:event_detail", event_id=ticket.event_id)


@require_POST
@admin_required
def send_tickets(request, ticket_id):
    ticket = get_object_or_404(Ticket, id=ticket_id)
    form = SendTicketsForm(request.POST)
    if not form.is_valid():
        messages.error(request, f"Could not send email. {_form_errors(form)}")
        return redirect("events:event_detail", event_id=ticket.event_id)

    try:
        sent = services.send_tickets_to_email(
            [ticket.id],
            form.cleaned_data["recipient_email"].strip(),
            form.cleaned_data["recipient_name"].strip(),
        )
    except services.TicketingError as exc:
        messages.error(request, str(exc))
    else:
        messages.success(request, f"Email sent with {sent} ticket(s).")
    return redirect("events:event_detail", event_id=ticket.event_id)
