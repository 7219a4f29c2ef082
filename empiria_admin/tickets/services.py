# tickets/services.py
import logging
from decimal import Decimal
from io import BytesIO

import qrcode
from django.conf import settings
from django.core.mail import EmailMessage
from django.db import transaction
from django.db.models import Q
from django.shortcuts import get_object_or_404

from dashboard.pagination import paginate
from events.models import Event
from orders.models import Order, OrderItem
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import (
    Image,
    PageBreak,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from .models import Ticket, TicketTier, TICKET_STATUS_CHOICES

logger = logging.getLogger(__name__)

VALID_TICKET_STATUSES = {value for value, _ in TICKET_STATUS_CHOICES}
MANUAL_SOURCE_APP = "admin"


class TicketingError(ValueError):
    """A privileged ticket workflow was refused; the message is user-facing."""


# --- Listing ----------------------------------------------------------------


def get_tickets(status=None, search=None, page=1, limit=None):
    """Newest purchases first; search matches QR secret, attendee email or name."""
    queryset = Ticket.objects.select_related("event", "tier").order_by("-purchase_date")
    if status:
        queryset = queryset.filter(status=status)
    if search:
        queryset = queryset.filter(
            Q(qr_code_secret__icontains=search)
            | Q(attendee_email__icontains=search)
            | Q(attendee_name__icontains=search)
        )
    return paginate(queryset, page, limit)


def update_ticket_status(ticket_id, status):
    if status not in VALID_TICKET_STATUSES:
        raise ValueError(f"Unknown ticket status: {status}")
    ticket = get_object_or_404(Ticket, id=ticket_id)
    ticket.status = status
    ticket.save(update_fields=["status"])
    logger.info("Ticket %s status set to %s", ticket_id, status)
    return ticket


# --- Inventory --------------------------------------------------------------


def _consume_inventory(tier, event, quantity):
    """Take ``quantity`` seats out of the tier and count them as sold."""
    if getattr(settings, "TICKET_INVENTORY_TRIGGER", False):
        # The database trigger on tickets already did this.
        return
    tier.remaining_quantity -= quantity
    tier.save(update_fields=["remaining_quantity"])
    event.total_tickets_sold += quantity
    event.save(update_fields=["total_tickets_sold"])


def _release_inventory(tier, event, quantity):
    tier.remaining_quantity += quantity
    tier.save(update_fields=["remaining_quantity"])
    event.total_tickets_sold = max(0, event.total_tickets_sold - quantity)
    event.save(update_fields=["total_tickets_sold"])


# --- Manual issuance --------------------------------------------------------


def issue_tickets(
    *,
    admin,
    event_id,
    tier_id,
    quantity: int,
    attendee_name: str,
    attendee_email: str,
    reason: str,
    is_free: bool,
):
    """
    Issue ``quantity`` tickets outside the checkout flow.

    Creates a completed order (no buyer, no platform fee) with one line item,
    the tickets themselves, and takes the seats out of the tier inventory.
    Everything happens in one transaction with the tier and event rows locked.

    Returns ``(order, tickets)``. Raises TicketingError on refusal.
    """
    if quantity < 1:
        raise TicketingError("Quantity must be at least 1")

    with transaction.atomic():
        event = Event.objects.select_for_update().filter(id=event_id).first()
        if event is None:
            raise TicketingError("Event not found")

        tier = (
            TicketTier.objects.select_for_update()
            .filter(id=tier_id, event=event)
            .first()
        )
        if tier is None:
            raise TicketingError("Ticket tier not found for this event")

        if tier.remaining_quantity < quantity:
            raise TicketingError(
                f'Only {tier.remaining_quantity} tickets remaining in "{tier.name}"'
            )

        unit_price = Decimal("0") if is_free else tier.price
        total_amount = unit_price * quantity
        currency = tier.currency or event.currency or "cad"

        order = Order.objects.create(
            buyer=None,
            event=event,
            total_amount=total_amount,
            platform_fee_amount=Decimal("0"),
            organizer_payout_amount=total_amount,
            currency=currency,
            buyer_email=attendee_email,
            buyer_name=attendee_name,
            status="completed",
            source_app=MANUAL_SOURCE_APP,
            notes=f"Admin manual issuance: {reason}",
        )

        OrderItem.objects.create(
            order=order,
            tier=tier,
            quantity=quantity,
            unit_price=unit_price,
            subtotal=total_amount,
        )

        tickets = [
            Ticket.objects.create(
                event=event,
                tier=tier,
                order=order,
                holder=None,
                attendee_name=attendee_name,
                attendee_email=attendee_email,
                status="valid",
                issued_by=admin.auth0_id,
                issue_reason=reason,
            )
            for _ in range(quantity)
        ]

        _consume_inventory(tier, event, quantity)

    logger.info(
        "Admin %s issued %d ticket(s) for event %s tier %s (order %s)",
        admin.auth0_id,
        quantity,
        event.id,
        tier.id,
        order.id,
    )
    return order, tickets


# --- Reissue ----------------------------------------------------------------


def reissue_ticket(
    *,
    admin,
    order_id,
    old_ticket_id,
    new_attendee_name: str,
    new_attendee_email: str,
    reason: str,
):
    """
    Cancel a valid ticket and issue a replacement for a different attendee.

    Net inventory is unchanged: the old seat goes back to the tier and the
    new ticket takes it again. An audit line is appended to the order notes.
    Returns the new ticket.
    """
    with transaction.atomic():
        old_ticket = (
            Ticket.objects.select_for_update()
            .filter(id=old_ticket_id, order_id=order_id)
            .first()
        )
        if old_ticket is None:
            raise TicketingError("Ticket not found on this order")
        if old_ticket.status != "valid":
            raise TicketingError(
                f'Cannot reissue a ticket with status "{old_ticket.status}"'
            )

        event = Event.objects.select_for_update().filter(id=old_ticket.event_id).first()
        if event is None:
            raise TicketingError("Event not found")
        tier = TicketTier.objects.select_for_update().get(id=old_ticket.tier_id)

        old_ticket.status = "cancelled"
        old_ticket.save(update_fields=["status"])
        _release_inventory(tier, event, 1)

        new_ticket = Ticket.objects.create(
            event=event,
            tier=tier,
            order_id=old_ticket.order_id,
            holder=None,
            attendee_name=new_attendee_name,
            attendee_email=new_attendee_email,
            status="valid",
            issued_by=admin.auth0_id,
            issue_reason=f"Reissue: {reason}",
            original_ticket=old_ticket,
        )
        _consume_inventory(tier, event, 1)

        order = Order.objects.select_for_update().get(id=order_id)
        order.append_note(
            f"Reissued ticket {old_ticket.short_id} → {new_ticket.short_id}: {reason}"
        )
        order.save(update_fields=["notes", "updated_at"])

    logger.info(
        "Admin %s reissued ticket %s as %s on order %s",
        admin.auth0_id,
        old_ticket.id,
        new_ticket.id,
        order_id,
    )
    return new_ticket


# --- Email dispatch ---------------------------------------------------------


def _event_when(event):
    """(start, end) of the first live occurrence, falling back to the event."""
    occurrence = event.occurrences.filter(is_cancelled=False).order_by("starts_at").first()
    if occurrence is not None:
        return occurrence.starts_at, occurrence.ends_at
    return event.start_at, event.end_at


def _qr_png(value, box_size=6):
    qr = qrcode.QRCode(box_size=box_size, border=2)
    qr.add_data(value)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")
    buffer = BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def build_tickets_pdf(tickets, event, attendee_name):
    """
    One page per ticket: event details on the left, attendee on the right,
    the QR code of ``qr_code_secret`` large and centered underneath.
    """
    if not tickets:
        return None

    starts_at, ends_at = _event_when(event)
    pretty_date = starts_at.strftime("%B %d, %Y") if starts_at else "TBD"
    pretty_time = starts_at.strftime("%I:%M %p").lstrip("0") if starts_at else "TBD"
    if ends_at and starts_at and ends_at.date() != starts_at.date():
        pretty_date = f"{pretty_date} – {ends_at.strftime('%B %d, %Y')}"
    venue = ", ".join(part for part in (event.venue_name, event.city) if part) or "—"

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        title=f"Tickets - {event.title}",
        leftMargin=0.75 * inch,
        rightMargin=0.75 * inch,
        topMargin=0.75 * inch,
        bottomMargin=0.75 * inch,
    )

    styles = getSampleStyleSheet()
    title_style = styles["Title"]
    title_style.textColor = colors.HexColor("#4F46E5")
    elements = []

    for index, ticket in enumerate(tickets):
        elements.append(Paragraph(f"<b>{event.title}</b>", title_style))
        meta_line = f"Ticket #{ticket.short_id} · {ticket.tier.name}"
        if ticket.order_id:
            meta_line += f" · Order #{str(ticket.order_id)[:8]}"
        elements.append(
            Paragraph(f"<font size=10 color='#555555'>{meta_line}</font>", styles["Normal"])
        )
        elements.append(Spacer(1, 18))

        table = Table(
            [
                ["Event Details", "", "Attendee", ""],
                ["Date:", pretty_date, "Name:", attendee_name or "—"],
                ["Time:", pretty_time, "Tier:", ticket.tier.name],
                ["Venue:", venue, "Seat:", ticket.seat_label or "General"],
            ],
            colWidths=[0.9 * inch, 2.3 * inch, 0.9 * inch, 2.3 * inch],
        )
        table.setStyle(
            TableStyle(
                [
                    ("SPAN", (0, 0), (1, 0)),
                    ("SPAN", (2, 0), (3, 0)),
                    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#F1F5F9")),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTNAME", (0, 1), (0, 3), "Helvetica-Bold"),
                    ("FONTNAME", (2, 1), (2, 3), "Helvetica-Bold"),
                    ("ALIGN", (0, 1), (0, 3), "RIGHT"),
                    ("ALIGN", (2, 1), (2, 3), "RIGHT"),
                    ("BOX", (0, 0), (-1, -1), 0.5, colors.grey),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                    ("TOPPADDING", (0, 0), (-1, -1), 4),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        elements.append(table)
        elements.append(Spacer(1, 32))

        qr_image = Image(
            BytesIO(_qr_png(ticket.qr_code_secret)), width=2.5 * inch, height=2.5 * inch
        )
        qr_image.hAlign = "CENTER"
        elements.append(qr_image)
        elements.append(Spacer(1, 18))
        elements.append(
            Paragraph(
                "<font size=9 color='#666666'>"
                "Present this QR code at the entrance. Each code admits one person."
                "</font>",
                styles["Normal"],
            )
        )

        if index != len(tickets) - 1:
            elements.append(PageBreak())

    doc.build(elements)
    pdf_bytes = buffer.getvalue()
    buffer.close()
    return pdf_bytes


def send_ticket_email(to_email, recipient_name, tickets, event, pdf_bytes=None):
    """Send one email carrying the tickets as a PDF attachment."""
    subject = f"Your tickets for {event.title}"
    starts_at, _ = _event_when(event)
    when = starts_at.strftime("%A, %B %d, %Y at %I:%M %p") if starts_at else "TBD"
    where = ", ".join(part for part in (event.venue_name, event.city) if part) or "TBD"

    count = "your ticket" if len(tickets) == 1 else f"your {len(tickets)} tickets"
    body_lines = [
        f"Hi {recipient_name or 'there'},",
        "",
        f"Here is {count} for {event.title}.",
        f"When: {when}",
        f"Where: {where}",
        "",
        "Your ticket(s) are attached as a PDF. Each ticket has its own QR code",
        "to present at the entrance.",
        "",
    ]
    body_lines += [f"  - {t.tier.name}: #{t.short_id}" for t in tickets]
    body_lines += ["", "See you there,", "The Empiria team"]

    msg = EmailMessage(subject, "\n".join(body_lines), to=[to_email])
    if pdf_bytes:
        msg.attach("tickets.pdf", pdf_bytes, "application/pdf")
    msg.send(fail_silently=False)


def send_tickets_to_email(ticket_ids, recipient_email, recipient_name):
    """
    Email the selected tickets. Only tickets still ``valid`` are sent; the
    first one's event supplies the email details. Returns the number sent.
    """
    if not ticket_ids:
        raise TicketingError("No tickets selected")

    tickets = list(
        Ticket.objects.filter(id__in=ticket_ids).select_related("tier", "event")
    )
    if not tickets:
        raise TicketingError("Tickets not found")

    valid_tickets = [t for t in tickets if t.status == "valid"]
    if not valid_tickets:
        raise TicketingError("No valid tickets to send")

    event = valid_tickets[0].event

    try:
        pdf_bytes = build_tickets_pdf(valid_tickets, event, recipient_name)
        send_ticket_email(
            recipient_email, recipient_name, valid_tickets, event, pdf_bytes=pdf_bytes
        )
    except Exception as exc:
        logger.exception("Failed to send ticket email to %s", recipient_email)
        raise TicketingError(str(exc) or "Failed to send email") from exc

    logger.info("Sent %d ticket(s) to %s", len(valid_tickets), recipient_email)
    return len(valid_tickets)
