import random
from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone
from django.utils.text import slugify

from accounts.models import PlatformUser
from events.models import Category, Event, EventOccurrence
from orders.models import Order, OrderItem
from tickets.models import Ticket, TicketTier

SEED_PAYMENT_PREFIX = "pi_seed_"
SOURCE_APP = "organizer.empiriaindia.com"
SHOP_APP = "shop.empiriaindia.com"

# ---------------- Seed data pools ----------------
CATEGORY_NAMES = [
    "Music",
    "Technology",
    "Food & Drink",
    "Sports",
    "Arts & Culture",
    "Business",
    "Education",
    "Health & Wellness",
]

ORGANIZERS = [
    ("auth0|seed_org_priya", "priya@example.com", "Priya Sharma", "cad"),
    ("auth0|seed_org_marcus", "marcus@example.com", "Marcus Chen", "usd"),
    ("auth0|seed_org_anika", "anika@example.com", "Anika Patel", "inr"),
]

ATTENDEES = [
    ("auth0|seed_att_1", "alice@example.com", "Alice Johnson"),
    ("auth0|seed_att_2", "bob@example.com", "Bob Williams"),
    ("auth0|seed_att_3", "carol@example.com", "Carol Martinez"),
    ("auth0|seed_att_4", "dave@example.com", "Dave Kim"),
    ("auth0|seed_att_5", "emma@example.com", "Emma Singh"),
]

# (organizer, title, slug, category, start offset in days, length in days,
#  venue, city, status, featured, fee %, currency, capacity)
EVENTS = [
    ("auth0|seed_org_priya", "Toronto Jazz Festival 2026", "toronto-jazz-festival-2026",
     "Music", 30, 2, "Nathan Phillips Square", "Toronto", "published", True, 5, "cad", 500),
    ("auth0|seed_org_priya", "Startup Pitch Night - Vancouver", "startup-pitch-night-vancouver",
     "Business", 14, 0, "Convention Centre West", "Vancouver", "published", False, 5, "cad", 200),
    ("auth0|seed_org_marcus", "AI & Machine Learning Summit", "ai-ml-summit-sf",
     "Technology", 45, 1, "Moscone Center", "San Francisco", "published", True, 5, "usd", 1000),
    ("auth0|seed_org_marcus", "Street Food Festival SF", "street-food-festival-sf",
     "Food & Drink", -10, 1, "Ferry Building", "San Francisco", "completed", False, 5, "usd", 300),
    ("auth0|seed_org_anika", "Mumbai Tech Meetup", "mumbai-tech-meetup",
     "Technology", 7, 0, "BKC Tech Hub", "Mumbai", "published", False, 3, "inr", 150),
    ("auth0|seed_org_anika", "Delhi Food Crawl", "delhi-food-crawl",
     "Food & Drink", 20, 0, "Chandni Chowk", "Delhi", "draft", False, 3, "inr", 50),
    ("auth0|seed_org_priya", "Cancelled Yoga Retreat", "cancelled-yoga-retreat",
     "Health & Wellness", 60, 2, "Banff Springs", "Banff", "cancelled", False, 5, "cad", 30),
]


def tier_rows(currency):
    """(name, price, initial, remaining, max per order) for an event's currency."""
    if currency == "inr":
        return [("General", 500, 100, 80, 5), ("VIP", 2000, 20, 15, 2)]
    base = 25 if currency == "usd" else 30
    return [
        ("Early Bird", base, 100, 60, 5),
        ("General Admission", base * 2, 200, 150, 10),
        ("VIP", base * 5, 50, 40, 2),
    ]


def seed_categories():
    categories = {}
    for name in CATEGORY_NAMES:
        category, _ = Category.objects.update_or_create(
            slug=slugify(name), defaults={"name": name, "is_active": True}
        )
        categories[name] = category
    return categories


def seed_users():
    for auth0_id, email, full_name, currency in ORGANIZERS:
        PlatformUser.objects.update_or_create(
            auth0_id=auth0_id,
            defaults={
                "email": email,
                "full_name": full_name,
                "role": "organizer",
                "stripe_account_id": f"acct_seed_{auth0_id.rsplit('_', 1)[-1]}",
                "stripe_onboarding_completed": True,
                "default_currency": currency,
            },
        )
    for auth0_id, email, full_name in ATTENDEES:
        PlatformUser.objects.update_or_create(
            auth0_id=auth0_id,
            defaults={"email": email, "full_name": full_name, "role": "attendee"},
        )
    return len(ORGANIZERS) + len(ATTENDEES)


def seed_events(categories, now):
    events = []
    for (organizer_id, title, slug, category, start, length, venue, city, status,
         featured, fee, currency, capacity) in EVENTS:
        start_at = now + timedelta(days=start)
        event, _ = Event.objects.update_or_create(
            slug=slug,
            defaults={
                "organizer_id": organizer_id,
                "title": title,
                "category": categories[category],
                "start_at": start_at,
                "end_at": start_at + timedelta(days=length),
                "venue_name": venue,
                "city": city,
                "status": status,
                "is_featured": featured,
                "platform_fee_percent": fee,
                "currency": currency,
                "total_capacity": capacity,
                "source_app": SOURCE_APP,
                "deleted_at": None,
            },
        )
        EventOccurrence.objects.filter(event=event).delete()
        EventOccurrence.objects.create(
            event=event, starts_at=event.start_at, ends_at=event.end_at
        )
        events.append(event)
    return events


class Command(BaseCommand):
    help = (
        "Seed the database with demo categories, users, events, tiers, "
        "completed orders and tickets. Safe to run more than once."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--seed",
            type=int,
            default=None,
            help="Random seed for reproducible order data.",
        )

    @transaction.atomic
    def handle(self, *args, **opts):
        rng = random.Random(opts["seed"])
        now = timezone.now()

        categories = seed_categories()
        users = seed_users()
        events = seed_events(categories, now)
        self.stdout.write(
            f"Upserted {len(categories)} categories, {users} users, {len(events)} events."
        )

        tier_count = order_count = 0
        for event in events:
            Ticket.objects.filter(event=event).delete()
            Order.objects.filter(event=event).delete()
            TicketTier.objects.filter(event=event).delete()
            tiers = [
                TicketTier.objects.create(
                    event=event,
                    name=name,
                    price=price,
                    currency=event.currency,
                    initial_quantity=initial,
                    remaining_quantity=remaining,
                    max_per_order=max_per_order,
                )
                for name, price, initial, remaining, max_per_order in tier_rows(event.currency)
            ]
            tier_count += len(tiers)

            if event.status not in ("published", "completed"):
                continue

            sold = 0
            for i in range(rng.randint(3, 6)):
                buyer_id, buyer_email, buyer_name = ATTENDEES[order_count % len(ATTENDEES)]
                tier = tiers[i % len(tiers)]
                quantity = rng.randint(1, 3)
                subtotal = tier.price * quantity
                fee = (subtotal * event.platform_fee_percent / Decimal(100)).quantize(
                    Decimal("0.01"), rounding=ROUND_HALF_UP
                )
                order = Order.objects.create(
                    buyer_id=buyer_id,
                    event=event,
                    stripe_payment_intent_id=f"{SEED_PAYMENT_PREFIX}{order_count}",
                    stripe_checkout_session_id=f"cs_seed_{order_count}",
                    total_amount=subtotal,
                    platform_fee_amount=fee,
                    organizer_payout_amount=subtotal - fee,
                    currency=event.currency,
                    status="completed",
                    source_app=SHOP_APP,
                    buyer_email=buyer_email,
                    buyer_name=buyer_name,
                )
                placed_at = now - timedelta(days=rng.randint(0, 59))
                Order.objects.filter(id=order.id).update(created_at=placed_at)
                OrderItem.objects.create(
                    order=order,
                    tier=tier,
                    quantity=quantity,
                    unit_price=tier.price,
                    subtotal=subtotal,
                )
                Ticket.objects.bulk_create(
                    Ticket(
                        event=event,
                        tier=tier,
                        order=order,
                        holder_id=buyer_id,
                        attendee_name=buyer_name,
                        attendee_email=buyer_email,
                        status="used" if event.status == "completed" else "valid",
                    )
                    for _ in range(quantity)
                )
                sold += quantity
                order_count += 1

            Event.objects.filter(id=event.id).update(total_tickets_sold=sold)

        self.stdout.write(
            self.style.SUCCESS(f"Created {tier_count} tiers and {order_count} orders.")
        )
