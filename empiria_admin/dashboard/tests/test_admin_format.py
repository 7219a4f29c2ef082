from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal

from django.template import Context, Template
from django.test import RequestFactory, SimpleTestCase

from dashboard.templatetags import admin_format


class CurrencyFilterTests(SimpleTestCase):
    def test_known_currencies(self):
        self.assertEqual(admin_format.currency(Decimal("1234.5"), "cad"), "CA$1,234.50")
        self.assertEqual(admin_format.currency(500, "INR"), "₹500.00")
        self.assertEqual(admin_format.currency(1200, "jpy"), "¥1,200")

    def test_unknown_code_and_missing_amount(self):
        self.assertEqual(admin_format.currency(5, "chf"), "CHF 5.00")
        self.assertEqual(admin_format.currency(None), "CA$0.00")

    def test_symbol(self):
        self.assertEqual(admin_format.currency_symbol("usd"), "$")
        self.assertEqual(admin_format.currency_symbol("chf"), "CHF")


class DateFilterTests(SimpleTestCase):
    def test_short_date(self):
        value = datetime(2026, 3, 5, 14, 7, tzinfo=dt_timezone.utc)
        self.assertEqual(admin_format.short_date(value), "Mar 5, 2026")
        self.assertEqual(admin_format.short_date(None), "—")

    def test_date_time(self):
        value = datetime(2026, 3, 5, 14, 7, tzinfo=dt_timezone.utc)
        self.assertEqual(admin_format.date_time(value), "Mar 5, 2026, 14:07")

    def test_time_ago(self):
        now = datetime(2026, 3, 5, 12, 0, tzinfo=dt_timezone.utc)
        self.assertEqual(admin_format.time_ago(now - timedelta(seconds=20), now), "just now")
        self.assertEqual(admin_format.time_ago(now - timedelta(minutes=5), now), "5m ago")
        self.assertEqual(admin_format.time_ago(now - timedelta(hours=3), now), "3h ago")
        self.assertEqual(admin_format.time_ago(now - timedelta(days=4), now), "4d ago")
        self.assertEqual(admin_format.time_ago(now - timedelta(days=40), now), "Jan 24, 2026")


class TextFilterTests(SimpleTestCase):
    def test_truncate_and_ids(self):
        self.assertEqual(admin_format.truncate_chars("abcdef", 3), "abc…")
        self.assertEqual(admin_format.truncate_chars("abc", 3), "abc")
        self.assertEqual(admin_format.short_id("1234567890abcdef"), "12345678")

    def test_status_helpers(self):
        self.assertEqual(admin_format.humanize_status("non_profit"), "non profit")
        self.assertEqual(admin_format.status_color("Published"), "success")
        self.assertEqual(admin_format.status_color("mystery"), "secondary")


class PageUrlTagTests(SimpleTestCase):
    def test_keeps_existing_filters(self):
        request = RequestFactory().get("/dashboard/events/", {"status": "draft", "page": "1"})
        rendered = Template("{% load admin_format %}{% page_url 3 %}").render(
            Context({"request": request})
        )
        self.assertEqual(rendered, "/dashboard/events/?status=draft&amp;page=3")
