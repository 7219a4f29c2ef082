from unittest.mock import patch

from django.db import DatabaseError
from django.test import TestCase
from django.urls import reverse


class HealthCheckTests(TestCase):
    def test_health_check_returns_ok(self):
        response = self.client.get(reverse("health_check"))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.content.decode(), "OK")

    def test_health_check_reports_database_outage(self):
        with patch("config.health.connection.cursor", side_effect=DatabaseError("down")):
            response = self.client.get(reverse("health_check"))
        self.assertEqual(response.status_code, 503)
