import logging

from django.db import DatabaseError, connection
from django.http import HttpResponse

logger = logging.getLogger(__name__)


def health_check(request):
    """Load balancer probe: OK only when the platform database answers."""
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
    except DatabaseError:
        logger.exception("Health check could not reach the database")
        return HttpResponse("DATABASE UNAVAILABLE", status=503)
    return HttpResponse("OK")
