from django.conf import settings


def dashboard_settings(request):
    return {
        "REPORTING_CURRENCY": getattr(settings, "REPORTING_CURRENCY", "cad"),
        "ORGANIZER_APP_URL": getattr(settings, "ORGANIZER_APP_URL", ""),
    }
