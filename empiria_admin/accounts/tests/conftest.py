import pytest


@pytest.fixture
def auth0_settings(settings):
    settings.AUTH0 = {
        "DOMAIN": "tenant.example.com",
        "CLIENT_ID": "client-123",
        "CLIENT_SECRET": "shh",
        "SCOPE": "openid profile email",
    }
    settings.APP_BASE_URL = "http://testserver"
    return settings
