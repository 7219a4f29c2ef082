# accounts/auth0.py
"""
Minimal OpenID Connect client for the platform's Auth0 tenant.

Only the authorization-code flow is needed: build the authorize URL, swap
the code for tokens and validate the ID token against the tenant's JWKS.
"""
import logging
from functools import lru_cache
from urllib.parse import urlencode

import jwt
import requests
from django.conf import settings

logger = logging.getLogger(__name__)

TOKEN_TIMEOUT = 10


class Auth0Error(Exception):
    """Raised when the identity provider rejects a login."""


def _domain():
    domain = settings.AUTH0.get("DOMAIN", "")
    if not domain:
        raise Auth0Error("AUTH0_DOMAIN is not configured")
    return domain


def issuer():
    return f"https://{_domain()}/"


def authorize_url(redirect_uri: str, state: str) -> str:
    params = {
        "response_type": "code",
        "client_id": settings.AUTH0["CLIENT_ID"],
        "redirect_uri": redirect_uri,
        "scope": settings.AUTH0.get("SCOPE", "openid profile email"),
        "state": state,
    }
    return f"{issuer()}authorize?{urlencode(params)}"


def logout_url(return_to: str) -> str:
    params = {"client_id": settings.AUTH0["CLIENT_ID"], "returnTo": return_to}
    return f"{issuer()}v2/logout?{urlencode(params)}"


@lru_cache(maxsize=4)
def _jwks_client(jwks_url: str) -> jwt.PyJWKClient:
    return jwt.PyJWKClient(jwks_url)


def exchange_code(code: str, redirect_uri: str) -> dict:
    """Trade an authorization code for the token response."""
    try:
        response = requests.post(
            f"{issuer()}oauth/token",
            json={
                "grant_type": "authorization_code",
                "client_id": settings.AUTH0["CLIENT_ID"],
                "client_secret": settings.AUTH0["CLIENT_SECRET"],
                "code": code,
                "redirect_uri": redirect_uri,
            },
            timeout=TOKEN_TIMEOUT,
        )
        response.raise_for_status()
        tokens = response.json()
    except (requests.RequestException, ValueError) as exc:
        raise Auth0Error(f"Token exchange failed: {exc}") from exc

    if "id_token" not in tokens:
        raise Auth0Error("Token response did not include an id_token")
    return tokens


def decode_id_token(id_token: str) -> dict:
    """Validate signature, issuer and audience; return the claims."""
    try:
        signing_key = _jwks_client(f"{issuer()}.well-known/jwks.json")
        key = signing_key.get_signing_key_from_jwt(id_token).key
        return jwt.decode(
            id_token,
            key,
            algorithms=["RS256"],
            audience=settings.AUTH0["CLIENT_ID"],
            issuer=issuer(),
        )
    except jwt.PyJWTError as exc:
        raise Auth0Error(f"Invalid ID token: {exc}") from exc
