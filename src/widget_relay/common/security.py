"""Organization context and admin key dependencies."""

from dataclasses import dataclass

from fastapi import Depends, Header
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from widget_relay.common.config import RelaySettings, get_settings
from widget_relay.common.exceptions import AuthError, ForbiddenError

_TOKEN_SALT = "org-context"


@dataclass
class OrganizationContext:
    """Resolved organization available to request handlers."""
    organization_id: str


def _get_serializer(settings: RelaySettings) -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(settings.secret_key, salt=_TOKEN_SALT)


def issue_org_token(organization_id: str, settings: RelaySettings | None = None) -> str:
    """Sign an organization id into a bearer token."""
    settings = settings or get_settings()
    return _get_serializer(settings).dumps({"org": organization_id})


def verify_org_token(token: str, settings: RelaySettings | None = None) -> str | None:
    """Verify a bearer token. Returns the organization id or None."""
    settings = settings or get_settings()
    try:
        payload = _get_serializer(settings).loads(
            token, max_age=settings.org_token_max_age
        )
    except (BadSignature, SignatureExpired):
        return None
    if not isinstance(payload, dict):
        return None
    org_id = payload.get("org")
    if not isinstance(org_id, str) or not org_id:
        return None
    return org_id


async def require_organization(
    authorization: str | None = Header(None),
    settings: RelaySettings = Depends(get_settings),
) -> OrganizationContext:
    """FastAPI dependency that resolves the caller's organization or raises 401."""
    if not authorization:
        raise AuthError()
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthError()
    org_id = verify_org_token(token.strip(), settings)
    if org_id is None:
        raise AuthError()
    return OrganizationContext(organization_id=org_id)


async def require_super_admin(
    x_relay_admin_key: str = Header(..., alias="X-Relay-Admin-Key"),
    settings: RelaySettings = Depends(get_settings),
) -> str:
    """FastAPI dependency that validates the super-admin key from header."""
    if x_relay_admin_key != settings.super_admin_key:
        raise ForbiddenError()
    return x_relay_admin_key
