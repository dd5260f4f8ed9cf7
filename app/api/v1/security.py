# app/api/v1/security.py
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict

from fastapi import Request
from fastapi.security.utils import get_authorization_scheme_param
from jose import JWTError, jwt

from app.core.config import Settings
from app.core.errors import AuthenticationError

ANONYMOUS = "anonymous"
BEARER_AUTH = "bearerAuth"

SecurityCheck = Callable[[Request, Settings], dict]


def _anonymous(request: Request, settings: Settings) -> dict:
    return {}


def _bearer_auth(request: Request, settings: Settings) -> dict:
    """
    Example scheme: an HS256 JWT signed with JWT_SECRET.
    Returns the principal {"user": <sub>}.
    """
    scheme, token = get_authorization_scheme_param(request.headers.get("Authorization"))
    if scheme.lower() != "bearer" or not token:
        raise AuthenticationError("Missing bearer token.")
    if not settings.JWT_SECRET:
        raise AuthenticationError("Bearer authentication is not configured.")

    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        raise AuthenticationError("Could not validate credentials, token is invalid or expired.") from e

    user = payload.get("sub")
    if user is None:
        raise AuthenticationError("User identifier (sub) not found in token.")
    return {"user": user}


_SECURITY_SCHEMES: Dict[str, SecurityCheck] = {
    ANONYMOUS: _anonymous,
    BEARER_AUTH: _bearer_auth,
}


def authenticate(request: Request, security_name: str, settings: Settings) -> dict:
    """Runs the named security check. Unknown names are rejected."""
    check = _SECURITY_SCHEMES.get(security_name)
    if check is None:
        raise AuthenticationError(f"Unknown security name '{security_name}'.")
    return check(request, settings)


def create_access_token(subject: str, settings: Settings, expires_minutes: int | None = None) -> str:
    """Mints a token accepted by the bearerAuth scheme."""
    if not settings.JWT_SECRET:
        raise ValueError("JWT_SECRET must be set to create tokens.")
    minutes = expires_minutes if expires_minutes is not None else settings.JWT_EXPIRE_MINUTES
    expire = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    return jwt.encode({"sub": subject, "exp": expire}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
