"""
Auth module: session token creation/validation and the get_current_user dependency.

Sign-in exchanges an identity assertion, an HS256 JWT signed by the upstream
provider, for a session token issued here and carried in an HTTP-only cookie.
A bearer session token in the Authorization header is accepted as well, for API
clients. Missing, invalid or expired tokens raise NotAuthenticatedError, which
the app turns into a redirect-to-login signal.
"""

import time
from dataclasses import dataclass
from typing import Optional
from jose import jwt, JWTError
from fastapi import Request, Response
from pydantic import ValidationError
from clinic.config import get_settings
from clinic.exceptions import NotAuthenticatedError
from clinic.schemas.user import UpsertUser

ALGORITHM = "HS256"


@dataclass
class SessionUser:
    """Resolved identity attached to each request."""
    id: str
    email: Optional[str]
    first_name: Optional[str]
    last_name: Optional[str]
    role: str                     # "patient" | "doctor" | "admin"


def create_token(user) -> str:
    """Create a signed session token for the given User model instance."""
    settings = get_settings()
    payload = {
        "sub": user.id,
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "role": user.role or "patient",
        "exp": int(time.time()) + settings.session_ttl_seconds,
    }
    return jwt.encode(payload, settings.session_secret, algorithm=ALGORITHM)


def decode_token(token: str) -> Optional[SessionUser]:
    """Decode and validate a session token. Returns None if invalid/expired."""
    try:
        settings = get_settings()
        payload = jwt.decode(token, settings.session_secret, algorithms=[ALGORITHM])
        return SessionUser(
            id=payload["sub"],
            email=payload.get("email"),
            first_name=payload.get("first_name"),
            last_name=payload.get("last_name"),
            role=payload.get("role", "patient"),
        )
    except (JWTError, KeyError):
        return None


PROFILE_CLAIMS = ("email", "first_name", "last_name", "profile_image_url")


def verify_identity_assertion(assertion: str) -> UpsertUser:
    """
    Verify a sign-in assertion signed by the upstream identity provider and
    return the profile it vouches for. Any role claim is ignored.
    """
    settings = get_settings()
    try:
        claims = jwt.decode(
            assertion,
            settings.identity_secret,
            algorithms=[ALGORITHM],
            issuer=settings.identity_issuer,
            audience=settings.identity_audience,
        )
    except JWTError:
        raise NotAuthenticatedError("invalid identity assertion")

    if not claims.get("sub"):
        raise NotAuthenticatedError("identity assertion has no subject")
    profile = {key: claims[key] for key in PROFILE_CLAIMS if key in claims}
    try:
        return UpsertUser(id=claims["sub"], **profile)
    except ValidationError:
        raise NotAuthenticatedError("malformed identity assertion")


def set_session_cookie(response: Response, token: str) -> None:
    settings = get_settings()
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(get_settings().session_cookie_name)


def _token_from_request(request: Request) -> Optional[str]:
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[7:]
    return request.cookies.get(get_settings().session_cookie_name)


async def get_current_user(request: Request) -> SessionUser:
    """FastAPI dependency. Resolves the caller from the session cookie or bearer token."""
    token = _token_from_request(request)
    if not token:
        raise NotAuthenticatedError("no session")
    principal = decode_token(token)
    if principal is None:
        raise NotAuthenticatedError("invalid or expired session")
    return principal
