"""
Authentication utilities for Supabase JWT verification.

Owners sign in through /auth/login (which proxies Supabase Auth) and send the
returned JWT in the Authorization header. This module verifies the JWT and
extracts user info.
"""
from dataclasses import dataclass
from typing import Optional

import requests
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from supportdesk.core.backend import get_backend
from supportdesk.core.errors import AuthError, RemoteOperationError

# auto_error=False so a missing header becomes our AuthError (401), not FastAPI's own 403
security = HTTPBearer(auto_error=False)


class User:
    """User model extracted from JWT token."""
    def __init__(self, user_id: str, email: Optional[str] = None, role: Optional[str] = None):
        self.id = user_id
        self.email = email
        self.role = role or "authenticated"

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, email={self.email!r})"


@dataclass
class AuthSession:
    user: User
    # None when sign-up requires email confirmation before a session is issued
    access_token: Optional[str] = None


# Cache for JWKS keys (to avoid fetching on every request)
_jwks_cache = {}


def get_supabase_jwks(supabase_url: str) -> dict:
    """
    Fetch Supabase's JSON Web Key Set (JWKS) for JWT verification.

    Newer Supabase projects sign with ES256/RS256, so we need their public key
    to verify tokens.
    """
    if supabase_url in _jwks_cache:
        return _jwks_cache[supabase_url]

    try:
        jwks_url = f"{supabase_url}/auth/v1/.well-known/jwks.json"
        response = requests.get(jwks_url, timeout=10)
        response.raise_for_status()
    except requests.RequestException as e:
        raise RemoteOperationError(f"Failed to fetch JWKS from Supabase: {e}") from e

    _jwks_cache[supabase_url] = response.json()
    return _jwks_cache[supabase_url]


def verify_token(token: str, supabase_url: str, jwt_secret: Optional[str] = None) -> dict:
    """
    Verify a Supabase JWT and return the decoded payload.

    Projects still on the legacy shared secret sign with HS256; when
    ``jwt_secret`` is given we verify against it, otherwise against the
    project's JWKS.

    Raises:
        AuthError: If token is invalid or expired
    """
    try:
        if jwt_secret:
            return jwt.decode(
                token,
                jwt_secret,
                algorithms=["HS256"],
                audience="authenticated",
            )
        jwks = get_supabase_jwks(supabase_url)
        # python-jose picks the key from the JWKS based on the token's 'kid' header
        return jwt.decode(
            token,
            jwks,
            algorithms=["ES256", "RS256"],
            audience="authenticated",
        )
    except jwt.ExpiredSignatureError as e:
        raise AuthError("Token has expired") from e
    except JWTError as e:
        raise AuthError(f"Invalid authentication credentials: {e}") from e


def user_from_claims(payload: dict) -> User:
    # Supabase JWT structure: {"sub": "user_id", "email": "user@example.com", "role": ...}
    user_id = payload.get("sub")
    if not user_id:
        raise AuthError("Could not validate user")
    return User(user_id=user_id, email=payload.get("email"), role=payload.get("role"))


def get_access_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    if credentials is None:
        raise AuthError("Not authenticated")
    return credentials.credentials


def get_current_user(request: Request, token: str = Depends(get_access_token)) -> User:
    """
    FastAPI dependency to get the current owner from the bearer token.

    Usage in route:
        @router.get("/protected")
        def protected_route(current_user: User = Depends(get_current_user)):
            return {"user_id": current_user.id}
    """
    return get_backend(request).identity.get_user(token)


def get_optional_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[User]:
    """Like get_current_user, but an absent or invalid token means "no session"."""
    if credentials is None:
        return None
    try:
        return get_backend(request).identity.get_user(credentials.credentials)
    except AuthError:
        return None
