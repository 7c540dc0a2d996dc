"""Authentication dependencies for FastAPI."""

import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import get_settings

logger = logging.getLogger(__name__)

# HTTP Bearer scheme for Authorization header
security = HTTPBearer(auto_error=False)

PROFILES_TABLE = "user_profiles"


class AuthContext:
    """Context object containing authenticated user info."""

    def __init__(
        self,
        user_id: Optional[str],
        token: str,
        email: Optional[str] = None,
        is_admin: bool = False,
    ):
        self.user_id = user_id
        self.token = token
        self.email = email
        self.is_admin = is_admin


def _lookup_is_admin(client, user_id: str) -> bool:
    """Admin flag from the user's profile; a missing profile means not admin."""
    try:
        result = (
            client.table(PROFILES_TABLE)
            .select("is_admin")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
    except Exception as e:
        logger.warning(f"Error loading profile for {user_id}: {e}")
        return False

    if not result.data:
        return False
    return bool(result.data[0].get("is_admin"))


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
) -> Optional[AuthContext]:
    """
    Extract and validate the current user from the request.

    Supports two authentication methods:
    1. Supabase JWT tokens (Bearer auth) for visitors and staff
    2. Admin API key (X-API-Key header) for content tooling

    Returns None if no valid auth is present (for optional auth endpoints).
    """
    admin_api_key = get_settings().ADMIN_API_KEY
    if x_api_key and admin_api_key and x_api_key == admin_api_key:
        logger.debug("Authenticated via admin API key")
        return AuthContext(user_id=None, token="api-key", is_admin=True)

    if not credentials:
        return None

    token = credentials.credentials

    try:
        from app.db.supabase_client import get_supabase

        client = get_supabase()

        # Validates the JWT signature and expiration
        auth_response = client.auth.get_user(token)

        if not auth_response or not auth_response.user:
            return None

        user_id = str(auth_response.user.id)
        return AuthContext(
            user_id=user_id,
            token=token,
            email=auth_response.user.email,
            is_admin=_lookup_is_admin(client, user_id),
        )

    except Exception as e:
        logger.warning(f"Auth error: {e}")
        return None


async def require_auth(
    auth: Optional[AuthContext] = Depends(get_current_user),
) -> AuthContext:
    """Require authentication. Raises 401 if not authenticated."""
    if not auth:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return auth


async def require_admin(
    auth: AuthContext = Depends(require_auth),
) -> AuthContext:
    """Require the user to be an administrator."""
    if not auth.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return auth


async def optional_auth(
    auth: Optional[AuthContext] = Depends(get_current_user),
) -> Optional[AuthContext]:
    """Optional authentication - returns None if not authenticated."""
    return auth
