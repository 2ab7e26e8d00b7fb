"""
Daybook Backend — Identity Verifier
=====================================

What:  Resolves the request's bearer token to the caller's user id.
Why:   Every resource route is scoped to one user; the id used for scoping
       must come from a verified credential, never from the request body.
How:   Tokens are HS256 JWTs issued by the user service and signed with the
       shared JWT_SECRET. The user id is the `sub` claim; tokens from the
       legacy user service carry it in `id` instead, which is accepted too.

Routes depend on `get_current_user_id`; the id it returns is passed to the
services as an ordinary argument.

Failure modes (all → 401 UnauthenticatedError):
    - no Authorization header, or a scheme other than Bearer
    - bad signature, malformed token, expired token
    - no usable identity claim, or one longer than the owner column
    - JWT_SECRET not configured (logged at startup; nothing can verify)
"""

import logging
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.config import Settings, settings as app_settings
from app.database import USER_ID_MAX_LENGTH
from app.exceptions import UnauthenticatedError

logger = logging.getLogger(__name__)

# auto_error=False: a missing header must go through our own 401 handler
bearer_scheme = HTTPBearer(auto_error=False, description="JWT issued by the user service")


class IdentityVerifier:
    """Verifies bearer tokens against the configured secret."""

    IDENTITY_CLAIMS = ("sub", "id")

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or app_settings

    def verify(self, token: str) -> str:
        """
        Return the user id carried by a valid token.

        Raises:
            UnauthenticatedError: token cannot be trusted or names no user
        """
        if not self.settings.jwt_secret:
            raise UnauthenticatedError(context={"reason": "jwt_secret_not_configured"})

        try:
            claims = jwt.decode(
                token,
                self.settings.jwt_secret,
                algorithms=[self.settings.jwt_algorithm],
            )
        except jwt.ExpiredSignatureError:
            raise UnauthenticatedError("Token has expired", context={"reason": "expired"})
        except jwt.InvalidTokenError as e:
            raise UnauthenticatedError(
                "Invalid authentication token",
                context={"reason": type(e).__name__},
            )

        user_id = self._identity_from(claims)
        if user_id is None:
            raise UnauthenticatedError(
                "Invalid authentication token",
                context={"reason": "missing_identity_claim"},
            )
        if len(user_id) > USER_ID_MAX_LENGTH:
            raise UnauthenticatedError(
                "Invalid authentication token",
                context={"reason": "identity_too_long"},
            )
        return user_id

    def _identity_from(self, claims: Dict[str, Any]) -> Optional[str]:
        for claim in self.IDENTITY_CLAIMS:
            value = claims.get(claim)
            if isinstance(value, (str, int)) and not isinstance(value, bool) and str(value):
                return str(value)
        return None


identity_verifier = IdentityVerifier()


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """
    FastAPI dependency: the verified user id of the caller.

    Usage in a route:
        @router.get("/task")
        async def list_tasks(user_id: str = Depends(get_current_user_id)): ...
    """
    if credentials is None:
        raise UnauthenticatedError("Authentication required")
    try:
        return identity_verifier.verify(credentials.credentials)
    except UnauthenticatedError as e:
        logger.warning("Rejected bearer token: %s", e.context.get("reason", e.message))
        raise
