from __future__ import annotations

import logging

from jose import JWTError, jwt

from ...domain.errors import Unauthenticated
from ...domain.models import Identity
from ...domain.ports.identity import IdentityResolver

logger = logging.getLogger(__name__)


class SupabaseTokenResolver(IdentityResolver):
    """Verifies Supabase access tokens signed with the project's JWT secret."""

    def __init__(
        self,
        jwt_secret: str,
        audience: str = "authenticated",
        algorithm: str = "HS256",
    ) -> None:
        if not jwt_secret:
            raise RuntimeError("Supabase JWT secret is required.")
        self._jwt_secret = jwt_secret
        self._audience = audience
        self._algorithm = algorithm

    def resolve(self, token: str) -> Identity:
        if not token:
            raise Unauthenticated()
        try:
            payload = jwt.decode(
                token,
                self._jwt_secret,
                algorithms=[self._algorithm],
                audience=self._audience,
            )
        except JWTError as exc:
            logger.debug("Rejected access token: %s", exc)
            raise Unauthenticated() from exc
        user_id = payload.get("sub")
        if not user_id:
            raise Unauthenticated()
        return Identity(user_id=str(user_id), email=payload.get("email"))
