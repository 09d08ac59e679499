from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ...core.dependencies import get_identity_resolver
from ...domain.errors import Unauthenticated
from ...domain.models import Identity
from ...domain.ports.identity import IdentityResolver

_bearer_scheme = HTTPBearer(auto_error=False)


def require_identity(
    credentials: HTTPAuthorizationCredentials = Depends(_bearer_scheme),
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> Identity:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise Unauthenticated()
    return resolver.resolve(credentials.credentials)
