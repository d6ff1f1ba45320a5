# orders_api/api/deps.py
from functools import lru_cache

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from orders_api.services.auth_service import AuthenticationError, IdentityVerifier
from orders_api.services.notification_service import Broadcaster, RedisBroadcaster

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def get_broadcaster() -> Broadcaster:
    return RedisBroadcaster()


@lru_cache
def get_verifier() -> IdentityVerifier:
    return IdentityVerifier()


def get_current_customer(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    verifier: IdentityVerifier = Depends(get_verifier),
) -> int:
    """Customer id of the bearer token, 401 without a token, 403 for a bad one."""
    if credentials is None:
        raise HTTPException(status_code=401, detail="Authentication token required")

    try:
        return verifier.verify(credentials.credentials)
    except AuthenticationError as e:
        raise HTTPException(status_code=403, detail=str(e))
