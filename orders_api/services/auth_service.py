# orders_api/services/auth_service.py
import jwt

from orders_api.utils.settings import JWT_SECRET, JWT_ALGORITHM
from orders_api.utils.logging import get_logger

logger = get_logger(__name__)


class AuthenticationError(Exception):
    """The bearer credential could not be verified."""


class IdentityVerifier:
    """
    Verifies bearer tokens and returns the customer id they were issued for.
    Tokens are issued elsewhere, the customer id is read from the "id" claim
    (falling back to "sub").
    """

    def __init__(self, secret: str | None = None, algorithm: str | None = None):
        self.secret = secret or JWT_SECRET
        self.algorithm = algorithm or JWT_ALGORITHM

    def verify(self, token: str) -> int:
        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError as e:
            logger.info(f"Rejected token: {e}")
            raise AuthenticationError("Invalid or expired token") from e

        subject = claims.get("id", claims.get("sub"))
        try:
            return int(subject)
        except (TypeError, ValueError):
            raise AuthenticationError("Token carries no customer identity")
