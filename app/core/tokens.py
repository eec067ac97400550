"""
app/core/tokens.py

Purpose: Bearer token issuance and verification

- Signs {id, iat, exp} claims with the configured secret
- Fixed one-hour lifetime
- Verification reports failure as None instead of raising
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, TYPE_CHECKING

import jwt

from app.core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from app.core.config import Settings

TOKEN_LIFETIME = timedelta(hours=1)


class TokenService:
    """
    Issues and verifies signed, time-bounded tokens carrying an account id.
    """

    def __init__(self, secret: Optional[str], algorithm: str = "HS256", lifetime: timedelta = TOKEN_LIFETIME):
        if not secret:
            raise ConfigurationError("JWT_SECRET is not defined")
        self._secret = secret
        self.algorithm = algorithm
        self.lifetime = lifetime

    @classmethod
    def from_settings(cls, settings: "Settings") -> "TokenService":
        return cls(settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)

    def issue(self, account_id: str, now: Optional[datetime] = None) -> str:
        """
        Creates a signed token for the account.

        Args:
            account_id: Identifier of the account the token proves
            now: Issue time, defaults to the current UTC time

        Returns:
            Encoded token string
        """
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "id": str(account_id),
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Optional[str]:
        """
        Checks signature and expiry.

        Returns:
            The encoded account id, or None if the token is malformed,
            forged or expired
        """
        if not token:
            return None
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.PyJWTError:
            return None

        account_id = payload.get("id")
        if not isinstance(account_id, str) or not account_id:
            return None
        return account_id
