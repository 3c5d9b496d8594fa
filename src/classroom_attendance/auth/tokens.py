"""Signed, stateless session credentials.

A credential is an HS256 JWT whose ``sub`` claim is the teacher id and whose
``exp`` claim bounds its lifetime. Nothing is stored server-side: a token is
valid exactly when its signature checks out and it has not expired.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from ..core.constants import DEFAULT_SESSION_DAYS, TOKEN_ALGORITHM
from ..core.exceptions import AuthenticationInvalid


class CredentialService:
    def __init__(self, secret_key: str, *, expire_days: int = DEFAULT_SESSION_DAYS, algorithm: str = TOKEN_ALGORITHM):
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self._secret = secret_key
        self._expire = timedelta(days=int(expire_days))
        self._algorithm = algorithm

    @property
    def max_age_seconds(self) -> int:
        return int(self._expire.total_seconds())

    def issue_credential(self, user_id: int, *, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": str(int(user_id)),
            "iat": issued_at,
            "exp": issued_at + self._expire,
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify_credential(self, token: str) -> int:
        """Return the teacher id carried by ``token``.

        Raises AuthenticationInvalid for a bad signature, a malformed token,
        a missing/non-numeric subject, or an expired token.
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except JWTError:
            raise AuthenticationInvalid("Invalid token")

        sub = payload.get("sub")
        try:
            return int(sub)
        except (TypeError, ValueError):
            raise AuthenticationInvalid("Invalid token")
