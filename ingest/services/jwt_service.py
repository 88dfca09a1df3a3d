"""JWT service for access token generation and validation."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, Optional

import jwt
from jwt.exceptions import DecodeError, ExpiredSignatureError, InvalidTokenError

from ingest.config.settings import settings
from ingest.utils.exceptions import InvalidTokenError as CustomInvalidTokenError
from ingest.utils.exceptions import TokenExpiredError


class JWTService:
    """Service for JWT token operations."""

    def __init__(self):
        self.secret_key = settings.JWT_SECRET_KEY
        self.algorithm = settings.JWT_ALGORITHM
        self.access_token_expire_minutes = settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES

    def create_access_token(
        self,
        user_id: int,
        email: str,
        group_ids: Optional[Iterable[int]] = None,
        expires_in: Optional[timedelta] = None,
    ) -> str:
        """Create a JWT access token. Group ids feed group scoped policies."""
        now = datetime.now(timezone.utc)
        expire = now + (expires_in or timedelta(minutes=self.access_token_expire_minutes))

        payload = {
            "sub": str(user_id),  # Subject (user ID)
            "email": email,
            "type": "access",
            "groups": sorted(group_ids or []),
            "iat": now,
            "exp": expire,
            "iss": settings.JWT_ISSUER,
            "aud": settings.JWT_AUDIENCE,
        }

        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode_token(self, token: str) -> Dict[str, Any]:
        """Decode and validate a JWT token."""
        try:
            return jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=settings.JWT_AUDIENCE,
                issuer=settings.JWT_ISSUER,
            )

        except ExpiredSignatureError:
            raise TokenExpiredError("Token has expired")

        except (DecodeError, InvalidTokenError) as e:
            raise CustomInvalidTokenError(f"Invalid token: {e}")

    def decode_access_token(self, token: str) -> Dict[str, Any]:
        """Decode and validate an access token."""
        payload = self.decode_token(token)

        if payload.get("type") != "access":
            raise CustomInvalidTokenError("Invalid token type")

        return payload

    def read_access_claims(self, token: str) -> tuple[int, frozenset[int]]:
        """Extract user ID and group ids from an access token."""
        payload = self.decode_access_token(token)
        user_id = payload.get("sub")

        if not user_id:
            raise CustomInvalidTokenError("Token missing user ID")

        try:
            return int(user_id), frozenset(int(group) for group in payload.get("groups") or [])
        except (TypeError, ValueError):
            raise CustomInvalidTokenError("Invalid claims in token")
