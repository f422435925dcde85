"""Signed caller tokens.

Tokens are issued by the identity provider; the engagement service only
needs the ``user_id`` claim, which is a UUID.
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt
from pydantic import BaseModel, ValidationError

from engage.config import AuthSettings


class TokenPayload(BaseModel):
    """Claims carried by a caller token."""

    user_id: UUID
    iat: datetime
    exp: datetime


class JWTError(Exception):
    """Token could not be verified."""


def create_token(user_id: str, settings: AuthSettings) -> str:
    """Sign a token for ``user_id`` valid for ``jwt_expiry_days``."""
    issued_at = datetime.now(timezone.utc)
    payload = {
        "user_id": user_id,
        "iat": issued_at,
        "exp": issued_at + timedelta(days=settings.jwt_expiry_days),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Decode a token and validate its claims.

    Raises:
        JWTError: If the signature, expiry or claims are invalid
    """
    try:
        claims = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
        return TokenPayload(**claims)
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise JWTError("Invalid token") from e
    except ValidationError as e:
        raise JWTError("Token claims are malformed") from e
