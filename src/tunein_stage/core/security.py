"""Bearer token helpers shared with the authentication provider."""
from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from tunein_stage.core.settings import settings


def create_access_token(
    subject: uuid.UUID | str,
    extra_claims: dict[str, str] | None = None,
    expires_minutes: int | None = None,
) -> str:
    """Create a JWT access token whose ``sub`` is the user's UUID."""
    to_encode: dict[str, object] = {"sub": str(subject)}
    if extra_claims:
        to_encode.update(extra_claims)
    minutes = expires_minutes if expires_minutes is not None else settings.access_token_expire_minutes
    to_encode["exp"] = datetime.now(UTC) + timedelta(minutes=minutes)
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_subject(token: str) -> uuid.UUID:
    """Return the user id carried by ``token``.

    Raises:
        ValueError: If the token is invalid, expired or carries no usable subject.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as err:
        raise ValueError("Could not validate credentials") from err

    subject = payload.get("sub")
    if subject is None:
        raise ValueError("Could not validate credentials")
    try:
        return uuid.UUID(str(subject))
    except ValueError as err:
        raise ValueError("Could not validate credentials") from err
