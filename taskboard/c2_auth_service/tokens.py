"""Signed bearer tokens (JWT)."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import ExpiredSignatureError, JWTError, jwt

from taskboard.core.config import AuthConfig, get_settings

logger = logging.getLogger(__name__)


def _auth_config(config: Optional[AuthConfig]) -> AuthConfig:
    return config if config is not None else get_settings().auth


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[timedelta] = None,
    config: Optional[AuthConfig] = None,
) -> str:
    """
    Create a signed access token.

    Args:
        data: Claims to encode; "sub" should carry the user id
        expires_delta: Lifetime override (defaults to the configured lifetime)
        config: Auth configuration (defaults to global settings)

    Returns:
        Encoded JWT string
    """
    config = _auth_config(config)
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=config.access_token_expire_minutes))

    to_encode = data.copy()
    to_encode.update({"exp": expire, "iat": now, "type": "access"})
    return jwt.encode(
        to_encode,
        config.secret_key.get_secret_value(),
        algorithm=config.algorithm,
    )


def verify_access_token(token: str, config: Optional[AuthConfig] = None) -> Optional[Dict[str, Any]]:
    """
    Decode and check an access token.

    Returns:
        The token claims, or None if the token is malformed, expired,
        wrongly signed or not an access token
    """
    config = _auth_config(config)
    try:
        payload = jwt.decode(
            token,
            config.secret_key.get_secret_value(),
            algorithms=[config.algorithm],
        )
    except ExpiredSignatureError:
        logger.info("Rejected expired access token")
        return None
    except JWTError as e:
        logger.info(f"Rejected invalid access token: {e}")
        return None

    if payload.get("type") != "access" or not payload.get("sub"):
        return None
    return payload
