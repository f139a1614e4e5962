"""Access and refresh token helpers."""

import logging
import secrets
from datetime import datetime, timezone

from flask import current_app, request
from flask_limiter.util import get_remote_address
from jose import jwt, JWTError, ExpiredSignatureError

logger = logging.getLogger(__name__)


def create_access_token(user):
    """Issue a signed JWT whose subject is the user id."""
    now = datetime.now(timezone.utc)
    claims = {
        'sub': str(user.id),
        'username': user.username,
        'iss': current_app.config['JWT_ISSUER'],
        'iat': now,
        'exp': now + current_app.config['ACCESS_TOKEN_EXPIRES'],
    }
    return jwt.encode(claims, current_app.config['JWT_SECRET_KEY'],
                      algorithm=current_app.config['JWT_ALGORITHM'])


def decode_access_token(token):
    """Return the user id carried by a valid token, or None."""
    try:
        payload = jwt.decode(
            token,
            current_app.config['JWT_SECRET_KEY'],
            algorithms=[current_app.config['JWT_ALGORITHM']],
            issuer=current_app.config['JWT_ISSUER'],
        )
    except ExpiredSignatureError:
        logger.debug("Rejected expired access token")
        return None
    except JWTError as e:
        logger.debug(f"Rejected invalid access token: {e}")
        return None

    try:
        return int(payload.get('sub'))
    except (TypeError, ValueError):
        return None


def generate_refresh_token():
    return secrets.token_urlsafe(48)


def bearer_token(auth_header):
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not auth_header:
        return None
    scheme, _, token = auth_header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()


def rate_limit_key():
    """Bucket requests by authenticated user, falling back to the client address."""
    token = bearer_token(request.headers.get('Authorization'))
    user_id = decode_access_token(token) if token else None
    if user_id is not None:
        return f'user:{user_id}'
    return f'ip:{get_remote_address()}'
