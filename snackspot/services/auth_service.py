"""Registration, login and token lifecycle."""

import logging
from datetime import datetime

from flask import current_app
from sqlalchemy import func

from snackspot.errors import AuthenticationRequired, ValidationFailed
from snackspot.extensions import db
from snackspot.models import RefreshToken, User
from snackspot.utils.tokens import create_access_token, generate_refresh_token

logger = logging.getLogger(__name__)


def register(username, email, password):
    """Create an account. Username and email are unique, ignoring case."""
    username = username.strip()
    email = email.strip().lower()

    if User.query.filter(func.lower(User.email) == email).first():
        raise ValidationFailed('Email already registered')
    if User.query.filter(func.lower(User.username) == username.lower()).first():
        raise ValidationFailed('Username already taken')

    user = User(username=username, email=email)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()

    logger.info(f"Registered user {user.id} ({user.username})")
    return user


def authenticate(email, password):
    user = User.query.filter(func.lower(User.email) == email.strip().lower()).first()
    if user is None or not user.check_password(password):
        logger.warning(f"Failed login attempt for {email}")
        raise AuthenticationRequired('Invalid email or password')
    return user


def issue_tokens(user):
    """Mint an access token and persist a new refresh token for ``user``."""
    raw_refresh = generate_refresh_token()
    refresh = RefreshToken(
        user=user,
        token_hash=RefreshToken.hash_token(raw_refresh),
        expires_at=datetime.utcnow() + current_app.config['REFRESH_TOKEN_EXPIRES'],
    )
    db.session.add(refresh)
    db.session.commit()

    return {
        'accessToken': create_access_token(user),
        'refreshToken': raw_refresh,
        'tokenType': 'Bearer',
        'expiresIn': int(current_app.config['ACCESS_TOKEN_EXPIRES'].total_seconds()),
    }


def _active_refresh_token(raw_token):
    token = RefreshToken.query.filter_by(token_hash=RefreshToken.hash_token(raw_token)).first()
    if token is None or not token.is_active:
        raise AuthenticationRequired('Invalid or expired refresh token')
    return token


def refresh(raw_token):
    """Rotate a refresh token: revoke it and issue a fresh pair."""
    token = _active_refresh_token(raw_token)
    token.revoke()
    user = token.user
    tokens = issue_tokens(user)
    logger.info(f"Rotated refresh token for user {user.id}")
    return user, tokens


def logout(user, raw_token=None):
    """Revoke one refresh token of ``user``, or all of them."""
    if raw_token:
        token = RefreshToken.query.filter_by(
            token_hash=RefreshToken.hash_token(raw_token),
            user_id=user.id
        ).first()
        if token is not None:
            token.revoke()
    else:
        for token in user.refresh_tokens.filter(RefreshToken.revoked_at.is_(None)).all():
            token.revoke()
    db.session.commit()
    logger.info(f"User {user.id} logged out")
