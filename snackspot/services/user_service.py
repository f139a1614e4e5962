"""Public profiles and profile editing."""

import logging

from sqlalchemy import func

from snackspot.errors import NotFound, ValidationFailed
from snackspot.extensions import db
from snackspot.models import Review, Snack, User
from snackspot.services.ownership import ensure_authenticated

logger = logging.getLogger(__name__)


def get_user(user_id):
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFound('User not found')
    return user


def user_statistics(user):
    """Counts shown on a profile page."""
    snack_count = Snack.query.filter_by(user_id=user.id, is_deleted=False).count()
    review_query = Review.query.join(Snack, Review.snack_id == Snack.id).filter(
        Review.user_id == user.id,
        Review.is_hidden == False,  # noqa: E712
        Snack.is_deleted == False,  # noqa: E712
    )
    review_count = review_query.count()
    average = review_query.with_entities(func.avg(Review.rating)).scalar()
    return {
        'snackCount': snack_count,
        'reviewCount': review_count,
        'averageRatingGiven': round(float(average), 2) if average is not None else None,
    }


def update_profile(user, username=None, bio=None, avatar_emoji=None):
    """Apply the provided profile fields; ``None`` leaves a field unchanged."""
    ensure_authenticated(user)

    if username is not None:
        username = username.strip()
        taken = User.query.filter(
            func.lower(User.username) == username.lower(),
            User.id != user.id
        ).first()
        if taken is not None:
            raise ValidationFailed('Username already taken')
        user.username = username
    if bio is not None:
        user.bio = bio.strip() or None
    if avatar_emoji is not None:
        user.avatar_emoji = avatar_emoji.strip() or None

    db.session.commit()
    logger.info(f"User {user.id} updated their profile")
    return user
