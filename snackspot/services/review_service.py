"""Reviews and the snack rating aggregate they drive.

Every create, update and delete recomputes the parent snack's average and
count inside the same transaction as the review write.
"""

import logging

from sqlalchemy.exc import IntegrityError

from snackspot.errors import Conflict, NotFound, ValidationFailed
from snackspot.extensions import db
from snackspot.models import Review, Snack
from snackspot.models.review import MIN_RATING, MAX_RATING
from snackspot.services import audit
from snackspot.services.ownership import ensure_authenticated, ensure_owner

logger = logging.getLogger(__name__)

REVIEW_AUDIT_FIELDS = ('snack_id', 'rating', 'comment')
REVIEW_CREATION_XP = 5
DUPLICATE_REVIEW_MESSAGE = 'You have already reviewed this snack'


def validate_rating(rating):
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationFailed('Rating must be a whole number between 1 and 5')
    if rating < MIN_RATING or rating > MAX_RATING:
        raise ValidationFailed('Rating must be between 1 and 5')
    return rating


def _clean_comment(comment):
    if comment is None:
        return None
    comment = comment.strip()
    return comment or None


def _target_snack(snack_id):
    snack = db.session.get(Snack, snack_id) if snack_id is not None else None
    if snack is None or snack.is_deleted:
        raise ValidationFailed('Invalid snack ID')
    return snack


def find_existing_review(snack_id, user_id):
    return Review.query.filter_by(snack_id=snack_id, user_id=user_id).first()


def create_review(user, snack_id, rating, comment=None):
    """Add ``user``'s review of a snack and refresh the snack aggregate."""
    ensure_authenticated(user)
    validate_rating(rating)
    snack = _target_snack(snack_id)

    if find_existing_review(snack.id, user.id) is not None:
        raise Conflict(DUPLICATE_REVIEW_MESSAGE)

    review = Review(snack=snack, user=user, rating=rating, comment=_clean_comment(comment))
    db.session.add(review)
    try:
        snack.update_rating()
        user.award_experience(REVIEW_CREATION_XP)
        audit.record(user, 'create', review, new_value=audit.snapshot(review, REVIEW_AUDIT_FIELDS))
        db.session.commit()
    except IntegrityError:
        # Lost a race with a concurrent submission from the same user
        db.session.rollback()
        raise Conflict(DUPLICATE_REVIEW_MESSAGE)

    logger.info(f"User {user.id} rated snack {snack.id} {rating}/5 "
                f"(average now {snack.average_rating} over {snack.total_ratings})")
    return review


def get_review(review_id):
    review = db.session.get(Review, review_id)
    if review is None or review.is_hidden or review.snack.is_deleted:
        raise NotFound('Review not found')
    return review


def list_reviews_for_snack(snack_id):
    """Visible reviews for an active snack, newest first."""
    snack = db.session.get(Snack, snack_id)
    if snack is None or snack.is_deleted:
        raise NotFound('Snack not found')
    return snack.get_visible_reviews()


def update_review(user, review_id, rating, comment=None):
    """Change the rating/comment of a review. Author only."""
    review = db.session.get(Review, review_id)
    if review is None:
        raise NotFound('Review not found')
    ensure_owner(review, user)
    validate_rating(rating)

    before = audit.snapshot(review, REVIEW_AUDIT_FIELDS)
    review.rating = rating
    review.comment = _clean_comment(comment)
    review.snack.update_rating()
    audit.record(user, 'update', review, old_value=before,
                 new_value=audit.snapshot(review, REVIEW_AUDIT_FIELDS))
    db.session.commit()

    logger.info(f"User {user.id} updated review {review.id}")
    return review


def delete_review(user, review_id):
    """Remove a review and recompute over the remaining ones. Author only."""
    review = db.session.get(Review, review_id)
    if review is None:
        raise NotFound('Review not found')
    ensure_owner(review, user)

    snack = review.snack
    before = audit.snapshot(review, REVIEW_AUDIT_FIELDS)
    audit.record(user, 'delete', review, old_value=before)
    db.session.delete(review)
    snack.update_rating()
    db.session.commit()

    logger.info(f"User {user.id} deleted review {review_id} "
                f"(snack {snack.id} average now {snack.average_rating})")
