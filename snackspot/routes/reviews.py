"""Review routes."""

from flask import Blueprint, jsonify
from flask_login import login_required, current_user

from snackspot.forms import load_form
from snackspot.forms.catalog import ReviewForm, ReviewUpdateForm
from snackspot.routes import rate_limit
from snackspot.services import review_service
from snackspot.utils.serializers import review_dict

reviews_bp = Blueprint('reviews', __name__)


@reviews_bp.route('', methods=['POST'])
@rate_limit('review_create')
@login_required
def create_review():
    """Rate a snack. One review per user and snack."""
    form = load_form(ReviewForm)
    review = review_service.create_review(
        current_user._get_current_object(),
        form.snack_id.data,
        form.rating.data,
        form.comment.data,
    )
    return jsonify(review_dict(review)), 201


@reviews_bp.route('/<int:review_id>')
def get_review(review_id):
    return jsonify(review_dict(review_service.get_review(review_id), include_snack=True))


@reviews_bp.route('/snack/<int:snack_id>')
def snack_reviews(snack_id):
    return jsonify([review_dict(r) for r in review_service.list_reviews_for_snack(snack_id)])


@reviews_bp.route('/<int:review_id>', methods=['PUT'])
@login_required
def update_review(review_id):
    form = load_form(ReviewUpdateForm)
    review = review_service.update_review(
        current_user._get_current_object(),
        review_id,
        form.rating.data,
        form.comment.data,
    )
    return jsonify(review_dict(review))


@reviews_bp.route('/<int:review_id>', methods=['DELETE'])
@login_required
def delete_review(review_id):
    review_service.delete_review(current_user._get_current_object(), review_id)
    return '', 204
