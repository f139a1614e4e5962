"""User profile routes."""

from flask import Blueprint, jsonify
from flask_login import login_required, current_user

from snackspot.forms import load_form, provided_fields
from snackspot.forms.auth import ProfileForm
from snackspot.routes import rate_limit
from snackspot.services import user_service
from snackspot.services.snack_service import list_user_snacks
from snackspot.utils.serializers import private_profile, user_profile, snack_summary

users_bp = Blueprint('users', __name__)


@users_bp.route('/me')
@login_required
def me():
    user = current_user._get_current_object()
    data = private_profile(user)
    data['statistics'] = user_service.user_statistics(user)
    return jsonify(data)


@users_bp.route('/me', methods=['PUT'])
@login_required
def update_me():
    """Update username, bio or avatar of the signed-in user."""
    form = load_form(ProfileForm)
    present = provided_fields()
    user = user_service.update_profile(
        current_user._get_current_object(),
        username=form.username.data or None,
        bio=(form.bio.data or '') if 'bio' in present else None,
        avatar_emoji=(form.avatar_emoji.data or '') if 'avatar_emoji' in present else None,
    )
    return jsonify(private_profile(user))


@users_bp.route('/<int:user_id>')
@rate_limit('users')
def get_user(user_id):
    """Public profile with statistics."""
    user = user_service.get_user(user_id)
    return jsonify(user_profile(user, stats=user_service.user_statistics(user)))


@users_bp.route('/<int:user_id>/snacks')
@rate_limit('users')
def user_snacks(user_id):
    user_service.get_user(user_id)
    return jsonify([snack_summary(s) for s in list_user_snacks(user_id)])
