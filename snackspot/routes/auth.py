"""Authentication routes."""

from flask import Blueprint, jsonify
from flask_login import login_required, current_user

from snackspot.forms import load_form
from snackspot.forms.auth import LoginForm, RegistrationForm, RefreshForm, LogoutForm
from snackspot.routes import rate_limit
from snackspot.services import auth_service
from snackspot.utils.serializers import private_profile

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/register', methods=['POST'])
@rate_limit('register')
def register():
    """Create an account and sign it in."""
    form = load_form(RegistrationForm)
    user = auth_service.register(form.username.data, form.email.data, form.password.data)
    tokens = auth_service.issue_tokens(user)
    return jsonify({'user': private_profile(user), **tokens}), 201


@auth_bp.route('/login', methods=['POST'])
@rate_limit('login')
def login():
    form = load_form(LoginForm)
    user = auth_service.authenticate(form.email.data, form.password.data)
    tokens = auth_service.issue_tokens(user)
    return jsonify({'user': private_profile(user), **tokens})


@auth_bp.route('/refresh', methods=['POST'])
@rate_limit('refresh')
def refresh():
    """Trade a refresh token for a new token pair."""
    form = load_form(RefreshForm)
    user, tokens = auth_service.refresh(form.refresh_token.data)
    return jsonify({'user': private_profile(user), **tokens})


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    form = load_form(LogoutForm)
    auth_service.logout(current_user._get_current_object(), form.refresh_token.data)
    return jsonify({'message': 'Logged out'})


@auth_bp.route('/profile')
@login_required
def profile():
    return jsonify(private_profile(current_user))
