"""Category routes."""

from flask import Blueprint, jsonify
from flask_login import login_required, current_user

from snackspot.forms import load_form
from snackspot.forms.catalog import CategoryForm
from snackspot.routes import rate_limit
from snackspot.services import category_service
from snackspot.utils.serializers import category_dict

categories_bp = Blueprint('categories', __name__)


@categories_bp.route('')
@rate_limit('categories')
def list_categories():
    return jsonify([category_dict(c) for c in category_service.list_categories()])


@categories_bp.route('/<int:category_id>')
@rate_limit('categories')
def get_category(category_id):
    return jsonify(category_dict(category_service.get_category(category_id)))


@categories_bp.route('', methods=['POST'])
@login_required
def create_category():
    """Create a category; an existing one with the same name is returned as-is."""
    form = load_form(CategoryForm)
    category, created = category_service.create_category(
        current_user._get_current_object(), form.name.data, form.description.data
    )
    return jsonify(category_dict(category)), 201 if created else 200
