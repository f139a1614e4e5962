"""Snack routes: nearby search and owner-only mutations."""

from flask import Blueprint, jsonify, request
from flask_login import login_required, current_user

from snackspot.forms import load_form
from snackspot.forms.catalog import NearbySearchForm, SnackForm
from snackspot.routes import rate_limit
from snackspot.services import snack_service
from snackspot.utils.serializers import snack_summary, snack_detail

snacks_bp = Blueprint('snacks', __name__)


@snacks_bp.route('')
@rate_limit('snack_search')
def search_snacks():
    """Snacks within ``radius`` meters of (lat, lng), nearest first."""
    form = load_form(NearbySearchForm, request.args.to_dict())
    results = snack_service.find_nearby(
        form.lat.data,
        form.lng.data,
        radius=form.radius.data,
        category_id=form.category_id.data,
        search=form.search.data,
    )
    return jsonify([snack_summary(snack, distance) for snack, distance in results])


@snacks_bp.route('/<int:snack_id>')
def get_snack(snack_id):
    return jsonify(snack_detail(snack_service.get_active_snack(snack_id)))


@snacks_bp.route('', methods=['POST'])
@rate_limit('snack_create')
@login_required
def create_snack():
    form = load_form(SnackForm)
    snack = snack_service.create_snack(
        current_user._get_current_object(),
        form.name.data,
        form.category_id.data,
        form.store_id.data,
        description=form.description.data,
    )
    return jsonify(snack_summary(snack)), 201


@snacks_bp.route('/<int:snack_id>', methods=['PUT'])
@rate_limit('snack_update')
@login_required
def update_snack(snack_id):
    form = load_form(SnackForm)
    snack = snack_service.update_snack(
        current_user._get_current_object(),
        snack_id,
        form.name.data,
        form.category_id.data,
        form.store_id.data,
        description=form.description.data,
    )
    return jsonify(snack_summary(snack))


@snacks_bp.route('/<int:snack_id>', methods=['DELETE'])
@rate_limit('snack_delete')
@login_required
def delete_snack(snack_id):
    snack_service.delete_snack(current_user._get_current_object(), snack_id)
    return '', 204
