"""Store routes."""

from flask import Blueprint, jsonify, request
from flask_login import login_required, current_user

from snackspot.forms import load_form
from snackspot.forms.catalog import StoreForm
from snackspot.services import store_service
from snackspot.utils.serializers import store_dict

stores_bp = Blueprint('stores', __name__)


@stores_bp.route('')
def list_stores():
    """Paginated store list with optional name/address search."""
    page = request.args.get('page', 1, type=int)
    page_size = request.args.get('pageSize', type=int)
    pagination = store_service.list_stores(
        search=request.args.get('search', ''),
        page=max(page, 1),
        page_size=page_size if page_size and page_size > 0 else None,
    )
    return jsonify({
        'items': [store_dict(s) for s in pagination.items],
        'page': pagination.page,
        'pageSize': pagination.per_page,
        'totalCount': pagination.total,
        'totalPages': pagination.pages,
    })


@stores_bp.route('/<int:store_id>')
def get_store(store_id):
    store = store_service.get_store(store_id)
    return jsonify(store_dict(store, snack_count=store.active_snack_count()))


@stores_bp.route('', methods=['POST'])
@login_required
def create_store():
    """Create a store, or return the identical one that already exists."""
    form = load_form(StoreForm)
    store, created = store_service.create_store(
        current_user._get_current_object(),
        form.name.data,
        form.latitude.data,
        form.longitude.data,
        address=form.address.data,
    )
    return jsonify(store_dict(store)), 201 if created else 200


@stores_bp.route('/<int:store_id>', methods=['PUT'])
@login_required
def update_store(store_id):
    form = load_form(StoreForm)
    store = store_service.update_store(
        current_user._get_current_object(),
        store_id,
        form.name.data,
        form.latitude.data,
        form.longitude.data,
        address=form.address.data,
    )
    return jsonify(store_dict(store))


@stores_bp.route('/<int:store_id>', methods=['DELETE'])
@login_required
def delete_store(store_id):
    store_service.delete_store(current_user._get_current_object(), store_id)
    return '', 204
