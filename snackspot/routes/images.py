"""Snack image routes."""

from flask import Blueprint, request, Response
from flask_login import login_required, current_user

from snackspot.services import snack_service

images_bp = Blueprint('images', __name__)

CACHE_CONTROL = 'public, max-age=31536000, immutable'


@images_bp.route('/<int:snack_id>')
def get_image(snack_id):
    """Stream the stored image bytes."""
    data, content_type = snack_service.get_snack_image(snack_id)
    response = Response(data, mimetype=content_type)
    response.headers['Cache-Control'] = CACHE_CONTROL
    return response


@images_bp.route('/<int:snack_id>', methods=['POST'])
@login_required
def upload_image(snack_id):
    """Attach an uploaded image (multipart field ``image``) to a snack."""
    file = request.files.get('image')
    snack_service.set_snack_image(
        current_user._get_current_object(),
        snack_id,
        file.read() if file else None,
        filename=file.filename if file else None,
    )
    return '', 204
