"""Image upload helpers."""

from flask import current_app

DEFAULT_CONTENT_TYPE = 'application/octet-stream'


def allowed_file(filename):
    """Check if file extension is allowed."""
    allowed = current_app.config.get('ALLOWED_IMAGE_EXTENSIONS', {'png', 'jpg', 'jpeg', 'gif', 'webp'})
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in allowed


def sniff_content_type(data):
    """Detect the image type from its leading magic bytes."""
    if not data or len(data) < 4:
        return DEFAULT_CONTENT_TYPE

    if data[:3] == b'\xff\xd8\xff':
        return 'image/jpeg'
    if data[:4] == b'\x89PNG':
        return 'image/png'
    if data[:6] in (b'GIF87a', b'GIF89a'):
        return 'image/gif'
    if len(data) >= 12 and data[:4] == b'RIFF' and data[8:12] == b'WEBP':
        return 'image/webp'

    return DEFAULT_CONTENT_TYPE
