# =============================================================================
# tests/test_images.py - Snack image upload and retrieval
# =============================================================================

import io

import pytest

from snackspot.utils.images import DEFAULT_CONTENT_TYPE, sniff_content_type
from tests.factories import auth_headers, make_category, make_snack, make_store, make_user

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
JPEG = b"\xff\xd8\xff\xe0" + b"\x00" * 32
GIF = b"GIF89a" + b"\x00" * 32
WEBP = b"RIFF\x00\x00\x00\x00WEBPVP8 " + b"\x00" * 32


class TestSniffContentType:
    """Tests for sniff_content_type."""

    @pytest.mark.parametrize("data,expected", [
        (PNG, "image/png"),
        (JPEG, "image/jpeg"),
        (GIF, "image/gif"),
        (WEBP, "image/webp"),
        (b"hello world", DEFAULT_CONTENT_TYPE),
        (b"", DEFAULT_CONTENT_TYPE),
    ])
    def test_detects_type(self, data, expected):
        assert sniff_content_type(data) == expected


class TestImageEndpoints:
    """GET/POST /api/v1/images/<snack_id>"""

    def _setup(self, app):
        with app.app_context():
            owner = make_user("owner")
            other = make_user("other")
            snack = make_snack(owner, make_store(owner), make_category())
            return snack.id, auth_headers(owner), auth_headers(other)

    def _upload(self, client, snack_id, headers, data=PNG, filename="pie.png"):
        return client.post(
            f"/api/v1/images/{snack_id}",
            data={"image": (io.BytesIO(data), filename)},
            headers=headers,
            content_type="multipart/form-data",
        )

    def test_no_image_yet(self, app, client):
        snack_id, _, _ = self._setup(app)
        response = client.get(f"/api/v1/images/{snack_id}")
        assert response.status_code == 404
        assert response.get_json()["message"] == "Image not found"

    def test_unknown_snack(self, client):
        assert client.get("/api/v1/images/999").status_code == 404

    def test_upload_then_fetch(self, app, client):
        snack_id, owner, _ = self._setup(app)

        assert self._upload(client, snack_id, owner).status_code == 204
        response = client.get(f"/api/v1/images/{snack_id}")

        assert response.status_code == 200
        assert response.mimetype == "image/png"
        assert response.data == PNG
        assert "immutable" in response.headers["Cache-Control"]
        assert client.get(f"/api/v1/snacks/{snack_id}").get_json()["hasImage"] is True

    def test_non_owner_upload_denied(self, app, client):
        snack_id, _, other = self._setup(app)
        assert self._upload(client, snack_id, other).status_code == 403
        assert client.get(f"/api/v1/images/{snack_id}").status_code == 404

    def test_rejects_disallowed_extension(self, app, client):
        snack_id, owner, _ = self._setup(app)
        response = self._upload(client, snack_id, owner, filename="pie.exe")
        assert response.status_code == 400

    def test_rejects_unrecognised_bytes(self, app, client):
        snack_id, owner, _ = self._setup(app)
        response = self._upload(client, snack_id, owner, data=b"not really a png")
        assert response.status_code == 400
        assert response.get_json()["message"] == "Unsupported image format"

    def test_rejects_oversized_image(self, app, client):
        snack_id, owner, _ = self._setup(app)
        app.config["MAX_IMAGE_BYTES"] = 16
        response = self._upload(client, snack_id, owner)
        assert response.status_code == 400

    def test_missing_file(self, app, client):
        snack_id, owner, _ = self._setup(app)
        response = client.post(f"/api/v1/images/{snack_id}", data={}, headers=owner,
                               content_type="multipart/form-data")
        assert response.status_code == 400
