from io import BytesIO
from unittest import mock

import pytest
from cloudinary.exceptions import Error as CloudinaryError
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image

from travel_backend import media
from travel_backend.media import CloudinaryClient, MediaError, optimized_url


def png_upload(name="pic.png"):
    buf = BytesIO()
    Image.new("RGB", (4, 4), "red").save(buf, format="PNG")
    return SimpleUploadedFile(name, buf.getvalue(), content_type="image/png")


class FakeClient:
    def __init__(self, fail=False):
        self.fail = fail
        self.destroyed = []

    def list(self):
        return [{"public_id": "triplanner/a", "thumbnail_url": "https://res.cloudinary.com/x/a.jpg"}]

    def upload(self, file_obj):
        if self.fail:
            raise MediaError("boom")
        return {"url": "https://res.cloudinary.com/x/image/upload/w_auto,c_scale,f_auto,q_auto/v1/a.png",
                "public_id": "triplanner/a", "resource_type": "image"}

    def destroy(self, public_id, resource_type="image"):
        self.destroyed.append((public_id, resource_type))
        return "ok"


def test_optimized_url():
    url = "https://res.cloudinary.com/demo/image/upload/v1/triplanner/a.png"
    assert optimized_url(url, "image") == (
        "https://res.cloudinary.com/demo/image/upload/w_auto,c_scale,f_auto,q_auto/v1/triplanner/a.png"
    )
    assert "/upload/f_auto,vc_auto/" in optimized_url(url.replace("image", "video"), "video")
    assert optimized_url(url, "raw") == url
    assert optimized_url("https://example.com/a.png", "image") == "https://example.com/a.png"


class TestCloudinaryClient:
    def test_upload_uses_folder_and_auto_type(self):
        result = {"secure_url": "https://res.cloudinary.com/demo/image/upload/v1/triplanner/a.png",
                  "public_id": "triplanner/a", "resource_type": "image"}
        with mock.patch("cloudinary.uploader.upload", return_value=result) as upload:
            out = CloudinaryClient(folder="triplanner").upload(png_upload())
        assert upload.call_args.kwargs["folder"] == "triplanner"
        assert upload.call_args.kwargs["resource_type"] == "auto"
        assert out["url"].endswith("/upload/w_auto,c_scale,f_auto,q_auto/v1/triplanner/a.png")
        assert out["public_id"] == "triplanner/a"

    def test_sdk_errors_become_media_errors(self):
        client = CloudinaryClient()
        with mock.patch("cloudinary.uploader.upload", side_effect=CloudinaryError("Invalid Signature")):
            with pytest.raises(MediaError):
                client.upload(png_upload())
        with mock.patch("cloudinary.uploader.destroy", side_effect=CloudinaryError("not found")):
            with pytest.raises(MediaError):
                client.destroy("triplanner/a")

    def test_destroy_returns_result(self):
        with mock.patch("cloudinary.uploader.destroy", return_value={"result": "ok"}) as destroy:
            assert CloudinaryClient().destroy("triplanner/b", resource_type="video") == "ok"
        assert destroy.call_args.kwargs["resource_type"] == "video"


@pytest.mark.django_db
class TestMediaViews:
    def test_status_reports_configuration(self, admin_client, settings):
        assert admin_client.get("/api/media/status").data["configured"] is False
        settings.CLOUDINARY_CLOUD_NAME = "demo"
        settings.CLOUDINARY_API_KEY = "key"
        settings.CLOUDINARY_API_SECRET = "secret"
        assert admin_client.get("/api/media/status").data["configured"] is True

    def test_unconfigured_library_is_unavailable(self, admin_client):
        assert admin_client.get("/api/media").status_code == 503
        assert admin_client.post("/api/media/upload", {"file": png_upload()}, format="multipart").status_code == 503

    def test_list(self, admin_client, monkeypatch):
        monkeypatch.setattr(media, "get_media_client", lambda: FakeClient())
        res = admin_client.get("/api/media")
        assert res.status_code == 200
        assert res.data["media"][0]["public_id"] == "triplanner/a"

    def test_upload(self, admin_client, monkeypatch):
        monkeypatch.setattr(media, "get_media_client", lambda: FakeClient())
        res = admin_client.post("/api/media/upload", {"file": png_upload()}, format="multipart")
        assert res.status_code == 200
        assert res.data["public_id"] == "triplanner/a"

    def test_upload_rejects_broken_image(self, admin_client, monkeypatch):
        monkeypatch.setattr(media, "get_media_client", lambda: FakeClient())
        bad = SimpleUploadedFile("bad.png", b"not an image", content_type="image/png")
        assert admin_client.post("/api/media/upload", {"file": bad}, format="multipart").status_code == 400

    def test_upload_requires_file(self, admin_client):
        assert admin_client.post("/api/media/upload", {}, format="multipart").status_code == 400

    def test_cdn_failure_is_500(self, admin_client, monkeypatch):
        monkeypatch.setattr(media, "get_media_client", lambda: FakeClient(fail=True))
        res = admin_client.post("/api/media/upload", {"file": png_upload()}, format="multipart")
        assert res.status_code == 500

    def test_delete_accepts_either_key(self, admin_client, monkeypatch):
        client = FakeClient()
        monkeypatch.setattr(media, "get_media_client", lambda: client)
        admin_client.post("/api/media/delete", {"public_id": "triplanner/a"}, format="json")
        admin_client.post("/api/media/delete", {"publicId": "triplanner/b", "resource_type": "video"},
                          format="json")
        assert client.destroyed == [("triplanner/a", "image"), ("triplanner/b", "video")]
        assert admin_client.post("/api/media/delete", {}, format="json").status_code == 400

    def test_requires_admin(self, api_client):
        assert api_client.get("/api/media").status_code in (401, 403)
