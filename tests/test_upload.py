import base64
import time

import anyio
import httpx
import pytest

from app.services.media_client import get_media_client
from main import app
from tests.conftest import FakeMediaClient, auth_headers

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"


def test_uploads_allowed_image(client, token, fake_media):
    response = client.post(
        "/upload/image",
        files={"image": ("photo.png", PNG_BYTES, "image/png")},
        headers=auth_headers(token),
    )

    assert response.status_code == 200
    assert response.json() == {
        "publicUrl": "https://res.cloudinary.com/demo/image/upload/images/asset-1",
        "publicId": "images/asset-1",
    }
    upload = fake_media.uploads[0]
    assert upload["folder"] == "images"
    assert upload["resource_type"] == "image"
    assert upload["transformation"] == [{"width": 1080, "height": 1080, "crop": "limit"}]
    assert upload["data_uri"] == "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode()

def test_rejects_disallowed_image_type(client, token, fake_media):
    response = client.post(
        "/upload/image",
        files={"image": ("anim.gif", b"GIF89a", "image/gif")},
        headers=auth_headers(token),
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Only JPG, JPEG, and PNG images are allowed"}
    assert fake_media.uploads == []

def test_rejects_missing_image(client, token):
    response = client.post("/upload/image", data={"note": "nothing attached"}, headers=auth_headers(token))

    assert response.status_code == 400
    assert response.json() == {"error": "Image is required"}

def test_upload_requires_authentication(client, fake_media):
    response = client.post("/upload/image", files={"image": ("photo.png", PNG_BYTES, "image/png")})

    assert response.status_code == 401
    assert fake_media.uploads == []

def test_delete_assets_splits_reports_and_images(client, token, fake_media):
    response = client.post(
        "/upload/delete-assets",
        json={"assetsIds": ["reports/report-1.pdf", "images/abc", "reports/notes.txt"]},
        headers=auth_headers(token),
    )

    assert response.status_code == 200
    assert fake_media.deletions == [
        ("raw", ["reports/report-1.pdf"]),
        ("image", ["images/abc", "reports/notes.txt"]),
    ]

def test_delete_assets_requires_ids(client, token, fake_media):
    response = client.post("/upload/delete-assets", json={"assetsIds": []}, headers=auth_headers(token))

    assert response.status_code == 400
    assert response.json() == {"error": "At least one asset ID is required."}
    assert fake_media.deletions == []


class SlowMediaClient(FakeMediaClient):
    def upload(self, *args, **kwargs):
        time.sleep(0.5)
        return super().upload(*args, **kwargs)


@pytest.fixture
def anyio_backend():
    return "asyncio"

@pytest.mark.anyio
async def test_slow_media_host_does_not_block_event_loop(client, token):
    app.dependency_overrides[get_media_client] = lambda: SlowMediaClient()
    gaps = []
    done = anyio.Event()

    async def heartbeat():
        last = time.perf_counter()
        while not done.is_set():
            await anyio.sleep(0.05)
            now = time.perf_counter()
            gaps.append(now - last)
            last = now

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        async with anyio.create_task_group() as tg:
            tg.start_soon(heartbeat)
            response = await http.post(
                "/upload/image",
                files={"image": ("photo.png", PNG_BYTES, "image/png")},
                headers=auth_headers(token),
            )
            done.set()

    assert response.status_code == 200
    assert len(gaps) >= 5
    assert max(gaps) < 0.3
