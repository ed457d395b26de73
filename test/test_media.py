import hashlib
from urllib.parse import parse_qs

import httpx
import pytest
from fastapi.testclient import TestClient

from conftest import bearer, make_product
from storefront.core.config import MediaConfig
from storefront.services.catalog import replace_product_images, resolve_product_media
from storefront.services.media import (
    PLACEHOLDER_BRAND_LOGO,
    PLACEHOLDER_PRODUCT_IMAGES,
    FileUpload,
    MediaService,
)
from storefront.store import create_app

API = "/api/v1"


class FakeCloudinary:
    def __init__(self):
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path.endswith("/upload"):
            n = len(self.requests)
            return httpx.Response(
                200,
                json={"public_id": f"products/img{n}", "secure_url": f"https://cdn.test/img{n}.png"},
            )
        return httpx.Response(200, json={"result": "ok"})

    def form(self, index: int) -> dict:
        return {k: v[0] for k, v in parse_qs(self.requests[index].content.decode()).items()}


@pytest.fixture
def cloudinary():
    return FakeCloudinary()


@pytest.fixture
def media_config():
    return MediaConfig(cloud_name="demo", api_key="key-123", api_secret="shh")


@pytest.fixture
def media(media_config, cloudinary):
    return MediaService(media_config, client=httpx.Client(transport=httpx.MockTransport(cloudinary)))


def test_configured_requires_every_credential():
    assert not MediaConfig().configured
    assert not MediaConfig(cloud_name="demo", api_key="k").configured
    assert not MediaConfig(cloud_name="your_cloud_name", api_key="k", api_secret="s").configured
    assert MediaConfig(cloud_name="demo", api_key="k", api_secret="s").configured


def test_signature(media):
    expected = hashlib.sha1(b"folder=products&timestamp=1700000000shh").hexdigest()
    assert media.sign({"timestamp": 1700000000, "folder": "products"}) == expected


def test_upload_string_source(media, cloudinary):
    result = media.upload("https://example.com/pic.png", folder="products")

    assert result == {"public_id": "products/img1", "url": "https://cdn.test/img1.png"}
    request = cloudinary.requests[0]
    assert request.url.path == "/v1_1/demo/image/upload"
    form = cloudinary.form(0)
    assert form["file"] == "https://example.com/pic.png"
    assert form["api_key"] == "key-123"
    assert form["folder"] == "products"
    assert form["signature"] == media.sign({"folder": "products", "timestamp": form["timestamp"]})


def test_upload_file_source_is_multipart(media, cloudinary):
    media.upload(FileUpload("a.png", b"\x89PNG", "image/png"), folder="brands")
    request = cloudinary.requests[0]
    assert request.url.path == "/v1_1/demo/auto/upload"
    assert request.headers["content-type"].startswith("multipart/form-data")


def test_upload_errors_propagate(media_config):
    failing = MediaService(
        media_config,
        client=httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(500))),
    )
    with pytest.raises(httpx.HTTPStatusError):
        failing.upload("https://example.com/pic.png", folder="products")


def test_destroy_without_credentials_is_a_no_op(cloudinary):
    media = MediaService(MediaConfig(), client=httpx.Client(transport=httpx.MockTransport(cloudinary)))
    media.destroy("products/img1")
    assert cloudinary.requests == []


def test_unconfigured_media_uses_placeholders(cloudinary):
    media = MediaService(MediaConfig(), client=httpx.Client(transport=httpx.MockTransport(cloudinary)))
    images, logo = resolve_product_media(media, [FileUpload("a.png", b"1")], None)
    assert [i["url"] for i in images] == list(PLACEHOLDER_PRODUCT_IMAGES)
    assert logo["url"] == PLACEHOLDER_BRAND_LOGO
    assert cloudinary.requests == []


def test_replacing_with_no_images_stores_none(cloudinary):
    media = MediaService(MediaConfig(), client=httpx.Client(transport=httpx.MockTransport(cloudinary)))
    current = [{"public_id": "products/img1", "url": "https://cdn.test/img1.png"}]
    assert replace_product_images(media, current, []) == []
    assert cloudinary.requests == []


def test_configured_media_without_files_falls_back(media, cloudinary):
    images, logo = resolve_product_media(media, [], None)
    assert [i["url"] for i in images] == [PLACEHOLDER_PRODUCT_IMAGES[0]]
    assert logo["url"] == PLACEHOLDER_BRAND_LOGO
    assert cloudinary.requests == []


@pytest.fixture
def media_client(config, db_client, media):
    app = create_app(config.model_copy(update={"media": media.config}), db_client=db_client, media=media)
    with TestClient(app) as test_client:
        yield test_client


def test_create_product_uploads_files(media_client, cloudinary, admin):
    response = media_client.post(
        f"{API}/admin/product/new",
        headers=bearer(admin),
        data={
            "name": "Camera",
            "description": "Mirrorless",
            "price": "900",
            "category": "Electronics",
            "stock": "2",
            "brandname": "Lens Co",
        },
        files=[
            ("images", ("front.png", b"front", "image/png")),
            ("images", ("back.png", b"back", "image/png")),
            ("logo", ("logo.png", b"logo", "image/png")),
        ],
    )
    assert response.status_code == 201
    product = response.json()["product"]
    assert [i["url"] for i in product["images"]] == [
        "https://cdn.test/img1.png",
        "https://cdn.test/img2.png",
    ]
    assert product["brand"]["logo"]["url"] == "https://cdn.test/img3.png"


def test_delete_product_destroys_images(media_client, cloudinary, admin, db):
    product = make_product(
        db,
        images=[{"public_id": "products/a", "url": "u1"}, {"public_id": "products/b", "url": "u2"}],
    )
    media_client.delete(f"{API}/admin/product/{product.id}", headers=bearer(admin))

    destroyed = [cloudinary.form(i)["public_id"] for i in range(len(cloudinary.requests))]
    assert destroyed == ["products/a", "products/b"]
    assert all(r.url.path == "/v1_1/demo/image/destroy" for r in cloudinary.requests)


def test_update_product_replaces_images(media_client, cloudinary, admin, db):
    product = make_product(db, images=[{"public_id": "products/old", "url": "u"}])
    response = media_client.put(
        f"{API}/admin/product/{product.id}",
        headers=bearer(admin),
        json={"images": ["data:image/png;base64,AAAA"]},
    )
    assert response.status_code == 201
    assert cloudinary.form(0)["public_id"] == "products/old"
    assert response.json()["product"]["images"] == [
        {"public_id": "products/img2", "url": "https://cdn.test/img2.png"}
    ]
