import jwt
import pytest
from fastapi.testclient import TestClient

from storefront.core.config import AuthConfig, StoreConfig
from storefront.db.client import DbClient, DbConfig
from storefront.db.models import Product, User
from storefront.services.media import MediaService
from storefront.store import create_app

JWT_SECRET = "storefront-test-secret-at-least-32-bytes"


@pytest.fixture
def config() -> StoreConfig:
    return StoreConfig(database_url="sqlite://", auth=AuthConfig(jwt_secret=JWT_SECRET))


@pytest.fixture
def db_client(config):
    client = DbClient(DbConfig(url=config.database_url))
    client.create_all()
    yield client
    client.engine.dispose()


@pytest.fixture
def db(db_client):
    session = db_client.SessionLocal()
    yield session
    session.close()


@pytest.fixture
def app(config, db_client):
    return create_app(config, db_client=db_client, media=MediaService(config.media))


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def make_user(db, name="Ada", email=None, role="user") -> User:
    user = User(name=name, email=email or f"{name.lower()}@example.com", role=role)
    db.add(user)
    db.commit()
    return user


def make_product(db, **overrides) -> Product:
    data = {
        "name": "Wireless Headphones",
        "description": "Over-ear, noise cancelling",
        "price": 199.0,
        "cutted_price": 249.0,
        "category": "Electronics",
        "stock": 10,
        "brand_name": "Sonic",
        "brand_logo": {"public_id": "brand_1", "url": "https://example.com/logo.png"},
        "images": [{"public_id": "product_1", "url": "https://example.com/1.png"}],
        "highlights": ["Bluetooth 5.3"],
        "specifications": [{"title": "Battery", "description": "30h"}],
    }
    data.update(overrides)
    product = Product(**data)
    db.add(product)
    db.commit()
    return product


def token_for(user: User, secret: str = JWT_SECRET) -> str:
    return jwt.encode({"id": user.id}, secret, algorithm="HS256")


def bearer(user: User) -> dict:
    return {"Authorization": f"Bearer {token_for(user)}"}


@pytest.fixture
def admin(db) -> User:
    return make_user(db, name="Grace", role="admin")


@pytest.fixture
def customer(db) -> User:
    return make_user(db, name="Ada", role="user")


@pytest.fixture
def catalog(db):
    """30 products: 25 Electronics priced 50..2000 and 5 Books priced 100..500."""
    products = []
    for i in range(25):
        products.append(
            make_product(
                db,
                name=f"Gadget {i:02d}" if i % 5 else f"Smart PHONE {i:02d}",
                price=50 + i * 81.25,
                category="Electronics",
                ratings=float(i % 6),
            )
        )
    for i in range(5):
        products.append(
            make_product(db, name=f"Phone Book {i}", price=100 + i * 100, category="Books")
        )
    return products
