import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import BASE_DIR, Settings, get_settings
from app.core.security import TokenCodec, get_password_hash
from app.db.database import Base, get_db
from app.models import Client, User, UserRole
from app.services.media_client import get_media_client
from app.services.pdf_renderer import get_pdf_renderer
from main import app

TEST_SECRET = "test-secret-key"
PASSWORD = "longpass1"


class FakeMediaClient:
    def __init__(self):
        self.uploads = []
        self.deletions = []

    def upload(self, data_uri, folder, resource_type, public_id=None, transformation=None):
        self.uploads.append({
            "data_uri": data_uri,
            "folder": folder,
            "resource_type": resource_type,
            "public_id": public_id,
            "transformation": transformation,
        })
        asset_id = f"{folder}/{public_id or 'asset-1'}"
        return {"secure_url": f"https://res.cloudinary.com/demo/{resource_type}/upload/{asset_id}", "public_id": asset_id}

    def delete_resources(self, public_ids, resource_type):
        self.deletions.append((resource_type, list(public_ids)))
        return {"deleted": {public_id: "deleted" for public_id in public_ids}}


class FakeRenderer:
    def __init__(self):
        self.calls = []
        self.error = None

    def render(self, html, options):
        if self.error:
            raise self.error
        self.calls.append((html, options))
        return b"%PDF-1.4 fake"


@pytest.fixture
def settings():
    return Settings(
        secret_key=TEST_SECRET,
        cloudinary_cloud_name="demo",
        cloudinary_api_key="key",
        cloudinary_api_secret="secret",
        assets_dir=os.path.join(BASE_DIR, "assets"),
    )

@pytest.fixture
def codec(settings):
    return TokenCodec(settings)

@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()

@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()

@pytest.fixture
def fake_media():
    return FakeMediaClient()

@pytest.fixture
def fake_renderer():
    return FakeRenderer()

@pytest.fixture
def client(session_factory, settings, fake_media, fake_renderer):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_media_client] = lambda: fake_media
    app.dependency_overrides[get_pdf_renderer] = lambda: fake_renderer

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}

def sign_up(client, email="jane@x.com", name="Jane Doe", password=PASSWORD):
    response = client.post("/auth/sign-up", json={"name": name, "email": email, "password": password})
    assert response.status_code == 201, response.text
    return response.json()["sessionToken"]

@pytest.fixture
def token(client):
    return sign_up(client)

@pytest.fixture
def make_user(db_session):
    def _make_user(email, role=UserRole.default, password=PASSWORD, name="Test User"):
        user = User(name=name, email=email, password_hash=get_password_hash(password), role=role)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make_user

@pytest.fixture
def make_client_record(db_session):
    def _make_client_record(name):
        record = Client(name=name)
        db_session.add(record)
        db_session.commit()
        db_session.refresh(record)
        return record
    return _make_client_record
