import pytest

from sitecms.app import create_app
from sitecms.config import Config
from sitecms.services.content_service import ContentStore
from sitecms.services.upload_service import UploadReceiver

ADMIN_KEY = "s3cret"


@pytest.fixture
def config(tmp_path):
    return Config(
        host="127.0.0.1",
        port=3000,
        admin_key=ADMIN_KEY,
        data_dir=tmp_path / "data",
        uploads_dir=tmp_path / "uploads",
        public_dir=tmp_path / "public",
        max_upload_bytes=1024,
    )


@pytest.fixture
def uploads(config):
    return UploadReceiver(config)


@pytest.fixture
def store(config, uploads):
    config.ensure_dirs()
    return ContentStore(config, media=uploads)


@pytest.fixture
def app(config):
    app = create_app(config)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_headers():
    return {"x-admin-key": ADMIN_KEY}
