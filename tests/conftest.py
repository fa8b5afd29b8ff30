"""
Pytest configuration and fixtures for QR Selfie tests
"""

import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from qrselfie.config import Settings
from qrselfie.main import create_app

BASE_URL = "http://192.168.1.50:3000"


@pytest.fixture
def settings(tmp_path):
    """Settings pointing every directory at a fresh temp dir."""
    return Settings(
        _env_file=None,
        PUBLIC_BASE_URL=BASE_URL,
        UPLOADS_DIR=tmp_path / "uploads",
        DATA_DIR=tmp_path / "data",
        METRICS_ENABLED=True,
    )


@pytest.fixture
def base_url():
    return BASE_URL


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture(scope="session")
def jpeg_bytes():
    buf = io.BytesIO()
    Image.new("RGB", (32, 24), (200, 120, 40)).save(buf, format="JPEG")
    return buf.getvalue()


@pytest.fixture(scope="session")
def png_bytes():
    buf = io.BytesIO()
    Image.new("RGB", (16, 16), (10, 200, 90)).save(buf, format="PNG")
    return buf.getvalue()
