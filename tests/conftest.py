import pytest
from fastapi.testclient import TestClient

from prepal.core.config import get_settings
from prepal.core.deps import get_genai_client, get_quiz_engine
from prepal.main import create_app
from prepal.services.storage import StorageService

from fakes import FakeGenAIClient


@pytest.fixture
def fake_client():
    return FakeGenAIClient()


@pytest.fixture
def settings_env(tmp_path, monkeypatch):
    """
    Dossiers uploads/temp isolés et retry sans attente.
    """
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.setenv("APP_NAME", "PrepPal API (tests)")
    monkeypatch.setenv("UPLOADS_PATH", str(tmp_path / "uploads"))
    monkeypatch.setenv("TEMP_PATH", str(tmp_path / "temp"))
    monkeypatch.setenv("MAX_UPLOAD_MB", "1")  # limite faible pour tests
    monkeypatch.setenv("UPLOAD_RETRY_DELAY_SECONDS", "0")
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost")

    # IMPORTANT: vider les caches pour prendre en compte les env
    get_settings.cache_clear()
    get_quiz_engine.cache_clear()
    yield tmp_path
    get_settings.cache_clear()
    get_quiz_engine.cache_clear()


@pytest.fixture
def storage(settings_env):
    s = get_settings()
    return StorageService(uploads_path=s.UPLOADS_PATH, temp_path=s.TEMP_PATH, max_upload_mb=s.MAX_UPLOAD_MB)


@pytest.fixture
def test_client(settings_env, fake_client):
    app = create_app()
    app.dependency_overrides[get_genai_client] = lambda: fake_client
    with TestClient(app) as client:
        yield client
