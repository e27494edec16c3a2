import pytest
from fastapi.testclient import TestClient

import config
import database
from models import Patient


@pytest.fixture
def make_patient():
    def _make(**overrides):
        fields = {
            "id": "pat_test",
            "name": "Asha",
            "email": "asha@example.com",
            "phone": "9999999999",
            "age": 32,
            "weight": 58,
            "height": 162,
        }
        fields.update(overrides)
        return Patient(**fields)
    return _make


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(database, "DATABASE_PATH", str(tmp_path / "test.db"))
    # No provider keys: the diet chart generator must use its fallback.
    monkeypatch.setattr(config, "GROQ_API_KEY", "")
    monkeypatch.setattr(config, "OPENROUTER_API_KEY", "")

    from main import app
    with TestClient(app) as c:
        yield c
