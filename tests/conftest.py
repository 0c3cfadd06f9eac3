import os
import sys
from pathlib import Path

# Ajoute la racine du projet au PYTHONPATH EN PREMIER
sys.path.insert(0, str(Path(__file__).parent.parent))

# Config de test AVANT d'importer l'app (lue une seule fois à l'import)
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["JWT_SECRET"] = "test-secret-key-for-the-test-suite-only"
os.environ["JWT_EXPIRE_MIN"] = "60"
os.environ["BCRYPT_ROUNDS"] = "4"  # bcrypt rapide pour les tests
os.environ["SEED_DATABASE"] = "false"

import pytest
from fastapi.testclient import TestClient

from taskapi.core.database import Base, SessionLocal, engine
from taskapi.main import app


@pytest.fixture(autouse=True)
def setup_teardown():
    """Crée et nettoie la DB avant/après chaque test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    """Client de test FastAPI"""
    return TestClient(app)


@pytest.fixture
def db():
    """Session DB pour les tests"""
    db = SessionLocal()
    yield db
    db.close()


@pytest.fixture
def make_user(client):
    """Inscrit un utilisateur via l'API et retourne le payload d'auth"""
    def _make(username, email=None, password="Secret1!", **extra):
        response = client.post("/auth/register", json={
            "username": username,
            "email": email or f"{username}@example.com",
            "password": password,
            **extra,
        })
        assert response.status_code == 201, response.text
        return response.json()["data"]
    return _make


@pytest.fixture
def auth_headers(make_user):
    """Headers Authorization pour un utilisateur de test"""
    data = make_user("testuser")
    return {"Authorization": f"Bearer {data['token']}"}
