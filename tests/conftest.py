import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import mongomock
import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app_factory import create_app
from user_store import UserStore


class TickingClock:
    """Horloge déterministe : avance d'une seconde à chaque appel."""

    def __init__(self):
        self.current = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        self.current += timedelta(seconds=1)
        return self.current


@pytest.fixture()
def mongo_db():
    # Les clients mongomock d'un même hôte partagent leurs données
    mongo_client = mongomock.MongoClient()
    mongo_client.drop_database("user_directory")
    yield mongo_client["user_directory"]
    mongo_client.drop_database("user_directory")


@pytest.fixture()
def store(mongo_db) -> UserStore:
    user_store = UserStore(mongo_db["users"], clock=TickingClock())
    user_store.ensure_indexes()
    return user_store


@pytest.fixture()
def client(mongo_db, store):
    app = create_app(mongo_db, user_store=store)
    with TestClient(app) as test_client:
        yield test_client
