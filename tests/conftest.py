import json
import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-with-enough-length-for-hs256")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("COMPLETION_API_KEY", "test-key")

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import main
from completion import CompletionClient
from database import Base
from security import TokenIssuer
from store import CredentialStore

COMPLETION_URL = "http://completion.test/v1"


class FakeCompletionAPI:
    """Stands in for the remote API behind an httpx.MockTransport."""

    def __init__(self):
        self.status_code = 200
        self.reply = "Hello from the model"
        self.body = None
        self.error = None
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.body is not None:
            return httpx.Response(self.status_code, json=self.body)
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"error": {"message": "upstream exploded"}})
        payload = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "id": "chatcmpl-1",
                "object": "chat.completion",
                "created": 1700000000,
                "model": payload["model"],
                "choices": [
                    {
                        "index": 0,
                        "message": {"role": "assistant", "content": self.reply},
                        "finish_reason": "stop",
                    }
                ],
            },
        )


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def store(db_session):
    return CredentialStore(db_session)


@pytest.fixture
def issuer():
    return TokenIssuer("unit-test-secret-key-with-enough-length")


@pytest.fixture
def fake_api():
    return FakeCompletionAPI()


@pytest.fixture
def completion(fake_api):
    return CompletionClient(
        api_key="test-key",
        base_url=COMPLETION_URL,
        model="test-model",
        timeout=5.0,
        http_client=httpx.Client(transport=httpx.MockTransport(fake_api.handler)),
    )


@pytest.fixture
def client(db_session, issuer, completion):
    def override_get_db():
        yield db_session

    main.app.dependency_overrides[main.get_db] = override_get_db
    main.app.dependency_overrides[main.get_token_issuer] = lambda: issuer
    main.app.dependency_overrides[main.get_completion_client] = lambda: completion
    with TestClient(main.app) as c:
        yield c
    main.app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    client.post("/auth/register", json={"email": "ada@example.com", "password": "s3cret"})
    tokens = client.post("/auth/login", json={"email": "ada@example.com", "password": "s3cret"}).json()
    return {"Authorization": f"Bearer {tokens['accessToken']}"}
