"""Shared fixtures: fake completion provider, per-test database, API client."""

import json
import os
from typing import Any, Dict, List, Optional, Union

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import httpx
import jwt
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.config import settings
from app.database import Base, get_db
from app.main import app
from app.services.completion_client import ChatCompletionClient
from app.services.recommendation_service import (
    RecommendationService,
    get_recommendation_service,
)


SAMPLE_RECOMMENDATION = {
    "itinerary": [
        {
            "day": 1,
            "activities": [
                {
                    "time": "09:00",
                    "location": "Tanah Lot",
                    "activity": "Sunrise at the temple",
                    "estimatedCost": 100000,
                }
            ],
        }
    ],
    "costBreakdown": {
        "transportation": 2000000,
        "accommodation": 3500000,
        "food": 1500000,
        "activities": 1000000,
        "total": 8000000,
    },
    "tips": ["Book early", "Carry cash", "Respect temple dress codes"],
    "alternatives": [
        {"destination": "Lombok", "estimatedCost": 5000000, "reason": "Quieter beaches"}
    ],
}

SAMPLE_SUGGESTIONS = {
    "suggestions": [
        {
            "destination": "Yogyakarta",
            "estimatedCost": 3000000,
            "duration": 3,
            "reason": "Culture on a budget",
            "highlights": ["Borobudur", "Malioboro"],
        },
        {
            "destination": "Bandung",
            "estimatedCost": 2500000,
            "duration": 2,
            "reason": "Cool weather and food",
            "highlights": ["Kawah Putih"],
        },
    ]
}


def completion_reply(content: Union[Dict[str, Any], str]) -> Dict[str, Any]:
    """Provider body whose first choice carries `content`."""
    if not isinstance(content, str):
        content = json.dumps(content)
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class FakeProvider:
    """Scripted completion provider behind an httpx.MockTransport.

    Each queued outcome is used by one upstream call: an int is returned as
    that HTTP status, a dict as a 200 completion, and "connect_error" raises a
    transport failure. The last outcome repeats once the queue runs out.
    """

    def __init__(self):
        self.outcomes: List[Union[int, Dict[str, Any], str]] = [SAMPLE_RECOMMENDATION]
        self.requests: List[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def queue(self, *outcomes):
        self.outcomes = list(outcomes)

    def last_payload(self) -> Optional[Dict[str, Any]]:
        if not self.requests:
            return None
        return json.loads(self.requests[-1].content)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]

        if outcome == "connect_error":
            raise httpx.ConnectError("connection refused", request=request)
        if isinstance(outcome, int):
            return httpx.Response(outcome, json={"error": {"message": "upstream failure"}})
        return httpx.Response(200, json=completion_reply(outcome))


def make_token(user_id: str = "user-1", email: Optional[str] = "dewi@example.com", **claims) -> str:
    payload = {"sub": user_id, "aud": settings.jwt_audience, "role": "authenticated"}
    if email:
        payload["email"] = email
    payload.update(claims)
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def auth_headers(user_id: str = "user-1", email: Optional[str] = "dewi@example.com") -> Dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id, email)}"}


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def completion_client(provider: FakeProvider) -> ChatCompletionClient:
    """Client wired to the fake provider with no retry delay."""
    return ChatCompletionClient(
        api_key="test-key",
        base_url="https://api.openai.test/v1",
        retry_delay=0,
        max_attempts=2,
        transport=provider.transport,
    )


@pytest_asyncio.fixture
async def session_factory():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)

    await engine.dispose()


@pytest_asyncio.fixture
async def client(session_factory, completion_client):
    """API client with the database and the completion provider replaced."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_recommendation_service] = (
        lambda: RecommendationService(completion_client)
    )

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def broken_db_client(completion_client):
    """API client whose database has no tables, so every query fails."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    factory = async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)

    async def override_get_db():
        async with factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_recommendation_service] = (
        lambda: RecommendationService(completion_client)
    )

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    await engine.dispose()
