"""Pytest fixtures and configuration."""
import pytest
from fastapi.testclient import TestClient
from unittest.mock import MagicMock, AsyncMock, patch
import fakeredis

from app.models import ContactInfo, FormAnswers
from app.services.redis_cache import RedisCache
from app.services.session_store import SessionStore


@pytest.fixture
def fake_cache():
    """RedisCache backed by fakeredis."""
    return RedisCache(client=fakeredis.FakeRedis(decode_responses=True))


@pytest.fixture
def session_store(fake_cache):
    """Session store on the fake cache."""
    return SessionStore(fake_cache, ttl_seconds=3600)


@pytest.fixture
def mock_redis():
    """Mock Redis service for health checks."""
    mock = MagicMock()
    mock.health_check = AsyncMock(return_value=(True, None))
    return mock


@pytest.fixture
def mock_audit_client():
    """Mock website audit client."""
    mock = MagicMock()
    mock.ping = AsyncMock(return_value=(True, None))
    mock.check_website_health = AsyncMock(return_value={"score": 80})
    return mock


@pytest.fixture
def mock_report_service():
    """Mock report service that is never rate limited."""
    from app.models import WebhookResponse

    mock = MagicMock()
    mock.limit_reached = MagicMock(return_value=False)
    mock.send_report = AsyncMock(
        return_value=WebhookResponse(success=True, message="Report was sent successfully by email")
    )
    return mock


@pytest.fixture
def client(mock_redis, mock_audit_client, session_store, mock_report_service):
    """Create test client with mocked services."""
    with patch("app.routers.health.get_redis_cache", return_value=mock_redis), \
            patch("app.routers.health.get_audit_client", return_value=mock_audit_client), \
            patch("app.routers.sessions.get_audit_client", return_value=mock_audit_client), \
            patch("app.routers.sessions.get_session_store", return_value=session_store), \
            patch("app.routers.reports.get_session_store", return_value=session_store), \
            patch("app.routers.reports.get_report_service", return_value=mock_report_service):
        from app.main import app
        yield TestClient(app)


@pytest.fixture
def sample_answers():
    """A fully answered quiz."""
    return {
        "visibility": "search_engines",
        "advertising_frequency": "weekly",
        "goals": "more_online",
        "campaign_management": "digitalpusher",
        "online_reviews": "positive",
        "previous_campaigns": "yes",
        "business_phase": "family_business",
        "implementation_time": "medium",
    }


@pytest.fixture
def sample_form_answers(sample_answers):
    return FormAnswers.from_raw(sample_answers)


@pytest.fixture
def sample_contact():
    """Sample contact details from the last form step."""
    return ContactInfo(
        salutation="Frau",
        first_name="Erika",
        last_name="Mustermann",
        company_name="Mustermann GmbH",
        company_url="https://mustermann.example",
        email="erika@mustermann.example",
        phone="+49 30 1234567",
        marketing_consent=True,
    )
