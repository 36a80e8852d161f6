"""Services package - cache, session storage and external service clients."""
from .redis_cache import RedisCache, CacheKeys, get_redis_cache
from .session_store import SessionStore, StoredSession, get_session_store
from .audit_client import AuditClient, get_audit_client, normalize_website_url
from .report_webhook import (
    DailyRateLimiter,
    ReportService,
    ReportWebhookClient,
    format_report_payload,
    get_report_service,
    should_generate_pdf,
)
from .errors import ExternalServiceError, AuditServiceError, ReportWebhookError

__all__ = [
    "RedisCache",
    "CacheKeys",
    "get_redis_cache",
    "SessionStore",
    "StoredSession",
    "get_session_store",
    "AuditClient",
    "get_audit_client",
    "normalize_website_url",
    "DailyRateLimiter",
    "ReportService",
    "ReportWebhookClient",
    "format_report_payload",
    "get_report_service",
    "should_generate_pdf",
    "ExternalServiceError",
    "AuditServiceError",
    "ReportWebhookError",
]
