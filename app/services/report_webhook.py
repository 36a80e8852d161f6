"""Email-report delivery through the automation webhook.

The webhook renders the report and sends the email. This module builds
its payload, enforces the per-email daily limit and relays the request.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import httpx

from app.config import get_settings
from app.models.answers import FormAnswers
from app.models.enums import Category
from app.models.report import ContactInfo, WebhookResponse, is_valid_email
from app.scoring.tiers import classify
from app.scoring.utils import parse_score, round_score
from app.services.errors import ReportWebhookError
from app.services.redis_cache import CacheKeys, RedisCache, get_redis_cache

logger = logging.getLogger(__name__)

DEFAULT_SCORE = 50

# Shown in the report when a field was left empty
CONTACT_DEFAULTS: dict[str, str] = {
    "salutation": "Dear",
    "first_name": "",
    "last_name": "Prospect",
    "company_name": "Your company",
    "company_url": "Your website",
    "email": "",
    "phone": "",
}

ANSWER_DEFAULTS: dict[Category, str] = {
    Category.VISIBILITY: "social_media",
    Category.ADVERTISING_FREQUENCY: "monthly",
    Category.GOALS: "more_online",
    Category.CAMPAIGN_MANAGEMENT: "self",
    Category.ONLINE_REVIEWS: "positive",
    Category.PREVIOUS_CAMPAIGNS: "no",
    Category.BUSINESS_PHASE: "planning",
    Category.IMPLEMENTATION_TIME: "immediate",
}


def should_generate_pdf(contact: ContactInfo, score: Optional[int]) -> bool:
    """PDF attachment needs an email, a company name or URL, and a score."""
    return (
        bool(contact.email)
        and bool(contact.company_name or contact.company_url)
        and score is not None
    )


def format_report_payload(
    contact: ContactInfo,
    answers: FormAnswers,
    final_score: Optional[int],
    locale: Optional[str] = None,
    now: Optional[datetime] = None,
) -> dict[str, Any]:
    """Webhook payload: personal info, answers, score, locale and timestamp."""
    settings = get_settings()
    now = now or datetime.now(timezone.utc)
    parsed = parse_score(final_score)
    score = round_score(parsed) if parsed is not None else DEFAULT_SCORE

    payload: dict[str, Any] = {}
    for field, default in CONTACT_DEFAULTS.items():
        payload[field] = getattr(contact, field) or default

    raw_answers = answers.to_raw()
    for category, default in ANSWER_DEFAULTS.items():
        payload[category.value] = raw_answers.get(category.value) or default

    generate_pdf = should_generate_pdf(contact, final_score)
    payload.update({
        "visibility_score": score,
        "tier": classify(score).value,
        "marketing_consent": contact.marketing_consent,
        "locale": locale or settings.default_locale,
        "date": now.date().isoformat(),
        "timestamp": now.isoformat(),
        "source": settings.report_source,
        "generatePdf": generate_pdf,
        "format": "pdf+html" if generate_pdf else "html",
    })
    return payload


class DailyRateLimiter:
    """Caps successful reports per email address per UTC day."""

    def __init__(self, cache: RedisCache, limit: int):
        self.cache = cache
        self.limit = limit

    @staticmethod
    def _day(now: Optional[datetime] = None) -> str:
        return (now or datetime.now(timezone.utc)).date().isoformat()

    @staticmethod
    def _seconds_until_midnight(now: datetime) -> int:
        tomorrow = (now + timedelta(days=1)).replace(hour=0, minute=0, second=0, microsecond=0)
        return max(1, int((tomorrow - now).total_seconds()))

    def has_reached_limit(self, email: str, now: Optional[datetime] = None) -> bool:
        return self.cache.get_int(CacheKeys.report_count(email, self._day(now))) >= self.limit

    def reserve(self, email: str, now: Optional[datetime] = None) -> bool:
        """Claim one report slot for today; False (and nothing claimed) when full.

        The counter is incremented before the send, so concurrent requests
        for the same address cannot all pass the limit check.
        """
        now = now or datetime.now(timezone.utc)
        key = CacheKeys.report_count(email, self._day(now))
        count = self.cache.incr(key, self._seconds_until_midnight(now))
        if count > self.limit:
            self.cache.decr(key)
            return False
        return True

    def release(self, email: str, now: Optional[datetime] = None) -> None:
        """Give back a slot claimed by ``reserve`` for a send that failed."""
        now = now or datetime.now(timezone.utc)
        self.cache.decr(CacheKeys.report_count(email, self._day(now)))


class ReportWebhookClient:
    """POST report payloads to the webhook. No retries."""

    def __init__(
        self,
        url: str,
        api_key: str = "",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    async def send(self, payload: dict[str, Any]) -> Any:
        """Relay ``payload``; returns the webhook's JSON answer.

        Raises:
            ReportWebhookError: on timeout, transport error or non-2xx status.
        """
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.api_key:
            headers["X-API-Key"] = self.api_key
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.url, json=payload, headers=headers)
                response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.warning(f"Report webhook timed out: {e}")
            raise ReportWebhookError("The request took too long. Please try again later.") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(f"Report webhook error response {status}: {e.response.text}")
            raise ReportWebhookError(
                f"Server responded with status: {status}", status_code=status
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Report webhook request error: {e}")
            raise ReportWebhookError(f"Error sending the report: {e}") from e

        try:
            return response.json()
        except ValueError:
            return {"raw": response.text}


class ReportService:
    """Validate, rate-limit and relay email-report requests."""

    def __init__(self, client: ReportWebhookClient, limiter: DailyRateLimiter):
        self.client = client
        self.limiter = limiter

    def limit_reached(self, email: str) -> bool:
        return self.limiter.has_reached_limit(email)

    async def send_report(
        self,
        contact: ContactInfo,
        answers: FormAnswers,
        final_score: Optional[int],
        locale: Optional[str] = None,
    ) -> WebhookResponse:
        if not is_valid_email(contact.email):
            return WebhookResponse(success=False, message="Please provide a valid email address")
        now = datetime.now(timezone.utc)
        if not self.limiter.reserve(contact.email, now=now):
            return WebhookResponse(
                success=False,
                message="The daily limit for email reports has been reached. Please try again tomorrow.",
            )

        payload = format_report_payload(contact, answers, final_score, locale, now=now)
        try:
            data = await self.client.send(payload)
        except ReportWebhookError as e:
            self.limiter.release(contact.email, now=now)
            return WebhookResponse(success=False, message=e.message)

        logger.info(f"Email report sent for score {payload['visibility_score']}")
        return WebhookResponse(
            success=True,
            message="Report was sent successfully by email",
            data=data,
        )


def get_report_service() -> ReportService:
    """Report service configured from settings."""
    settings = get_settings()
    client = ReportWebhookClient(
        url=settings.report_webhook_url,
        api_key=settings.report_api_key,
        timeout=settings.report_timeout,
    )
    return ReportService(client, DailyRateLimiter(get_redis_cache(), settings.report_daily_limit))
