"""Client for the external website-audit service."""
import asyncio
import logging
from typing import Any, Optional

import httpx

from app.config import get_settings
from app.services.errors import AuditServiceError

logger = logging.getLogger(__name__)

WEBSITE_HEALTH_PATH = "/websitehealth"
PING_PATH = "/ping"


def _normalize_base_url(url: str) -> str:
    """Ensure base URL has no trailing slash."""
    return url.rstrip("/")


def normalize_website_url(url: str) -> str:
    """Prefix ``https://`` when no scheme is given and end with a slash."""
    target = (url or "").strip()
    if not target:
        raise ValueError("Website URL must not be empty")
    if not target.startswith(("http://", "https://")):
        target = "https://" + target
    if not target.endswith("/"):
        target = target + "/"
    return target


class AuditClient:
    """Fetch website-health audits. One request per call, no retries."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 180.0,
        ping_timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = _normalize_base_url(base_url)
        self.timeout = timeout
        self.ping_timeout = ping_timeout
        self._transport = transport

    def _client(self, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=timeout,
            transport=self._transport,
            headers={"Accept": "application/json"},
        )

    async def _fetch(self, endpoint: str, target: str) -> Any:
        async with self._client(self.timeout) as client:
            response = await client.get(endpoint, params={"url": target})
            response.raise_for_status()
            return response.json()

    async def check_website_health(self, url: str) -> Any:
        """Run the audit for ``url`` and return the decoded JSON payload.

        ``timeout`` bounds the whole request, not each connect/read phase.

        Raises:
            AuditServiceError: on timeout, transport error, non-2xx status
                or a body that is not JSON.
        """
        target = normalize_website_url(url)
        endpoint = f"{self.base_url}{WEBSITE_HEALTH_PATH}"
        logger.info(f"Requesting website audit for {target}")
        try:
            return await asyncio.wait_for(self._fetch(endpoint, target), timeout=self.timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            logger.warning(f"Website audit timed out for {target}: {e!r}")
            raise AuditServiceError("The website audit took too long. Please try again later.") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning(f"Website audit failed for {target}: HTTP {status}")
            raise AuditServiceError(f"Audit service error: {status}", status_code=status) from e
        except httpx.HTTPError as e:
            logger.warning(f"Website audit request error for {target}: {e}")
            raise AuditServiceError(f"Audit service unreachable: {e}") from e
        except ValueError as e:
            logger.warning(f"Website audit returned invalid JSON for {target}: {e}")
            raise AuditServiceError("Audit service returned an invalid response") from e

    async def ping(self) -> tuple[bool, Optional[str]]:
        """Check whether the audit service answers at all."""
        try:
            async with self._client(self.ping_timeout) as client:
                response = await client.get(f"{self.base_url}{PING_PATH}")
            if response.is_success:
                return True, None
            return False, f"HTTP {response.status_code}"
        except httpx.HTTPError as e:
            return False, str(e) or type(e).__name__


def get_audit_client() -> AuditClient:
    """Audit client configured from settings."""
    settings = get_settings()
    return AuditClient(
        base_url=settings.audit_base_url,
        timeout=settings.audit_timeout,
        ping_timeout=settings.audit_ping_timeout,
    )
