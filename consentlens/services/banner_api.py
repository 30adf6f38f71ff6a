"""
Client for the banner storage / policy analysis API.

Accepted banners are POSTed to ``/cookie-banners``.  When a stored
banner carries a privacy- or cookie-policy link, the link is handed to
``/privacy-analysis`` for scoring.  Failed submissions are kept
(most recent 20) and retried by a periodic sweep, never inline.
"""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from typing import Any

import aiohttp

from consentlens.config import get_settings
from consentlens.consent import constants
from consentlens.models import banner
from consentlens.utils import errors, logger

log = logger.create_logger("Banner-API")

_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, ValueError)


class BannerApiClient:
    """Async client for the storage API.

    Args:
        base_url: API root, e.g. ``http://localhost:3000/api``.
        timeout_seconds: Total timeout per request.
        http_session: Shared session to use.  When omitted the client
            opens its own on first use and closes it in :meth:`close`.
        max_failed_uploads: How many failed submissions to keep.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout_seconds: float | None = None,
        http_session: aiohttp.ClientSession | None = None,
        max_failed_uploads: int = constants.MAX_FAILED_UPLOADS,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds or settings.request_timeout_seconds)
        self._session = http_session
        self._owns_session = http_session is None
        self._max_failed = max_failed_uploads
        self._failed: list[banner.FailedUpload] = []

    async def __aenter__(self) -> BannerApiClient:
        return self

    async def __aexit__(self, *_exc: object) -> None:
        await self.close()

    @property
    def failed_uploads(self) -> list[banner.FailedUpload]:
        """Failed submissions awaiting retry, oldest first."""
        return list(self._failed)

    async def close(self) -> None:
        """Close the session if this client opened it."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    # ── Submissions ─────────────────────────────────────────

    async def submit_banner(self, record: banner.DetectedBanner) -> banner.SubmissionResult:
        """Store *record* and request analysis of its policy link.

        Never raises; a failure is logged, kept for the retry sweep
        and returned.
        """
        try:
            data = await self._post_json("/cookie-banners", record.model_dump(by_alias=True, mode="json"))
        except _ERRORS as error:
            message = errors.get_error_message(error)
            log.error("Failed to send banner to database", {"bannerId": record.id, "error": message})
            self._store_failed(record, message)
            return banner.SubmissionResult(success=False, banner_id=record.id, error=message)

        stored_id = data.get("bannerId") if isinstance(data, dict) else None
        log.success("Banner sent to database", {"bannerId": stored_id or record.id, "domain": record.domain})

        policy_link = record.best_policy_link()
        if policy_link is not None:
            await self.request_policy_analysis(policy_link.href, record.domain)
        else:
            log.info("No suitable privacy policy link for analysis", {"domain": record.domain})

        return banner.SubmissionResult(success=True, banner_id=str(stored_id or record.id))

    async def request_policy_analysis(self, policy_url: str, domain: str) -> banner.SubmissionResult:
        """Ask the API to fetch and score the policy at *policy_url*."""
        log.info("Sending privacy policy for analysis", {"policyUrl": policy_url, "domain": domain})
        try:
            data = await self._post_json("/privacy-analysis", {"policyUrl": policy_url, "domain": domain})
        except _ERRORS as error:
            message = errors.get_error_message(error)
            log.error("Failed to send privacy policy for analysis", {"policyUrl": policy_url, "error": message})
            return banner.SubmissionResult(success=False, error=message)

        analysis = data.get("analysis") if isinstance(data, dict) else None
        log.success("Privacy policy analysis completed", {"domain": domain, "hasAnalysis": analysis is not None})
        return banner.SubmissionResult(success=True)

    # ── Retry ───────────────────────────────────────────────

    async def retry_failed_uploads(self) -> int:
        """Re-submit every failed upload once.

        Submissions that fail again go back on the failed list.

        Returns:
            The number of uploads that succeeded this time.
        """
        pending, self._failed = self._failed, []
        if not pending:
            return 0

        log.info("Retrying failed uploads", {"count": len(pending)})
        succeeded = 0
        for failed in pending:
            result = await self.submit_banner(failed.banner)
            if result.success:
                succeeded += 1

        log.info("Retry sweep finished", {"succeeded": succeeded, "stillFailed": len(self._failed)})
        return succeeded

    async def run_retry_sweep(self, interval_seconds: float | None = None) -> None:
        """Retry failed uploads every *interval_seconds* until cancelled."""
        interval = interval_seconds or get_settings().retry_interval_seconds
        while True:
            await asyncio.sleep(interval)
            await self.retry_failed_uploads()

    # ── Internals ───────────────────────────────────────────

    def _store_failed(self, record: banner.DetectedBanner, message: str) -> None:
        self._failed.append(
            banner.FailedUpload(banner=record, failed_at=datetime.now(UTC).isoformat(), error=message)
        )
        if len(self._failed) > self._max_failed:
            del self._failed[: len(self._failed) - self._max_failed]

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    async def _post_json(self, path: str, payload: dict[str, Any]) -> Any:
        session = self._get_session()
        async with session.post(f"{self.base_url}{path}", json=payload, timeout=self._timeout) as response:
            if response.status >= 400:
                raise aiohttp.ClientResponseError(
                    response.request_info,
                    response.history,
                    status=response.status,
                    message=f"HTTP {response.status}: {response.reason}",
                )
            return await response.json(content_type=None)
