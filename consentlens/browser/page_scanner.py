"""
Page scanner: wires a live page to the banner detector.

Per page load:

1. Scans run at fixed delays after load and after debounced,
   cookie-related DOM mutations (``ScanScheduler``).
2. Each scan captures a snapshot, runs the ``BannerDetector``, reads
   the markup of every newly accepted banner and outlines it.
3. Accepted banners are handed to the storage API in background
   tasks so a slow or failing API never blocks scanning.

A navigation starts a fresh detector, since element identities are
scoped to one page load.  The record ledger outlives navigations, so
the same banner on the next page of a domain is not reported twice.
While an API client is attached, failed uploads are retried by a
background sweep.
"""

from __future__ import annotations

import asyncio
import contextlib

from playwright import async_api

from consentlens.browser import dom_snapshot, observer
from consentlens.config import Settings, get_settings
from consentlens.consent import constants, dedup, detector, scheduler
from consentlens.models import banner, dom
from consentlens.services import banner_api
from consentlens.utils import logger, url

log = logger.create_logger("Page-Scanner")


class PageScanner:
    """Detect cookie banners on one Playwright page.

    Args:
        page: The page to scan.
        api_client: Storage API client; when ``None`` banners are only
            collected locally.
        rules: Detection tables.
        settings: Runtime settings; defaults to the process settings.
    """

    def __init__(
        self,
        page: async_api.Page,
        api_client: banner_api.BannerApiClient | None = None,
        rules: constants.DetectionRules = constants.DEFAULT_RULES,
        settings: Settings | None = None,
    ) -> None:
        self._page = page
        self._api = api_client
        self._rules = rules
        self._settings = settings or get_settings()
        self.ledger = dedup.BannerLedger(rules.max_local_records, rules.dedup_text_window)
        self.detector = detector.BannerDetector(rules, ledger=self.ledger)
        self.scheduler = self._new_scheduler()
        self.banners: list[banner.DetectedBanner] = []
        self._handoffs: set[asyncio.Task[banner.SubmissionResult]] = set()
        self._retry_sweep: asyncio.Task[None] | None = None
        self._binding_exposed = False

    # ── Lifecycle ───────────────────────────────────────────

    async def start(self) -> None:
        """Begin scanning the current page and follow navigations."""
        domain = url.extract_domain(self._page.url)
        log_path = logger.start_log_file(domain)
        log.section(f"Cookie banner scan: {domain}")
        if log_path:
            log.info("Writing scan log", {"path": log_path})

        if not self._binding_exposed:
            self._binding_exposed = await observer.expose_mutation_binding(self._page, self._on_mutations)
            self._page.on("domcontentloaded", self._on_domcontentloaded)

        if self._api is not None and self._retry_sweep is None:
            self._retry_sweep = asyncio.create_task(self._api.run_retry_sweep())

        await observer.observe_mutations(self._page)
        self.scheduler.start()

    async def stop(self) -> None:
        """Cancel pending scans and the retry sweep, then wait for in-flight hand-offs."""
        self.scheduler.stop()
        if self._retry_sweep is not None:
            self._retry_sweep.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._retry_sweep
            self._retry_sweep = None
        if self._handoffs:
            await asyncio.gather(*self._handoffs, return_exceptions=True)
        log.info("Scan finished", {"banners": len(self.banners)})
        logger.end_log_file()

    async def watch(self, duration_seconds: float = 0.0) -> list[banner.DetectedBanner]:
        """Scan for at least *duration_seconds* and until all scheduled scans ran.

        Returns:
            Every banner accepted while watching.
        """
        await self.start()
        try:
            if duration_seconds > 0:
                await asyncio.sleep(duration_seconds)
            await self.scheduler.wait_idle()
        finally:
            await self.stop()
        return list(self.banners)

    # ── Scanning ────────────────────────────────────────────

    async def scan_once(self) -> list[banner.DetectedBanner]:
        """Snapshot the page, detect, highlight and hand off new banners."""
        snapshot = await dom_snapshot.capture_snapshot(self._page, self._rules.selector_groups())

        found: list[banner.DetectedBanner] = []
        for record in self.detector.scan(snapshot):
            index = self.detector.element_index(record.id)
            if index is not None:
                html = await dom_snapshot.element_html(self._page, index, self._settings.snapshot_max_html)
                record = record.model_copy(update={"html_content": html})
                self.ledger.replace(record)
                if self._settings.highlight_banners:
                    await dom_snapshot.highlight_element(self._page, index)

            found.append(record)
            self.banners.append(record)
            self._hand_off(record)

        return found

    def _hand_off(self, record: banner.DetectedBanner) -> None:
        if self._api is None:
            return
        task = asyncio.create_task(self._api.submit_banner(record))
        self._handoffs.add(task)
        task.add_done_callback(self._handoffs.discard)

    # ── Events ──────────────────────────────────────────────

    def _new_scheduler(self) -> scheduler.ScanScheduler:
        return scheduler.ScanScheduler(self.scan_once, keywords=self._rules.cookie_keywords)

    def _on_mutations(self, added: list[dom.AddedElement]) -> None:
        self.scheduler.notify_mutation(added)

    async def _on_domcontentloaded(self, page: async_api.Page) -> None:
        log.info("Page loaded, restarting detection", {"url": page.url})
        self.scheduler.stop()
        self.detector = detector.BannerDetector(self._rules, ledger=self.ledger)
        self.scheduler = self._new_scheduler()
        await observer.observe_mutations(page)
        self.scheduler.start()
