"""Scan scheduling for one page load.

Banners load at unpredictable times, so the page is scanned at a
fixed series of delays after load and again, debounced, whenever a
mutation adds cookie-related content.  Scans never overlap: they are
serialized with an :class:`asyncio.Lock`.  A scan that fails is logged
and does not stop later scans.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable, Sequence

from consentlens.consent import constants
from consentlens.models import dom
from consentlens.utils import errors, logger

log = logger.create_logger("Scan-Scheduler")


def is_cookie_related_mutation(
    added: dom.AddedElement,
    keywords: Sequence[str] = constants.COOKIE_KEYWORDS,
) -> bool:
    """``True`` when an added element's text, class or id carries a cookie keyword."""
    text = added.text.lower()
    class_name = added.class_name.lower()
    element_id = added.element_id.lower()
    return any(kw in text or kw in class_name or kw in element_id for kw in keywords)


class ScanScheduler:
    """Timer-driven scan runner.

    Args:
        scan: Coroutine function performing one scan.
        delays_ms: Delays after :meth:`start` at which to scan.
        debounce_ms: Quiet period after a relevant mutation before
            rescanning.  Each new relevant mutation restarts it.
        keywords: Keywords that make a mutation relevant.
    """

    def __init__(
        self,
        scan: Callable[[], Awaitable[object]],
        delays_ms: Sequence[int] = constants.SCAN_DELAYS_MS,
        debounce_ms: int = constants.MUTATION_DEBOUNCE_MS,
        keywords: Sequence[str] = constants.COOKIE_KEYWORDS,
    ) -> None:
        self._scan = scan
        self._delays_ms = tuple(delays_ms)
        self._debounce_ms = debounce_ms
        self._keywords = tuple(keywords)
        self._lock = asyncio.Lock()
        self._handles: dict[object, asyncio.TimerHandle] = {}
        self._debounce_token: object | None = None
        self._tasks: set[asyncio.Task[None]] = set()
        self._stopped = False
        self.scan_count = 0

    @property
    def is_idle(self) -> bool:
        """No timer pending and no scan running."""
        return not self._handles and not self._tasks

    def start(self) -> None:
        """Schedule the initial scans.  Must be called from a running loop."""
        self._stopped = False
        for delay in self._delays_ms:
            self._schedule(delay, f"{delay}ms")

    def notify_mutation(self, added: Iterable[dom.AddedElement]) -> bool:
        """Debounce a rescan if any *added* element is cookie-related.

        Returns:
            ``True`` when a rescan was (re)scheduled.
        """
        if self._stopped:
            return False
        if not any(is_cookie_related_mutation(element, self._keywords) for element in added):
            return False

        if self._debounce_token is not None:
            handle = self._handles.pop(self._debounce_token, None)
            if handle is not None:
                handle.cancel()
        self._debounce_token = self._schedule(self._debounce_ms, "mutation")
        return True

    async def run_scan(self, reason: str = "manual") -> None:
        """Run one scan now, waiting for any scan in progress."""
        async with self._lock:
            self.scan_count += 1
            label = f"scan-{self.scan_count}"
            log.debug("Scanning for cookie banners", {"trigger": reason, "scan": self.scan_count})
            log.start_timer(label)
            try:
                await self._scan()
            except Exception as error:
                log.error("Banner scan failed", {"trigger": reason, "error": errors.get_error_message(error)})
            finally:
                log.end_timer(label, f"Scan {self.scan_count} ({reason})")

    def stop(self) -> None:
        """Cancel pending timers and running scans."""
        self._stopped = True
        for handle in self._handles.values():
            handle.cancel()
        self._handles.clear()
        self._debounce_token = None
        for task in self._tasks:
            task.cancel()

    async def wait_idle(self) -> None:
        """Wait until every scheduled scan has fired and finished."""
        while not self.is_idle:
            if self._tasks:
                await asyncio.gather(*self._tasks, return_exceptions=True)
            else:
                await asyncio.sleep(0.01)

    # ── Timers ──────────────────────────────────────────────

    def _schedule(self, delay_ms: int, reason: str) -> object:
        token = object()
        loop = asyncio.get_running_loop()
        self._handles[token] = loop.call_later(delay_ms / 1000, self._fire, token, reason)
        return token

    def _fire(self, token: object, reason: str) -> None:
        self._handles.pop(token, None)
        if token is self._debounce_token:
            self._debounce_token = None
            log.info("New cookie-related content detected, rescanning")
        if self._stopped:
            return
        task = asyncio.get_running_loop().create_task(self.run_scan(reason))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
