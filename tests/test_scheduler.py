"""Tests for consentlens.consent.scheduler — timed and mutation-driven scans."""

from __future__ import annotations

import asyncio
from unittest import mock

import pytest

from consentlens.consent import scheduler
from consentlens.models import dom

COOKIE_NODE = dom.AddedElement(tag="div", class_name="cookie-wrapper", text="")
PLAIN_NODE = dom.AddedElement(tag="div", class_name="card", text="Latest news")


class TestIsCookieRelatedMutation:
    """Tests for is_cookie_related_mutation()."""

    @pytest.mark.parametrize(
        "added",
        [
            dom.AddedElement(text="We value your Privacy"),
            dom.AddedElement(class_name="consent-layer"),
            dom.AddedElement(element_id="GDPR-popup"),
        ],
    )
    def test_related(self, added: dom.AddedElement) -> None:
        assert scheduler.is_cookie_related_mutation(added)

    def test_unrelated(self) -> None:
        assert not scheduler.is_cookie_related_mutation(PLAIN_NODE)


class TestScanScheduler:
    """Tests for ScanScheduler."""

    def test_runs_every_initial_delay(self) -> None:
        calls: list[int] = []

        async def scan() -> None:
            calls.append(1)

        async def run() -> int:
            runner = scheduler.ScanScheduler(scan, delays_ms=(0, 10, 20))
            runner.start()
            await runner.wait_idle()
            return runner.scan_count

        assert asyncio.run(run()) == 3
        assert len(calls) == 3

    def test_mutations_are_debounced(self) -> None:
        calls: list[int] = []

        async def scan() -> None:
            calls.append(1)

        async def run() -> None:
            runner = scheduler.ScanScheduler(scan, delays_ms=(), debounce_ms=30)
            runner.start()
            assert runner.notify_mutation([COOKIE_NODE])
            await asyncio.sleep(0.01)
            assert runner.notify_mutation([PLAIN_NODE, COOKIE_NODE])
            await runner.wait_idle()

        asyncio.run(run())
        assert len(calls) == 1

    def test_unrelated_mutation_ignored(self) -> None:
        async def scan() -> None:
            raise AssertionError("should not scan")

        async def run() -> bool:
            runner = scheduler.ScanScheduler(scan, delays_ms=(), debounce_ms=1)
            runner.start()
            scheduled = runner.notify_mutation([PLAIN_NODE])
            await runner.wait_idle()
            return scheduled

        assert asyncio.run(run()) is False

    def test_failing_scan_does_not_stop_later_scans(self) -> None:
        calls: list[int] = []

        async def scan() -> None:
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("page crashed")

        async def run() -> None:
            runner = scheduler.ScanScheduler(scan, delays_ms=(0, 10))
            runner.start()
            await runner.wait_idle()

        asyncio.run(run())
        assert len(calls) == 2

    def test_scans_never_overlap(self) -> None:
        active = 0
        peak = 0

        async def scan() -> None:
            nonlocal active, peak
            active += 1
            peak = max(peak, active)
            await asyncio.sleep(0.01)
            active -= 1

        async def run() -> int:
            runner = scheduler.ScanScheduler(scan, delays_ms=(0, 0, 0))
            runner.start()
            await runner.wait_idle()
            return runner.scan_count

        assert asyncio.run(run()) == 3
        assert peak == 1

    def test_stop_cancels_pending_scans(self) -> None:
        async def scan() -> None:
            raise AssertionError("should not scan")

        async def run() -> scheduler.ScanScheduler:
            runner = scheduler.ScanScheduler(scan, delays_ms=(1000,))
            runner.start()
            runner.stop()
            assert not runner.notify_mutation([COOKIE_NODE])
            await runner.wait_idle()
            return runner

        runner = asyncio.run(run())
        assert runner.is_idle
        assert runner.scan_count == 0

    def test_run_scan_directly(self) -> None:
        calls: list[str] = []

        async def scan() -> None:
            calls.append("scan")

        async def run() -> None:
            runner = scheduler.ScanScheduler(scan, delays_ms=())
            await runner.run_scan("manual")

        asyncio.run(run())
        assert calls == ["scan"]

    def test_each_scan_is_timed(self) -> None:
        async def scan() -> None:
            raise RuntimeError("page crashed")

        async def run() -> None:
            runner = scheduler.ScanScheduler(scan, delays_ms=())
            await runner.run_scan("manual")
            await runner.run_scan("mutation")

        with (
            mock.patch.object(scheduler.log, "start_timer") as start_timer,
            mock.patch.object(scheduler.log, "end_timer") as end_timer,
        ):
            asyncio.run(run())

        assert [c.args for c in start_timer.call_args_list] == [("scan-1",), ("scan-2",)]
        assert [c.args for c in end_timer.call_args_list] == [
            ("scan-1", "Scan 1 (manual)"),
            ("scan-2", "Scan 2 (mutation)"),
        ]
