import asyncio
import time

from reqtimer.collector import RoundCollector

from conftest import SLOW_S


def test_collect_all_results_with_generous_timeout(serve):
    async def scenario():
        async with serve() as server:
            urls = [str(server.make_url("/fast"))] * 4 + [str(server.make_url("/slow"))]
            return await RoundCollector().collect(urls, timeout_s=5.0)

    outcome = asyncio.run(scenario())
    assert outcome.complete
    assert len(outcome.results) == 5
    # first to finish is first collected
    assert outcome.results[-1].url.endswith("/slow")


def test_collect_returns_partial_results_at_deadline(serve):
    async def scenario():
        async with serve() as server:
            urls = [str(server.make_url("/fast")), str(server.make_url("/slow"))]
            start = time.perf_counter()
            outcome = await RoundCollector().collect(urls, timeout_s=SLOW_S / 2)
            return outcome, time.perf_counter() - start

    outcome, elapsed = asyncio.run(scenario())
    assert not outcome.complete
    assert outcome.url_count == 2
    assert [r.url.rsplit("/", 1)[-1] for r in outcome.results] == ["fast"]
    assert elapsed < SLOW_S


def test_collect_near_zero_timeout(serve):
    async def scenario():
        async with serve() as server:
            urls = [str(server.make_url("/slow"))] * 3
            start = time.perf_counter()
            outcome = await RoundCollector().collect(urls, timeout_s=0.01)
            return outcome, time.perf_counter() - start

    outcome, elapsed = asyncio.run(scenario())
    assert len(outcome.results) < 3
    assert elapsed < 0.3


def test_fast_failure_still_counts_as_arrived(serve, refused_url):
    async def scenario():
        async with serve() as server:
            urls = [str(server.make_url("/fast")), refused_url, str(server.make_url("/fast"))]
            return await RoundCollector().collect(urls, timeout_s=5.0)

    outcome = asyncio.run(scenario())
    assert outcome.complete
    assert sum(1 for r in outcome.results if not r.ok) == 1


def test_cancelled_probes_are_not_left_running(serve):
    async def scenario():
        async with serve() as server:
            collector = RoundCollector(cancel_pending=True)
            await collector.collect([str(server.make_url("/slow"))] * 2, timeout_s=0.05)
            return collector.abandoned

    assert asyncio.run(scenario()) == 0


def test_abandoned_probes_run_to_completion(serve):
    async def scenario():
        async with serve() as server:
            collector = RoundCollector(cancel_pending=False)
            outcome = await collector.collect([str(server.make_url("/slow"))] * 2, timeout_s=0.05)
            leaked = collector.abandoned
            await asyncio.sleep(SLOW_S + 0.5)
            remaining = collector.abandoned
            await collector.aclose()
            return outcome, leaked, remaining

    outcome, leaked, remaining = asyncio.run(scenario())
    assert outcome.results == ()
    assert leaked == 2
    assert remaining == 0


def test_aclose_cancels_abandoned_probes(serve):
    async def scenario():
        async with serve() as server:
            collector = RoundCollector(cancel_pending=False)
            await collector.collect([str(server.make_url("/slow"))], timeout_s=0.01)
            await collector.aclose()
            return collector.abandoned

    assert asyncio.run(scenario()) == 0
