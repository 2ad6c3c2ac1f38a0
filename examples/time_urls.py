"""
Quick sanity run: a few timed rounds against a pair of public URLs.
Run: uv run examples/time_urls.py
"""
import asyncio

from reqtimer import RoundRunner, TransportConfig, render_latency_histogram

URLS = [
    "https://example.com/",
    "https://httpbin.org/get",
]

async def main():
    rounds = 5
    timeout_s = 2.0
    wait_s = 0.2

    runner = RoundRunner(
        URLS,
        transport=TransportConfig(verify_tls=True),
        count=rounds,
        timeout_s=timeout_s,
        wait_s=wait_s,
        report_interval_s=1.0,
    )
    summary = await runner.run()
    print()
    print(render_latency_histogram(runner.reporter.samples, bins=10))
    print("\nSummary:", summary)

if __name__ == "__main__":
    asyncio.run(main())
