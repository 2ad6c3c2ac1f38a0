import asyncio

import pytest

from reqtimer import cli
from reqtimer.config import ArgumentError, load_config


@pytest.fixture
def no_probing(monkeypatch):
    def _fail(*args, **kwargs):
        raise AssertionError("runner must not be created")

    monkeypatch.setattr(cli, "RoundRunner", _fail)


@pytest.mark.parametrize(
    "argv",
    [
        ["ftp://example.com"],
        ["not a url"],
        [],
        ["http://"],
        ["https://example.com", "gopher://example.com"],
        ["-c", "many", "http://example.com"],
        ["-c", "0", "http://example.com"],
        ["-p", "70000", "http://example.com"],
    ],
)
def test_invalid_arguments_exit_1(argv, no_probing, capsys):
    assert cli.main(argv) == 1
    assert capsys.readouterr().out.startswith("Error: ")


def test_missing_urls_message(no_probing, capsys):
    cli.main([])
    assert capsys.readouterr().out.strip() == "Error: not enough arguments"


def test_unsupported_scheme_message(no_probing, capsys):
    cli.main(["ftp://example.com"])
    assert "unsupported url scheme in ftp://example.com" in capsys.readouterr().out


def test_parse_config_maps_flags():
    config, args = cli.parse_config(
        ["-t", "250", "-c", "4", "-i", "10.0.0.1", "-p", "8443", "-k", "-w", "0",
         "--quiet", "--report-interval", "2", "--abandon-pending", "--histogram",
         "https://example.com/", "http://example.org"]
    )
    assert config.urls == ["https://example.com/", "http://example.org"]
    assert config.timeout_s == 0.25
    assert config.count == 4
    assert config.wait_s == 0.0
    assert config.quiet
    assert config.report_interval_s == 2.0
    assert not config.cancel_pending
    assert args.histogram

    transport = config.transport()
    assert transport.ip == "10.0.0.1"
    assert transport.port == 8443
    assert not transport.verify_tls


def test_defaults():
    config = load_config(urls=["http://example.com"])
    assert config.timeout_ms == 1000
    assert config.count == 1
    assert config.wait_ms == 500
    assert config.report_interval_s == 5.0
    assert config.cancel_pending
    assert config.transport().verify_tls
    assert not config.transport().overrides_destination


def test_blank_ip_is_ignored():
    assert load_config(urls=["http://example.com"], ip="  ").ip is None


def test_load_config_raises_argument_error():
    with pytest.raises(ArgumentError):
        load_config(urls=["mailto:someone@example.com"])


def test_run_against_local_server(serve, capsys):
    async def scenario():
        async with serve() as server:
            config = load_config(
                urls=[str(server.make_url("/fast"))], count=2, wait_ms=0, quiet=True
            )
            return await cli.run(config, histogram=True)

    assert asyncio.run(scenario()) == 0
    out = capsys.readouterr().out
    assert "Summary:\n2/2 ok, 0 timeout (0.00%) " in out
    assert "Round Latency Histogram" in out or "Histogram: single value" in out
