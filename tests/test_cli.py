import functools

import httpx
from typer.testing import CliRunner

from landing_resolver import cli
from landing_resolver.resolver import RedirectResolver

runner = CliRunner()

ROUTES = {
    "https://a.example/short": lambda: httpx.Response(301, headers={"Location": "https://b.example/landing"}),
    "https://b.example/landing": lambda: httpx.Response(200, headers={"Content-Type": "text/plain"}),
    "https://a.example/loop": lambda: httpx.Response(302, headers={"Location": "/loop"}),
}


def install_fake_network(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(cli, "configure_logging", lambda *_, **__: None)
    transport = httpx.MockTransport(lambda request: ROUTES[str(request.url)]())
    monkeypatch.setattr(cli, "RedirectResolver", functools.partial(RedirectResolver, transport=transport))


def test_prints_final_url(monkeypatch, tmp_path):
    install_fake_network(monkeypatch, tmp_path)
    result = runner.invoke(cli.app, ["https://a.example/short"])
    assert result.exit_code == 0
    assert "https://b.example/landing" in result.output


def test_multiple_urls_print_in_order(monkeypatch, tmp_path):
    install_fake_network(monkeypatch, tmp_path)
    result = runner.invoke(cli.app, ["https://b.example/landing", "https://a.example/short"])
    assert result.exit_code == 0
    lines = [line for line in result.output.splitlines() if line.startswith("https://")]
    assert lines == ["https://b.example/landing", "https://b.example/landing"]


def test_failure_exits_non_zero_with_diagnostic(monkeypatch, tmp_path):
    install_fake_network(monkeypatch, tmp_path)
    result = runner.invoke(cli.app, ["--limit", "3", "https://a.example/loop"])
    assert result.exit_code == 1
    assert "error: https://a.example/loop" in result.output
    assert "too many redirects" in result.output


def test_negative_timeout_is_a_usage_error(monkeypatch, tmp_path):
    install_fake_network(monkeypatch, tmp_path)
    result = runner.invoke(cli.app, ["--timeout=-1", "https://a.example/short"])
    assert result.exit_code == 2
    assert "timeout" in result.output


def test_limit_comes_from_environment(monkeypatch, tmp_path):
    install_fake_network(monkeypatch, tmp_path)
    monkeypatch.setenv("LR_MAX_HOPS", "1")
    result = runner.invoke(cli.app, ["https://a.example/short"])
    assert result.exit_code == 1
    assert "too many redirects" in result.output
