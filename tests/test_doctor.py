"""Tests for the doctor sub-commands"""

import httpx
from typer.testing import CliRunner

from adapters import aot_client as aot_client_module
from cli.main import app
from core import config as config_module

from conftest import load_fixture

runner = CliRunner()


def _isolate(monkeypatch, tmp_path):
    env_file = tmp_path / "aot-client" / ".env"
    monkeypatch.setattr(config_module, "get_user_env_file", lambda: env_file)
    monkeypatch.chdir(tmp_path)
    return env_file


class TestSetHostname:
    def test_writes_user_env_file(self, monkeypatch, tmp_path):
        env_file = _isolate(monkeypatch, tmp_path)

        result = runner.invoke(app, ["doctor", "set-hostname", "http://aot.local/api/"])

        assert result.exit_code == 0, result.output
        assert "AOT_CLIENT_HOSTNAME=http://aot.local/api" in env_file.read_text(encoding="utf-8")

    def test_rejects_non_http_hostname(self, monkeypatch, tmp_path):
        env_file = _isolate(monkeypatch, tmp_path)

        result = runner.invoke(app, ["doctor", "set-hostname", "ftp://aot.local"])

        assert result.exit_code != 0
        assert not env_file.exists()


class TestRun:
    def _serve(self, monkeypatch, mock_http, responder):
        def fake_builder(settings):
            http_client, _ = mock_http(responder)
            return http_client

        monkeypatch.setattr(aot_client_module, "build_async_client", fake_builder)

    def test_reports_api_ok(self, monkeypatch, tmp_path, mock_http):
        _isolate(monkeypatch, tmp_path)
        self._serve(monkeypatch, mock_http, lambda request: httpx.Response(200, json=load_fixture("list-projects.json")))

        result = runner.invoke(app, ["doctor", "run"])

        assert result.exit_code == 0, result.output
        assert "FAIL" not in result.stdout

    def test_fails_when_api_errors(self, monkeypatch, tmp_path, mock_http):
        _isolate(monkeypatch, tmp_path)
        self._serve(monkeypatch, mock_http, lambda request: httpx.Response(502, content=b"bad gateway"))

        result = runner.invoke(app, ["doctor", "run"])

        assert result.exit_code == 1
