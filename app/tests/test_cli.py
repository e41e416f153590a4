import json
import logging

import httpx
import pytest
from typer.testing import CliRunner

import app_factory
import cli

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_root_logger():
    # the command reconfigures root logging against the runner's stderr
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def mock_endpoint(monkeypatch):
    """Route every request made through the CLI to an in-process handler."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/fail":
            return httpx.Response(500, json={"error": "boom"})
        return httpx.Response(200, json={"path": request.url.path})

    def create_client(config, timeout):
        return app_factory.create_client(config, timeout, transport=httpx.MockTransport(handler))

    monkeypatch.setattr(cli, "create_client", create_client)


@pytest.fixture
def spec_file(tmp_path, monkeypatch):
    monkeypatch.setenv("HTTPBATCH_TEST_BASE", "https://api.example.com")
    path = tmp_path / "requests.json"
    path.write_text(
        json.dumps(
            [
                {"name": "ok", "url": "{{HTTPBATCH_TEST_BASE}}/ok", "method": "GET"},
                {"name": "fail", "url": "{{HTTPBATCH_TEST_BASE}}/fail", "method": "post", "body": {"a": 1}},
            ]
        )
    )
    return path


class TestRunCommand:
    def test_json_output(self, mock_endpoint, spec_file, tmp_path):
        result = runner.invoke(
            cli.app,
            ["run", "--file", str(spec_file), "--output", "json", "--env-file", str(tmp_path / "none.env")],
        )

        assert result.exit_code == 0
        document = json.loads(result.stdout)
        assert document["total"] == 2
        assert document["success"] == 1
        assert document["failed"] == 1
        assert document["success_rate"] == 50.0
        by_name = {r["name"]: r for r in document["results"]}
        assert by_name["ok"]["url"] == "https://api.example.com/ok"
        assert by_name["ok"]["response_body"] == {"path": "/ok"}
        assert by_name["fail"]["status_code"] == 500

    def test_pretty_output(self, mock_endpoint, spec_file):
        result = runner.invoke(cli.app, ["run", "--file", str(spec_file), "--timeout", "7"])

        assert result.exit_code == 0
        assert "HTTP Request Test Started (Timeout: 7s)" in result.stdout
        assert "Test Summary" in result.stdout
        assert "Success rate: 50.0%" in result.stdout
        assert "- fail" in result.stdout

    def test_concurrency_option(self, mock_endpoint, spec_file):
        result = runner.invoke(
            cli.app, ["run", "--file", str(spec_file), "--output", "json", "--concurrency", "1"]
        )

        assert result.exit_code == 0
        assert json.loads(result.stdout)["total"] == 2

    def test_missing_file_is_fatal(self, mock_endpoint, tmp_path):
        result = runner.invoke(cli.app, ["run", "--file", str(tmp_path / "absent.json")])

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "Test Summary" not in result.output

    def test_malformed_file_is_fatal(self, mock_endpoint, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text('[{"url": "https://api.example.com"')

        result = runner.invoke(cli.app, ["run", "--file", str(path), "--output", "json"])

        assert result.exit_code == 1
        assert "Invalid request file" in result.output

    def test_empty_batch(self, mock_endpoint, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("[]")

        result = runner.invoke(cli.app, ["run", "--file", str(path), "--output", "json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {
            "total": 0,
            "success": 0,
            "failed": 0,
            "success_rate": 0.0,
            "results": [],
        }

    def test_invalid_output_format(self, spec_file):
        result = runner.invoke(cli.app, ["run", "--file", str(spec_file), "--output", "xml"])
        assert result.exit_code == 2


class TestVersionCommand:
    def test_version(self):
        result = runner.invoke(cli.app, ["version"])
        assert result.exit_code == 0
        assert result.stdout.strip() == cli.app_config.CURRENT_VERSION
