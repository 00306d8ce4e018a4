"""Tests for the command-line entry point."""

from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, patch

import pytest

from reuse_score.cli import configure_logging, run_cli
from reuse_score.config import ScorerConfig
from reuse_score.context import ScoringContext
from reuse_score.models import MetricResult, RepositoryIdentity


def _fixed(score: float):
    async def fetcher(identity: RepositoryIdentity) -> MetricResult:
        return MetricResult.of(score if identity.is_resolved else 0.0, 0.01)

    return fetcher


@asynccontextmanager
async def _fake_context(config: ScorerConfig):
    registry = AsyncMock()
    registry.get_package = AsyncMock(
        return_value={"repository": {"url": "git+https://github.com/lodash/lodash.git"}}
    )
    yield ScoringContext(
        registry=registry,
        license=_fixed(1.0),
        ramp_up=_fixed(1.0),
        correctness=_fixed(1.0),
        responsiveness=_fixed(1.0),
        weights=config.weights,
    )


@pytest.fixture(autouse=True)
def _clean_env(tmp_path, monkeypatch):
    # setenv first so teardown restores whatever a .env file loads.
    for name in ("GITHUB_TOKEN", "LOG_FILE", "LOG_LEVEL", "NET_SCORE_WEIGHTS"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    yield
    package_logger = logging.getLogger("reuse_score")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)


class TestRunCli:
    def test_prints_ndjson_in_input_order(self, tmp_path, capsys):
        url_file = tmp_path / "urls.txt"
        url_file.write_text(
            "https://github.com/cloudinary/cloudinary_npm\n"
            "\n"
            "https://www.npmjs.com/package/lodash\n"
            "https://example.com/unknown\n",
            encoding="utf-8",
        )

        with patch("reuse_score.cli.open_context", _fake_context):
            code = run_cli([str(url_file)])

        assert code == 0
        lines = capsys.readouterr().out.strip().splitlines()
        records = [json.loads(line) for line in lines]
        assert [r["URL"] for r in records] == [
            "https://github.com/cloudinary/cloudinary_npm",
            "https://www.npmjs.com/package/lodash",
            "https://example.com/unknown",
        ]
        assert records[0]["NetScore"] == pytest.approx(0.95)
        assert records[1]["License"] == 1.0
        assert records[2]["NetScore"] == 0.0
        assert all(r["BusFactor"] == -1 for r in records)

    def test_missing_file_exits_1(self, tmp_path, capsys):
        with patch("reuse_score.cli.open_context", _fake_context):
            code = run_cli([str(tmp_path / "missing.txt")])

        assert code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "missing.txt" in captured.err

    def test_bad_config_exits_1(self, tmp_path, monkeypatch, capsys):
        url_file = tmp_path / "urls.txt"
        url_file.write_text("https://github.com/a/b\n", encoding="utf-8")
        monkeypatch.setenv("LOG_LEVEL", "9")

        code = run_cli([str(url_file)])

        assert code == 1
        assert "LOG_LEVEL" in capsys.readouterr().err

    def test_empty_file_prints_nothing(self, tmp_path, capsys):
        url_file = tmp_path / "urls.txt"
        url_file.write_text("\n\n", encoding="utf-8")

        with patch("reuse_score.cli.open_context", _fake_context):
            code = run_cli([str(url_file)])

        assert code == 0
        assert capsys.readouterr().out == ""

    def test_custom_weights(self, tmp_path, monkeypatch, capsys):
        url_file = tmp_path / "urls.txt"
        url_file.write_text("https://github.com/a/b\n", encoding="utf-8")
        monkeypatch.setenv("NET_SCORE_WEIGHTS", "0.25,0.25,0.25,0.25")

        with patch("reuse_score.cli.open_context", _fake_context):
            run_cli([str(url_file)])

        record = json.loads(capsys.readouterr().out)
        assert record["NetScore"] == 1.0

    def test_records_before_abort_are_kept(self, tmp_path, capsys):
        url_file = tmp_path / "urls.txt"
        url_file.write_text(
            "https://github.com/a/b\nhttps://www.npmjs.com/package/lodash\n",
            encoding="utf-8",
        )

        @asynccontextmanager
        async def broken_registry(config: ScorerConfig):
            async with _fake_context(config) as ctx:
                ctx.registry.get_package.side_effect = RuntimeError("registry exploded")
                yield ctx

        with patch("reuse_score.cli.open_context", broken_registry):
            code = run_cli([str(url_file)])

        assert code == 1
        captured = capsys.readouterr()
        lines = captured.out.strip().splitlines()
        assert [json.loads(line)["URL"] for line in lines] == ["https://github.com/a/b"]
        assert "registry exploded" in captured.err

    def test_malformed_line_does_not_stop_batch(self, tmp_path, capsys):
        url_file = tmp_path / "urls.txt"
        url_file.write_text(
            "https://github.com/a/b\nhttps://[github.com/x/y\nhttps://github.com/c/d\n",
            encoding="utf-8",
        )

        with patch("reuse_score.cli.open_context", _fake_context):
            code = run_cli([str(url_file)])

        assert code == 0
        records = [json.loads(line) for line in capsys.readouterr().out.strip().splitlines()]
        assert [r["URL"] for r in records] == [
            "https://github.com/a/b",
            "https://[github.com/x/y",
            "https://github.com/c/d",
        ]
        assert records[1]["NetScore"] == 0.0
        assert records[2]["NetScore"] == pytest.approx(0.95)

    def test_requires_url_file_argument(self):
        with pytest.raises(SystemExit) as exc_info:
            run_cli([])
        assert exc_info.value.code == 2


class TestDotenv:
    @staticmethod
    def _capturing_context(seen: list[ScorerConfig]):
        @asynccontextmanager
        async def capture(config: ScorerConfig):
            seen.append(config)
            async with _fake_context(config) as ctx:
                yield ctx

        return capture

    def test_env_file_supplies_token(self, tmp_path):
        (tmp_path / ".env").write_text("GITHUB_TOKEN=ghp_from_dotenv\n", encoding="utf-8")
        url_file = tmp_path / "urls.txt"
        url_file.write_text("https://github.com/a/b\n", encoding="utf-8")
        seen: list[ScorerConfig] = []

        with patch("reuse_score.cli.open_context", self._capturing_context(seen)):
            code = run_cli([str(url_file)])

        assert code == 0
        assert seen[0].github_token == "ghp_from_dotenv"

    def test_environment_overrides_env_file(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text("GITHUB_TOKEN=ghp_from_dotenv\n", encoding="utf-8")
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_from_shell")
        url_file = tmp_path / "urls.txt"
        url_file.write_text("https://github.com/a/b\n", encoding="utf-8")
        seen: list[ScorerConfig] = []

        with patch("reuse_score.cli.open_context", self._capturing_context(seen)):
            run_cli([str(url_file)])

        assert seen[0].github_token == "ghp_from_shell"


class TestConfigureLogging:
    def test_log_file(self, tmp_path):
        log_path = tmp_path / "run.log"
        config = ScorerConfig(log_file=str(log_path), log_level=logging.INFO)

        handler = configure_logging(config)
        logging.getLogger("reuse_score.batch").info("hello from the batch")
        handler.flush()

        assert "hello from the batch" in log_path.read_text(encoding="utf-8")

    def test_silent_level_drops_messages(self, tmp_path):
        log_path = tmp_path / "run.log"
        config = ScorerConfig.from_env({"LOG_FILE": str(log_path), "LOG_LEVEL": "0"})

        handler = configure_logging(config)
        logging.getLogger("reuse_score.batch").error("should not appear")
        handler.flush()

        assert log_path.read_text(encoding="utf-8") == ""

    def test_reconfigure_replaces_handler(self, tmp_path):
        first = configure_logging(ScorerConfig(log_file=str(tmp_path / "a.log")))
        second = configure_logging(ScorerConfig(log_file=str(tmp_path / "b.log")))

        handlers = logging.getLogger("reuse_score").handlers
        assert second in handlers
        assert first not in handlers
