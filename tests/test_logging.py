"""Tests for structlog configuration."""

import json
from collections.abc import Iterator

import pytest
import structlog

from folio.logging import build_processors, configure_logging
from folio.logging.colors import LEVEL_STYLES


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


class TestBuildProcessors:
    """Tests for the processor chain."""

    def test_console_renderer_by_default(self) -> None:
        processors = build_processors()
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_json_renderer(self) -> None:
        processors = build_processors(json_output=True)
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_events_tagged_with_service(self) -> None:
        *chain, _renderer = build_processors(service_name="cli")
        event_dict: dict = {"event": "db_seeded"}
        for processor in chain:
            event_dict = processor(None, "info", event_dict)

        assert event_dict["service"] == "cli"
        assert event_dict["level"] == "info"
        assert "timestamp" in event_dict

    def test_level_styles_cover_log_methods(self) -> None:
        assert {"debug", "info", "warning", "error", "critical"} <= LEVEL_STYLES.keys()


class TestConfigureLogging:
    """Tests for configure_logging output."""

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(service_name="api", json_output=True)

        structlog.get_logger().info("content_created", slug="my-project")

        line = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert line["event"] == "content_created"
        assert line["slug"] == "my-project"
        assert line["service"] == "api"

    def test_level_filtering(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(level="WARNING", colors=False)

        structlog.get_logger().info("hidden_event")
        structlog.get_logger().warning("shown_event")

        out = capsys.readouterr().out
        assert "hidden_event" not in out
        assert "shown_event" in out
