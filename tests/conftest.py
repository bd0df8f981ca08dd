"""Pytest configuration for indexfeed test suite."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest
from loguru import logger
from support import US_HOURS

from indexfeed.core.models import ExchangeHours


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line options for controlling integration tests."""

    parser.addoption(
        "--indexfeed-run-integration",
        action="store_true",
        default=False,
        help="Run indexfeed integration tests that require external services.",
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register the integration marker for indexfeed tests."""

    config.addinivalue_line(
        "markers",
        "integration: marks indexfeed tests requiring network or external services",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests unless explicitly requested."""

    if config.getoption("--indexfeed-run-integration"):
        return

    skip_integration = pytest.mark.skip(reason="integration tests require --indexfeed-run-integration")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


@pytest.fixture(autouse=True)
def _reset_loguru() -> Iterator[None]:
    """Drop sinks that tests (or the CLI) attached to short-lived streams."""

    yield
    logger.remove()


@pytest.fixture
def log_messages() -> Iterator[list[dict[str, Any]]]:
    """Capture loguru records emitted during a test."""

    captured: list[dict[str, Any]] = []

    def sink(message: Any) -> None:
        record = message.record
        captured.append({"level": record["level"].name, "message": record["message"], "extra": dict(record["extra"])})

    handler_id = logger.add(sink, level="DEBUG")
    yield captured
    logger.remove(handler_id)


@pytest.fixture
def us_hours() -> ExchangeHours:
    return US_HOURS
