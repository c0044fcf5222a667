"""Shared fixtures: isolate cached settings and in-process tool state."""

import pytest

from targetwise.config.runtime import get_settings
from targetwise.interface.mcp import tools
from targetwise.interface.mcp.observability import reset_metrics


@pytest.fixture(autouse=True)
def _isolate_process_state(monkeypatch):
    for name in (
        "TARGETWISE_BACKEND_URL",
        "TARGETWISE_PRICING_TIERS",
        "TARGETWISE_MISSING_BIRTH_YEAR_POLICY",
        "TARGETWISE_CURRENT_YEAR",
        "TARGETWISE_REQUIRE_CONSOLE_KEY",
        "TARGETWISE_CONSOLE_KEY",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    tools._trace_store.clear()
    reset_metrics()
    yield
    get_settings.cache_clear()
