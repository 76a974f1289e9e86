"""
Fixtures for the offline unit tests.

Nothing here touches the network or a browser.
"""

import pytest

from qa_suite.core.config import SuiteConfig, get_config, reset_config


@pytest.fixture(autouse=True)
def fresh_config():
    """Rebuild the global config around each test so env changes don't leak."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def fast_waits(monkeypatch) -> SuiteConfig:
    """Shrink intervals and delays so timing tests run in milliseconds."""
    monkeypatch.setenv("QA_WAIT_STABILITY_TICK", "10")
    monkeypatch.setenv("QA_WAIT_STABLE_TIME", "30")
    monkeypatch.setenv("QA_WAIT_MIN_COUNT_INTERVAL", "10")
    monkeypatch.setenv("QA_WAIT_CONDITION_INTERVAL", "10")
    monkeypatch.setenv("QA_WAIT_ANIMATION_SETTLE", "10")
    monkeypatch.setenv("QA_RETRY_DELAY", "10")
    monkeypatch.setenv("QA_TIMEOUT_ELEMENT", "500")
    monkeypatch.setenv("QA_TIMEOUT_SHORT", "300")
    reset_config()
    return get_config()
