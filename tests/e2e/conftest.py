"""
Fixtures for the GE browser suite.

This module provides:
- One browser per session, skipped when the site or browser is unavailable
- A fresh ScenarioContext per test, with a screenshot on failure
"""

import logging
from typing import Generator

import httpx
import pytest
from playwright.async_api import Error as PlaywrightError

from qa_suite.core.config import SuiteConfig
from qa_suite.web.context import BrowserSession, ScenarioContext


logger = logging.getLogger(__name__)


# ============================================================================
# Browser Fixtures
# ============================================================================

@pytest.fixture(scope="session")
def browser_session(suite_config: SuiteConfig) -> Generator[BrowserSession, None, None]:
    """
    Launch the browser once for the whole run.

    Skips the suite when the site cannot be reached or no browser is
    installed (run ``playwright install chromium``).
    """
    base_url = suite_config.web.base_url
    try:
        httpx.get(base_url, timeout=10.0, follow_redirects=True)
    except httpx.HTTPError as e:
        pytest.skip(f"{base_url} not reachable: {e}")

    session = BrowserSession(suite_config.web)
    try:
        session.start()
    except PlaywrightError as e:
        session.close()
        pytest.skip(f"Browser could not be launched: {e}")

    yield session

    logger.info("Finishing browser tests")
    session.close()


@pytest.fixture
def scenario_context(
    browser_session: BrowserSession, request
) -> Generator[ScenarioContext, None, None]:
    """
    Fresh browser context and page for one scenario.

    The page is screenshotted when the test body failed.
    """
    ctx = browser_session.new_scenario(request.node.name)

    yield ctx

    report = getattr(request.node, "rep_call", None)
    failed = report is not None and report.failed
    browser_session.close_scenario(ctx, failed=failed)
