"""
Shared pytest configuration for the QA suite.

This module provides:
- Environment loading from .env.qa
- The suite configuration fixture
- Markers added by test location
- Per-phase test reports on the item (used for failure screenshots)
"""

import os

import pytest
from dotenv import load_dotenv

# Load QA test environment variables
load_dotenv(".env.qa")

from qa_suite.core.config import SuiteConfig, get_config, reset_config


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture(scope="session")
def suite_config() -> SuiteConfig:
    """Load suite configuration once per session."""
    reset_config()
    return get_config()


# ============================================================================
# Hooks
# ============================================================================

@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Store each phase's report on the item as ``rep_setup``, ``rep_call`` and
    ``rep_teardown`` so fixtures can react to failures.
    """
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)


def pytest_configure(config):
    """Configure pytest."""
    # Create reports directory
    os.makedirs("reports", exist_ok=True)


def pytest_collection_modifyitems(config, items):
    """
    Modify test collection to add markers based on test location.
    """
    for item in items:
        path = str(item.fspath)

        if f"{os.sep}unit{os.sep}" in path:
            item.add_marker(pytest.mark.unit)
        elif f"{os.sep}api{os.sep}" in path:
            item.add_marker(pytest.mark.api)
        elif f"{os.sep}e2e{os.sep}" in path:
            item.add_marker(pytest.mark.e2e)
            item.add_marker(pytest.mark.slow)
            if "steps" in os.path.basename(path):
                item.add_marker(pytest.mark.bdd)
