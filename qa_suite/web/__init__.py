"""
Browser suite helpers for the GE site.

Wait strategies, page objects, UI assertions and the scenario context that
carries the page between steps.
"""

from qa_suite.web.context import BrowserSession, ScenarioContext
from qa_suite.web.pages import BasePage, HomePage, NewsCard, NewsPage, TeamPage

__all__ = [
    "BrowserSession",
    "ScenarioContext",
    "BasePage",
    "HomePage",
    "NewsCard",
    "NewsPage",
    "TeamPage",
]
