"""
Browser lifecycle and per-scenario state for the browser suite.

A ``BrowserSession`` owns one browser for the whole run and an event loop
runner that drives the async Playwright API from synchronous pytest and
pytest-bdd steps. Each scenario gets a fresh ``ScenarioContext`` with its
own browser context and page; steps receive it through a fixture instead
of reading a module-level "current page".
"""

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Coroutine, Dict, Optional, TypeVar

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError

from qa_suite.core.config import WebConfig, get_config
from qa_suite.utils import to_slug
from qa_suite.web.pages import HomePage, NewsPage, TeamPage


logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class ScenarioContext:
    """State shared by the steps of one scenario."""

    name: str
    session: "BrowserSession"
    context: BrowserContext
    page: Page
    selected_team: Optional[str] = None

    # Values handed from one step to the next (counts, clicked links)
    data: Dict[str, Any] = field(default_factory=dict)

    home_page: HomePage = field(init=False)
    news_page: NewsPage = field(init=False)
    team_page: TeamPage = field(init=False)

    def __post_init__(self) -> None:
        config = self.session.config
        self.home_page = HomePage(self.page, config)
        self.news_page = NewsPage(self.page, config)
        self.team_page = TeamPage(self.page, config)

    def run(self, coro: Coroutine[Any, Any, T]) -> T:
        """Run a page-object coroutine on the session loop."""
        return self.session.run(coro)


class BrowserSession:
    """
    One browser per test run.

    Usage:
        session = BrowserSession()
        session.start()
        ctx = session.new_scenario("home page loads")
        ctx.run(ctx.home_page.navigate_to_home_page())
        session.close_scenario(ctx, failed=False)
        session.close()
    """

    def __init__(self, config: Optional[WebConfig] = None):
        self.config = config or get_config().web
        self._runner = asyncio.Runner(loop_factory=asyncio.new_event_loop)
        self._playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None

    def run(self, coro: Coroutine[Any, Any, T]) -> T:
        return self._runner.run(coro)

    def start(self) -> None:
        self.run(self._start())
        logger.info(
            f"Browser {self.config.browser} started (headless: {self.config.headless})"
        )

    async def _start(self) -> None:
        self._playwright = await async_playwright().start()
        browser_type = getattr(self._playwright, self.config.browser)
        self.browser = await browser_type.launch(
            headless=self.config.headless,
            slow_mo=self.config.slow_mo,
        )

    def new_scenario(self, name: str) -> ScenarioContext:
        logger.info(f"Starting scenario: {name}")
        context, page = self.run(self._new_page())
        return ScenarioContext(name=name, session=self, context=context, page=page)

    async def _new_page(self):
        if self.browser is None:
            raise RuntimeError("Browser not started. Call start() first.")

        context = await self.browser.new_context(
            viewport={
                "width": self.config.viewport.width,
                "height": self.config.viewport.height,
            },
            locale=self.config.locale,
            timezone_id=self.config.timezone_id,
            permissions=["geolocation"],
            user_agent=self.config.user_agent,
        )
        page = await context.new_page()

        timeouts = get_config().timeouts
        page.set_default_timeout(timeouts.default)
        page.set_default_navigation_timeout(timeouts.navigation)
        return context, page

    def close_scenario(self, ctx: ScenarioContext, failed: bool) -> Optional[Path]:
        """
        Close the scenario's page and context.

        Returns:
            Path of the failure screenshot, if one was taken
        """
        screenshot = None
        if failed:
            logger.error(f"Scenario failed: {ctx.name}")
            screenshot = self.run(self._capture_failure(ctx))
        else:
            logger.info(f"Scenario passed: {ctx.name}")

        self.run(self._close_context(ctx))
        return screenshot

    async def _capture_failure(self, ctx: ScenarioContext) -> Optional[Path]:
        directory = Path(self.config.screenshot_dir)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / f"{to_slug(ctx.name) or 'scenario'}.png"

        try:
            await ctx.page.screenshot(path=str(path), full_page=True)
        except PlaywrightError as e:
            logger.error(f"Failed to capture screenshot: {e}")
            return None

        logger.info(f"Screenshot captured at {ctx.page.url}: {path}")
        return path

    async def _close_context(self, ctx: ScenarioContext) -> None:
        await ctx.page.close()
        await ctx.context.close()

    def close(self) -> None:
        try:
            self.run(self._close())
        finally:
            self._runner.close()
        logger.info("Browser closed")

    async def _close(self) -> None:
        if self.browser is not None:
            await self.browser.close()
            self.browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
