"""GE club page object."""

import logging
import re
from typing import Optional

from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from qa_suite.core.config import WebConfig, get_config
from qa_suite.web import waits
from qa_suite.web.pages.base_page import BasePage


logger = logging.getLogger(__name__)

TEAM_URL_MARKERS = ("/futebol/times/", "/times/", "/equipes/")
TEAM_SLUG = re.compile(r"/times/([^/]+)")


class TeamPage(BasePage):
    def __init__(self, page: Page, config: Optional[WebConfig] = None):
        super().__init__(page, config)

        self.team_title = page.locator('h1, [class*="team-name"], [class*="clube-nome"]')
        self.team_logo = page.locator(
            'img[alt*="logo"], [class*="team-logo"], [class*="clube-escudo"]'
        )
        self.team_news = page.locator('article, [class*="feed-post"], [class*="news-item"]')
        self.team_news_cards = page.locator(
            'a[href*="/futebol/"]:has(h2), a[href*="/futebol/"]:has(h3)'
        )
        self.team_stats = page.locator('[class*="stats"], [class*="tabela"]')
        self.search_field = page.locator("#busca-campo")

        self.team_menu = page.locator(".mosaico__header-personalization--times-label").first
        self.menu_button = page.locator(".menu-button").first
        self.sub_menu = page.locator(".icons-escudo-header").first

    async def select_team_on_search(self, team_name: str) -> None:
        await waits.wait_for_visible(self.search_field)
        await self.click_element(self.search_field)
        await self.fill_with_retry(self.search_field, team_name)
        await self.page.keyboard.press("Enter")
        await self.wait_for_page_load()

    async def select_team_from_menu(self, team_name: str = "Palmeiras") -> None:
        await waits.wait_for_network_idle(self.page)

        await self.team_menu.hover()
        await waits.wait_for_visible(self.sub_menu)
        await self.click_element(self.sub_menu)

        await waits.wait_for_network_idle(self.page)

        team_button = self.page.get_by_role("button", name=team_name).first
        await self.click_element(team_button)
        await self.wait_for_page_load()

    async def verify_team_page(self) -> bool:
        await self.page.wait_for_load_state("domcontentloaded")

        url = self.page.url
        host = self.config.base_url.split("://", 1)[-1]
        if not (any(marker in url for marker in TEAM_URL_MARKERS) or host in url):
            return False

        short = get_config().timeouts.short
        has_title = await self.is_visible_within(self.team_title.first, short)
        has_news = await self.is_visible_within(self.team_news_cards.first, short)
        return has_title or has_news

    async def is_team_page_loaded(self) -> bool:
        return await self.verify_team_page()

    async def get_team_news_count(self) -> int:
        await self.page.wait_for_load_state("domcontentloaded")

        news_count = await self.team_news_cards.count()
        if news_count > 0:
            return news_count

        return await self.team_news.count()

    async def verify_team_has_news(self) -> bool:
        return await self.get_team_news_count() > 0

    async def get_team_name(self) -> str:
        """Club name from the page title, or from the URL slug."""
        try:
            title = await self.team_title.first.text_content(
                timeout=get_config().timeouts.short
            )
            return (title or "").strip() or "Time"
        except PlaywrightTimeoutError:
            match = TEAM_SLUG.search(self.page.url)
            return match.group(1).replace("-", " ") if match else "Time"
