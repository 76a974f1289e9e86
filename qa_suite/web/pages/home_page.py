"""GE home page object."""

import logging
from dataclasses import dataclass
from typing import List, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page

from qa_suite.core.config import WebConfig, get_config
from qa_suite.core.waiter import MinCountTimeoutError
from qa_suite.web import waits
from qa_suite.web.pages.base_page import BasePage


logger = logging.getLogger(__name__)

# Selectors tried in order when counting news on the home feed
NEWS_COUNT_SELECTORS = [
    "article",
    '[class*="feed-post"]',
    '[class*="bastian-feed-item"]',
    '[data-type="materia"]',
    ".feed-media-wrapper",
]

NEWS_WITH_HEADING = 'a[href*="/futebol/"]:has(h2), a[href*="/futebol/"]:has(h3)'

MAX_NEWS_CARDS = 15

CARD_SUMMARY = 'p, [class*="summary"]'


@dataclass
class NewsCard:
    title: str
    image: str
    summary: str
    link: str


class HomePage(BasePage):
    """GE home page: news feed, cookie banner and team shortcuts."""

    def __init__(self, page: Page, config: Optional[WebConfig] = None):
        super().__init__(page, config)
        selectors = self.config.selectors

        self.news_cards = page.locator(selectors.news_article)
        self.news_title = page.locator(selectors.news_title).first
        self.news_image = page.locator(selectors.news_image).first
        self.news_summary = page.locator(selectors.news_summary).first

        self.teams_menu = page.locator('a[href*="/futebol/times/"]')
        self.serie_a_teams = page.locator(
            'a[href*="/futebol/times/"][href*="brasileiro-serie-a"]'
        )

        self.accept_cookies_button = page.locator(selectors.cookies_accept)

    async def navigate_to_home_page(self) -> None:
        await self.navigate(self.config.base_url)
        await self.wait_for_page_load()
        await self.accept_cookies()

    async def accept_cookies(self) -> None:
        """Dismiss the cookie banner if it shows up."""
        if not await self.is_visible_within(
            self.accept_cookies_button.first, get_config().timeouts.short
        ):
            logger.debug("Cookie banner not shown")
            return

        try:
            await self.click_element(self.accept_cookies_button.first)
        except PlaywrightError as e:
            # Banner can disappear between the check and the click
            logger.debug(f"Cookie banner dismissed elsewhere: {e}")

    async def is_home_page_loaded(self) -> bool:
        url_ok = self._host() in self.page.url
        has_news = await self.is_visible_within(
            self.news_cards.first, get_config().timeouts.short
        )
        return url_ok and has_news

    def get_news_locator(self) -> Locator:
        return self.news_cards

    async def click_first_news(self) -> str:
        """Click the first article in the feed and return its href."""
        first_news_link = self.page.locator(
            'div.bastian-feed-item[data-type="materia"] a'
        ).first
        await waits.wait_for_visible(first_news_link)
        await waits.wait_for_stable(first_news_link)

        href = await first_news_link.get_attribute("href") or ""
        await first_news_link.click()
        return href

    async def get_news_count(self) -> int:
        """Count news items, trying several feed layouts."""
        minimum = self.config.acceptance.min_news_count
        await self.page.wait_for_load_state("domcontentloaded")

        # Give the feed time to render instead of a fixed sleep
        try:
            await waits.wait_for_min_count(
                self.news_cards, minimum, get_config().timeouts.short
            )
        except MinCountTimeoutError as e:
            logger.info(f"Primary news selector below minimum: {e}")

        for selector in NEWS_COUNT_SELECTORS:
            count = await self.page.locator(selector).count()
            if count >= minimum:
                return count

        return await self.page.locator(NEWS_WITH_HEADING).count()

    async def get_news_cards(self) -> List[NewsCard]:
        await waits.wait_for_visible(self.news_cards.first)
        cards = []
        count = min(await self.news_cards.count(), MAX_NEWS_CARDS)
        short = get_config().timeouts.short

        for i in range(count):
            card = self.news_cards.nth(i)
            try:
                title = await card.locator(self.config.selectors.news_title).first.text_content(timeout=short) or ""
                image = await card.locator("img").first.get_attribute("src", timeout=short) or ""
                summary = await card.locator(CARD_SUMMARY).first.text_content(timeout=short) or ""
                link = await card.locator("a").first.get_attribute("href", timeout=short) or ""
            except PlaywrightError:
                # Cards without the full structure (ads, widgets) are skipped
                continue

            if title and link:
                cards.append(NewsCard(title=title, image=image, summary=summary, link=link))

        return cards

    async def verify_news_has_title(self) -> bool:
        heading = self.page.locator(
            'article h2, article h3, [class*="feed-item"] h2, [class*="feed-item"] h3'
        ).first
        return await self.is_visible_within(heading, get_config().timeouts.short)

    async def verify_news_has_image(self) -> bool:
        image = self.page.locator('article img, [class*="feed-item"] img').first
        return await self.is_visible_within(image, get_config().timeouts.short)

    async def verify_news_has_summary(self) -> bool:
        summary = self.page.locator(
            'article p, [class*="feed-item"] p, [class*="summary"]'
        ).first
        return await self.is_visible_within(summary, get_config().timeouts.short)

    async def select_serie_a_team(self, team_name: Optional[str] = None) -> str:
        """Open a Série A club page directly, as a click on its shortcut would."""
        selected_team = team_name or self.config.serie_a_teams[0]
        team_url = f"{self.config.base_url}/futebol/times/{selected_team}/"

        await self.page.goto(team_url, wait_until="domcontentloaded")
        await self.page.wait_for_load_state("domcontentloaded")
        return selected_team

    def _host(self) -> str:
        return self.config.base_url.split("://", 1)[-1].rstrip("/")
