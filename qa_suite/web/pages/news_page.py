"""GE article page object."""

from typing import Optional

from playwright.async_api import Page

from qa_suite.core.config import WebConfig, get_config
from qa_suite.web.pages.base_page import BasePage


ARTICLE_URL_MARKERS = ("/futebol/", "/noticia/")


class NewsPage(BasePage):
    def __init__(self, page: Page, config: Optional[WebConfig] = None):
        super().__init__(page, config)

        self.article_title = page.locator('h1, [class*="content-head__title"]')
        self.article_content = page.locator(
            'article, [class*="content-text"], [class*="mc-article-body"]'
        )
        self.article_image = page.locator('article img, [class*="content-media"] img').first
        self.article_date = page.locator('time, [class*="content-publication-data"]')
        self.breadcrumb = page.locator('[class*="breadcrumb"], nav')

    async def verify_article_page(self) -> bool:
        """True when on a GE URL showing an article title or body."""
        await self.page.wait_for_load_state("domcontentloaded")

        url = self.page.url
        host = self.config.base_url.split("://", 1)[-1]
        if not (any(marker in url for marker in ARTICLE_URL_MARKERS) or host in url):
            return False

        short = get_config().timeouts.short
        has_title = await self.is_visible_within(self.article_title.first, short)
        has_content = await self.is_visible_within(self.article_content.first, short)
        return has_title or has_content

    async def is_news_page_loaded(self) -> bool:
        return await self.verify_article_page()

    async def get_article_title(self) -> str:
        return await self.get_text(self.article_title.first)

    async def verify_article_has_content(self) -> bool:
        content = await self.article_content.first.text_content()
        return len(content or "") > self.config.acceptance.min_content_length

    async def verify_article_has_image(self) -> bool:
        return await self.is_visible(self.article_image)
