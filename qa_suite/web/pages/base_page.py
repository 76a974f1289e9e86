"""Shared page-object behaviour for the GE pages."""

import logging
from typing import List, Optional

from playwright.async_api import Locator, Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from qa_suite.core.config import WebConfig, get_config
from qa_suite.core.retry import retry
from qa_suite.core.waiter import poll_until
from qa_suite.web import waits


logger = logging.getLogger(__name__)


class FillVerificationError(AssertionError):
    """The input value read back differs from what was typed."""


class BasePage:
    """Base page object wrapping a Playwright page."""

    def __init__(self, page: Page, config: Optional[WebConfig] = None):
        self.page = page
        self.config = config or get_config().web

    async def navigate(self, url: str) -> None:
        await self.page.goto(url, wait_until="domcontentloaded")
        await waits.wait_for_dom_content_loaded(self.page)

    async def wait_for_page_load(self) -> None:
        """Wait for network idle, falling back to DOM content loaded.

        External sites keep long-polling connections open, so network idle
        may never happen.
        """
        try:
            await self.page.wait_for_load_state(
                "networkidle", timeout=get_config().timeouts.element
            )
        except PlaywrightTimeoutError:
            logger.debug("Network idle not reached, using domcontentloaded")
            await self.page.wait_for_load_state("domcontentloaded")

    async def is_visible_within(self, locator: Locator, timeout_ms: float) -> bool:
        """Poll visibility without raising."""
        return await poll_until(locator.is_visible, timeout_ms)

    async def click_element(self, locator: Locator) -> None:
        await waits.wait_for_visible(locator)
        await waits.wait_for_stable(locator)
        await locator.click()

    async def get_text(self, locator: Locator) -> str:
        await waits.wait_for_visible(locator)
        return await locator.text_content() or ""

    async def get_element_count(self, locator: Locator) -> int:
        await waits.wait_for_dom_content_loaded(self.page)
        return await locator.count()

    async def is_visible(self, locator: Locator) -> bool:
        try:
            await waits.wait_for_visible(locator, get_config().timeouts.short)
            return True
        except PlaywrightTimeoutError:
            return False

    def get_current_url(self) -> str:
        return self.page.url

    async def scroll_to_element(self, locator: Locator) -> None:
        await locator.scroll_into_view_if_needed()

    async def click_with_scroll(self, locator: Locator) -> None:
        await waits.wait_for_visible(locator)
        await self.scroll_to_element(locator)
        await waits.wait_for_stable(locator)
        await locator.click()

    async def fill_with_retry(
        self, locator: Locator, text: str, max_attempts: int = 3
    ) -> None:
        """Fill an input and read the value back, retrying on mismatch."""

        async def fill_and_verify() -> None:
            await waits.wait_for_visible(locator)
            await locator.fill(text)
            value = await locator.input_value()
            if value != text:
                raise FillVerificationError(
                    f"Fill verification failed: expected '{text}', got '{value}'"
                )

        await retry(
            fill_and_verify,
            max_attempts=max_attempts,
            delay_ms=get_config().waits.retry_delay,
        )

    async def get_text_array(self, locator: Locator) -> List[str]:
        await waits.wait_for_visible(locator.first)
        texts = []
        for element in await locator.all():
            text = await element.text_content()
            if text:
                texts.append(text.strip())
        return texts

    async def wait_for_stable(self, locator: Locator) -> None:
        await waits.wait_for_stable(locator)

    async def take_element_screenshot(self, locator: Locator, path: str) -> None:
        await waits.wait_for_visible(locator)
        await locator.screenshot(path=path)

    async def wait_for_url_contains(
        self, url_part: str, timeout_ms: Optional[float] = None
    ) -> None:
        await waits.wait_for_url_contains(self.page, url_part, timeout_ms)

    async def wait_for_min_element_count(
        self, locator: Locator, min_count: int, timeout_ms: Optional[float] = None
    ) -> int:
        return await waits.wait_for_min_count(locator, min_count, timeout_ms)
