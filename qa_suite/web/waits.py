"""
Condition-based wait strategies for Playwright pages and locators.

Replaces fixed timeouts with waits on element state, page load state or
polled conditions. Locator-level helpers delegate to the core waiter.
"""

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional

from playwright.async_api import Locator, Page

from qa_suite.core import waiter
from qa_suite.core.clock import sleep_ms
from qa_suite.core.config import get_config
from qa_suite.core.waiter import StabilityResult, WaitTimeoutError


logger = logging.getLogger(__name__)


def _element_timeout(timeout_ms: Optional[float]) -> float:
    return timeout_ms if timeout_ms is not None else get_config().timeouts.element


def _page_timeout(timeout_ms: Optional[float]) -> float:
    return timeout_ms if timeout_ms is not None else get_config().timeouts.default


async def wait_for_visible(locator: Locator, timeout_ms: Optional[float] = None) -> None:
    await locator.wait_for(state="visible", timeout=_element_timeout(timeout_ms))


async def wait_for_attached(locator: Locator, timeout_ms: Optional[float] = None) -> None:
    await locator.wait_for(state="attached", timeout=_element_timeout(timeout_ms))


async def wait_for_hidden(locator: Locator, timeout_ms: Optional[float] = None) -> None:
    await locator.wait_for(state="hidden", timeout=_element_timeout(timeout_ms))


async def wait_for_detached(locator: Locator, timeout_ms: Optional[float] = None) -> None:
    await locator.wait_for(state="detached", timeout=_element_timeout(timeout_ms))


async def wait_for_url_contains(
    page: Page, url_part: str, timeout_ms: Optional[float] = None
) -> None:
    await page.wait_for_url(f"**/*{url_part}*", timeout=_element_timeout(timeout_ms))


async def wait_for_network_idle(page: Page, timeout_ms: Optional[float] = None) -> None:
    """Wait until there are no network requests for 500ms."""
    await page.wait_for_load_state("networkidle", timeout=_page_timeout(timeout_ms))


async def wait_for_dom_content_loaded(page: Page, timeout_ms: Optional[float] = None) -> None:
    await page.wait_for_load_state("domcontentloaded", timeout=_page_timeout(timeout_ms))


async def wait_for_page_fully_loaded(page: Page, timeout_ms: Optional[float] = None) -> None:
    """Wait for the load event (DOM, images) and then network idle."""
    await page.wait_for_load_state("load", timeout=_page_timeout(timeout_ms))
    await wait_for_network_idle(page, timeout_ms)


async def wait_for_multiple_visible(
    locators: List[Locator], timeout_ms: Optional[float] = None
) -> None:
    await asyncio.gather(*(wait_for_visible(loc, timeout_ms) for loc in locators))


async def wait_for_stable(
    locator: Locator,
    timeout_ms: Optional[float] = None,
    stable_ms: Optional[float] = None,
) -> StabilityResult:
    """Wait until the element is visible and has stopped moving."""
    return await waiter.wait_for_stable(
        locator, timeout_ms=_element_timeout(timeout_ms), stable_ms=stable_ms
    )


async def wait_for_min_count(
    locator: Locator, min_count: int, timeout_ms: Optional[float] = None
) -> int:
    return await waiter.wait_for_min_count(
        locator.count, min_count, timeout_ms=_element_timeout(timeout_ms)
    )


async def wait_for_condition(
    condition: Callable[[], Awaitable[bool]],
    timeout_ms: Optional[float] = None,
    interval_ms: Optional[float] = None,
) -> bool:
    return await waiter.poll_until(
        condition, timeout_ms=_element_timeout(timeout_ms), interval_ms=interval_ms
    )


async def wait_for_text(locator: Locator, timeout_ms: Optional[float] = None) -> str:
    """
    Wait until the element has non-empty text.

    Returns:
        The trimmed text

    Raises:
        WaitTimeoutError: If the text stays empty until the deadline
    """
    timeout_ms = _element_timeout(timeout_ms)
    interval_ms = get_config().waits.condition_interval
    found: List[str] = []

    async def has_text() -> bool:
        text = await locator.text_content(timeout=interval_ms * 5)
        if text and text.strip():
            found.append(text.strip())
            return True
        return False

    if await waiter.poll_until(has_text, timeout_ms, interval_ms):
        return found[-1]

    raise WaitTimeoutError("Timeout: element has no text content", timeout_ms=timeout_ms)


async def wait_for_attribute(
    locator: Locator,
    attribute: str,
    expected_value: Optional[str] = None,
    timeout_ms: Optional[float] = None,
) -> Optional[str]:
    """
    Wait until ``attribute`` is present, or equals ``expected_value`` when given.

    Raises:
        WaitTimeoutError: If the attribute never matches
    """
    timeout_ms = _element_timeout(timeout_ms)
    interval_ms = get_config().waits.condition_interval
    found: List[Optional[str]] = []

    async def matches() -> bool:
        value = await locator.get_attribute(attribute, timeout=interval_ms * 5)
        if (expected_value is None and value is not None) or (
            expected_value is not None and value == expected_value
        ):
            found.append(value)
            return True
        return False

    if await waiter.poll_until(matches, timeout_ms, interval_ms):
        return found[-1]

    raise WaitTimeoutError(
        f'Timeout: attribute "{attribute}" did not match expected value',
        timeout_ms=timeout_ms,
    )


async def wait_for_animation_end(
    locator: Locator, timeout_ms: Optional[float] = None
) -> StabilityResult:
    """Wait for a CSS animation to settle: visible, short settle, then stable."""
    waits = get_config().waits
    timeout_ms = timeout_ms if timeout_ms is not None else get_config().timeouts.short

    await wait_for_visible(locator, timeout_ms)
    logger.debug(f"Element visible, settling for {waits.animation_settle}ms")
    await sleep_ms(waits.animation_settle)
    return await wait_for_stable(locator, timeout_ms, stable_ms=200)