"""
UI assertion helpers for the browser suite.

Thin wrappers over Playwright's ``expect`` that keep step and test code
readable. Async Playwright assertions retry until their timeout.
"""

import inspect
import re
from typing import Awaitable, List, Optional, Pattern, Union

from playwright.async_api import Locator, Page, expect


DEFAULT_TIMEOUT_MS = 5000


async def expect_page_accessible(page: Page, expected_url: Union[str, Pattern[str]]) -> None:
    """
    Assert the page ended up on the expected URL.

    Usage:
        await expect_page_accessible(page, re.compile(r"ge\\.globo\\.com"))
    """
    await expect(page).to_have_url(expected_url)


async def expect_visible(locator: Locator, timeout_ms: float = DEFAULT_TIMEOUT_MS) -> None:
    await expect(locator).to_be_visible(timeout=timeout_ms)


async def expect_min_count(
    locator: Locator, min_count: int, message: Optional[str] = None
) -> int:
    """
    Assert at least ``min_count`` elements match, without waiting.

    Returns:
        The observed count

    Raises:
        AssertionError: If fewer elements match
    """
    count = await locator.count()
    assert count >= min_count, (
        message or f"Expected at least {min_count} elements, but found {count}"
    )
    return count


async def expect_has_attribute(
    locator: Locator,
    name: str,
    value_pattern: Optional[str] = None,
    timeout_ms: float = DEFAULT_TIMEOUT_MS,
) -> None:
    """
    Assert an attribute is present, or matches ``value_pattern`` when given.

    Args:
        locator: Element to check
        name: Attribute name
        value_pattern: Regular expression the value must match
        timeout_ms: Retry window for the pattern match
    """
    if value_pattern:
        await expect(locator).to_have_attribute(
            name, re.compile(value_pattern), timeout=timeout_ms
        )
        return

    value = await locator.get_attribute(name, timeout=timeout_ms)
    assert value is not None, f'Attribute "{name}" not found'


async def expect_custom(condition: Union[bool, Awaitable[bool]], message: str) -> None:
    """Assert an arbitrary condition, awaiting it first if needed."""
    result = await condition if inspect.isawaitable(condition) else condition
    assert result, message


async def expect_all_have_images(locators: List[Locator]) -> None:
    """Assert every image locator has a non-empty ``src``."""
    for locator in locators:
        src = await locator.get_attribute("src")
        assert src, "Image without src found"
