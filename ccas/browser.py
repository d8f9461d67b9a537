"""
Thin wrappers over Playwright page calls.

Playwright errors are converted into AutomationError here so that steps can
branch on the error kind instead of inspecting messages.
"""
from __future__ import annotations
from playwright.sync_api import Error as PlaywrightError, Locator, Page
from typing import Callable, Optional
import logging
import time

from ccas.errors import AutomationError, classify_error
from ccas import page_scripts

logger = logging.getLogger(__name__)

POLL_INITIAL_INTERVAL_MS = 250
POLL_MAX_INTERVAL_MS = 4000
POLL_BACKOFF_FACTOR = 2.0


def delay(page: Page, ms: float) -> None:
    """Fixed sleep. Runs through Playwright so page events keep flowing."""
    if ms > 0:
        page.wait_for_timeout(ms)


def _wrap(error: PlaywrightError, message: str, selector: Optional[str] = None) -> AutomationError:
    return AutomationError(classify_error(error), f"{message}: {error}", selector=selector)


def navigate(page: Page, url: str, timeout: float, wait_until: str = "domcontentloaded"):
    """
    Navigate the page to a URL.

    Raises:
        AutomationError: HTTP_RESPONSE_FAILURE, NAVIGATION or TIMEOUT
    """
    try:
        return page.goto(url, wait_until=wait_until, timeout=timeout)
    except PlaywrightError as e:
        raise _wrap(e, f"Navigation to {url} failed") from e


def locate(page: Page, selector: str, nth: Optional[int] = None) -> Locator:
    locator = page.locator(selector)
    if nth is not None:
        locator = locator.nth(nth)
    return locator


def wait_visible(page: Page, selector: str, timeout: float, nth: Optional[int] = None) -> Locator:
    """
    Wait for an element to become visible.

    Args:
        page: Playwright page
        selector: CSS or XPath selector
        timeout: Wait timeout in ms
        nth: Optional match index (-1 for the last match)

    Returns:
        The visible locator

    Raises:
        AutomationError: If the element does not appear in time
    """
    locator = locate(page, selector, nth)
    try:
        locator.wait_for(state="visible", timeout=timeout)
    except PlaywrightError as e:
        raise _wrap(e, f"Element not visible within {timeout}ms ({selector})", selector) from e
    return locator


def click_when_visible(page: Page, selector: str, timeout: float, nth: Optional[int] = None) -> Locator:
    locator = wait_visible(page, selector, timeout, nth)
    try:
        locator.click(timeout=timeout)
    except PlaywrightError as e:
        raise _wrap(e, f"Could not click {selector}", selector) from e
    return locator


def wait_for_condition(page: Page, expression: str, timeout: float) -> None:
    """Wait until a JavaScript predicate evaluates truthy in the page."""
    try:
        page.wait_for_function(expression, timeout=timeout)
    except PlaywrightError as e:
        raise _wrap(e, f"Condition not met within {timeout}ms") from e


def is_present(page: Page, selector: str) -> bool:
    return page.locator(selector).count() > 0


def is_visible(page: Page, selector: str) -> bool:
    try:
        return page.locator(selector).first.is_visible()
    except PlaywrightError:
        return False


def poll_until(
    page: Page,
    condition: Callable[[], bool],
    timeout: float,
    interval: float = POLL_INITIAL_INTERVAL_MS,
    max_interval: float = POLL_MAX_INTERVAL_MS,
    factor: float = POLL_BACKOFF_FACTOR,
) -> bool:
    """
    Poll a condition with exponential backoff until it holds or time runs out.

    The deadline is reached when either the wall clock or the total time spent
    waiting passes `timeout` (ms).

    Returns:
        True if the condition held, False on timeout
    """
    deadline = time.monotonic() + timeout / 1000.0
    waited = 0.0
    wait = interval

    while True:
        if condition():
            return True

        remaining = min(timeout - waited, (deadline - time.monotonic()) * 1000.0)
        if remaining <= 0:
            return False

        step = min(wait, remaining)
        page.wait_for_timeout(step)
        waited += step
        wait = min(wait * factor, max_interval)


def follow_location(page: Page, url: str, timeout: float) -> bool:
    """
    Navigate by assigning window.location, then wait for the new document.

    Returns:
        True if the page URL changed within the timeout
    """
    before = page.url
    page.evaluate(page_scripts.SET_LOCATION, url)

    changed = poll_until(page, lambda: page.url != before, timeout)
    if not changed and page.url == url:
        changed = True

    try:
        page.wait_for_load_state("domcontentloaded", timeout=timeout)
    except PlaywrightError as e:
        logger.warning(f"Page did not finish loading {url}: {e}")
    return changed
