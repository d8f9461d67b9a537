"""
Pytest configuration and fixtures for the step tests.

Steps run against FakePage, an in-memory stand-in for a Playwright page.
Time only advances through wait calls, so timeouts and polls finish
instantly while still following the same control flow as a real browser.
"""
import pytest
from pathlib import Path
from playwright.sync_api import Error as PlaywrightError, TimeoutError as PlaywrightTimeoutError

from ccas.config import WorkloadConfig
from ccas.logs import get_agent_logger
from ccas.run_context import RunContext


class FakeConsoleMessage:
    def __init__(self, text, type="log"):
        self.text = text
        self.type = type


class FakeLocator:
    def __init__(self, page, selector, index=None):
        self.page = page
        self.selector = selector
        self.index = index

    def nth(self, index):
        return FakeLocator(self.page, self.selector, index)

    @property
    def first(self):
        return self.nth(0)

    def count(self):
        return self.page.count_of(self.selector)

    def is_visible(self):
        return self.page.is_shown(self.selector)

    def wait_for(self, state="visible", timeout=None):
        self.page.calls.append(("wait_for", self.selector, self.index))
        if self.selector in self.page.wait_errors:
            raise PlaywrightError(self.page.wait_errors[self.selector])
        if not self.page.wait_until_shown(self.selector, timeout):
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {self.selector}")

    def click(self, timeout=None):
        if self.selector in self.page.click_errors:
            raise PlaywrightError(self.page.click_errors[self.selector])
        if not self.page.is_shown(self.selector):
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded clicking {self.selector}")
        self.page.calls.append(("click", self.selector, self.index))
        self.page.on_click(self.selector)

    def fill(self, value):
        self.page.calls.append(("fill", self.selector, value))

    def text_content(self):
        return self.page.texts.get(self.selector)


class FakePage:
    """
    In-memory page.

    Args:
        visible: Selectors visible from the start
        reveal_after: Selector -> elapsed ms at which it becomes visible
        counts: Selector -> element count (default 1 when visible, else 0)
        evaluate_results: Script -> value returned by evaluate()
        goto_errors: URL -> error message raised by goto()
        wait_errors and click_errors: Selector -> error message raised by that call
        texts: Selector -> text_content() value
        reveals_on_click: Selector -> selectors that become visible after a click
    """

    def __init__(
        self,
        visible=(),
        reveal_after=None,
        counts=None,
        evaluate_results=None,
        goto_errors=None,
        reveals_on_click=None,
        url="about:blank",
    ):
        self.visible = set(visible)
        self.reveal_after = dict(reveal_after or {})
        self.counts = dict(counts or {})
        self.evaluate_results = dict(evaluate_results or {})
        self.goto_errors = dict(goto_errors or {})
        self.reveals_on_click = dict(reveals_on_click or {})
        self.unmet_conditions = set()
        self.click_errors = {}
        self.wait_errors = {}
        self.texts = {}
        self.url = url
        self.elapsed = 0
        self.calls = []
        self.screenshots = []
        self.listeners = {}
        self.default_timeout = None

    # Visibility bookkeeping

    def _apply_reveals(self):
        for selector, at in list(self.reveal_after.items()):
            if at <= self.elapsed:
                self.visible.add(selector)
                del self.reveal_after[selector]

    def is_shown(self, selector):
        self._apply_reveals()
        return selector in self.visible

    def count_of(self, selector):
        self._apply_reveals()
        if selector in self.counts:
            return self.counts[selector]
        return 1 if selector in self.visible else 0

    def wait_until_shown(self, selector, timeout):
        if self.is_shown(selector):
            return True
        at = self.reveal_after.get(selector)
        if at is not None and (timeout is None or at <= self.elapsed + timeout):
            self.elapsed = at
            self._apply_reveals()
            return True
        self.elapsed += timeout or 0
        return False

    def on_click(self, selector):
        for revealed in self.reveals_on_click.get(selector, ()):
            self.visible.add(revealed)

    def clicked(self):
        return [call[1] for call in self.calls if call[0] == "click"]

    # Page API

    def locator(self, selector):
        return FakeLocator(self, selector)

    def fill(self, selector, value):
        self.calls.append(("fill", selector, value))

    def click(self, selector):
        self.locator(selector).click()

    def goto(self, url, wait_until=None, timeout=None):
        self.calls.append(("goto", url))
        if url in self.goto_errors:
            raise PlaywrightError(self.goto_errors[url])
        self.url = url

    def wait_for_timeout(self, timeout):
        self.elapsed += timeout
        self._apply_reveals()

    def wait_for_function(self, expression, timeout=None):
        self.calls.append(("wait_for_function", expression))
        if expression in self.unmet_conditions:
            self.elapsed += timeout or 0
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded")

    def wait_for_load_state(self, state="load", timeout=None):
        self.calls.append(("wait_for_load_state", state))

    def evaluate(self, expression, arg=None):
        self.calls.append(("evaluate", expression, arg))
        result = self.evaluate_results.get(expression)
        if isinstance(result, Exception):
            raise result
        if "window.location" in expression and arg is not None:
            self.url = arg
        return result

    def screenshot(self, path=None):
        self.screenshots.append(path)
        Path(path).write_bytes(b"\x89PNG")

    def set_default_timeout(self, timeout):
        self.default_timeout = timeout

    def on(self, event, handler):
        self.listeners.setdefault(event, []).append(handler)

    def remove_listener(self, event, handler):
        self.listeners[event].remove(handler)

    def emit(self, event, payload):
        for handler in list(self.listeners.get(event, [])):
            handler(payload)


@pytest.fixture
def fake_page():
    return FakePage()


@pytest.fixture
def environ():
    return {}


@pytest.fixture
def make_config(environ):
    """Build a WorkloadConfig isolated from the real environment."""
    def _make(**arguments):
        return WorkloadConfig(arguments, environ=environ)
    return _make


@pytest.fixture
def run_context(tmp_path):
    return RunContext(
        run_id="agent_4242_1700000000000",
        log=get_agent_logger("tests.ccas", "agent@example.com", "VoiceQueue"),
        local_results_dir=tmp_path / "local",
        results_root=tmp_path / "results",
    )
