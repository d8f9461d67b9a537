"""
Salesforce login and console app selection.
"""
from __future__ import annotations
from playwright.sync_api import Error as PlaywrightError, Page
from typing import Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from ccas import page_scripts
from ccas.browser import click_when_visible, is_present, navigate, wait_for_condition, wait_visible
from ccas.config import WorkloadConfig
from ccas.errors import AutomationError, ErrorKind
from ccas.run_context import RunContext
from ccas.selectors import LOGIN_ACCESSORS, app_selector

BASE_LOGIN_PAGE = "/one/one.app"


def construct_login_url(server: str, aura_mode: Optional[str] = None) -> str:
    """
    Build the login URL that lands on the Lightning app after sign-in.

    Args:
        server: Base server URL, e.g. https://example.my.salesforce.com
        aura_mode: Optional aura mode (e.g. "DEV") appended to the start URL

    Returns:
        Server URL with a startURL query parameter
    """
    parts = urlsplit(server or "")
    if not parts.scheme or not parts.netloc:
        raise ValueError(f"Invalid server URL: {server!r}")

    login_path = BASE_LOGIN_PAGE
    if aura_mode:
        login_path += f"?aura.mode={aura_mode}"

    params = []
    replaced = False
    for key, value in parse_qsl(parts.query, keep_blank_values=True):
        if key == "startURL":
            if replaced:
                continue
            value = login_path
            replaced = True
        params.append((key, value))
    if not replaced:
        params.append(("startURL", login_path))

    return urlunsplit((parts.scheme, parts.netloc, parts.path or "/", urlencode(params), parts.fragment))


def dismiss_recording_modal(page: Page, run: RunContext) -> bool:
    """
    Accept the call-recording consent modal shown on new orgs.

    Returns:
        True if a modal was dismissed
    """
    log = run.log
    log.info("Checking for recording modal popup...")

    try:
        if not is_present(page, LOGIN_ACCESSORS["recordingModal"]):
            log.info("No recording modal detected")
            return False

        log.info("Recording modal detected, handling...")
        wait_visible(page, LOGIN_ACCESSORS["recordingModal"], 5000)
        click_when_visible(page, LOGIN_ACCESSORS["iAgreeButton"], 3000)
        log.info("Clicked I Agree button")

        wait_for_condition(page, page_scripts.RECORDING_MODAL_GONE, 10000)
        log.info("Recording modal dismissed")
        return True
    except (AutomationError, PlaywrightError) as e:
        log.warning(f"Error checking for popup: {e}")
        return False


def select_app(page: Page, app: Optional[str], wait_time: float, run: RunContext) -> None:
    """Switch to the configured console app through the app launcher."""
    log = run.log
    if not app:
        log.info("No app configured, keeping the current app")
        return

    if is_present(page, app_selector(app)):
        log.info("App already selected")
        return

    log.info("App not found, opening app launcher")
    page.locator(LOGIN_ACCESSORS["appLauncher"]).first.click()

    search_input = wait_visible(page, LOGIN_ACCESSORS["appSearchInput"], wait_time, nth=0)
    search_input.fill(app)

    click_when_visible(page, LOGIN_ACCESSORS["appTile"], wait_time, nth=0)
    wait_for_condition(page, page_scripts.APP_READY, wait_time)
    log.info(f"Switched to app {app}")


def login(page: Page, config: WorkloadConfig, run: RunContext) -> None:
    """
    Log the agent in and land on the configured console app.

    Raises:
        AutomationError: On any failure before the app is ready
    """
    log = run.log
    server = config.server
    wait_time = config.get_number("loginWaitTimeout")

    try:
        login_url = construct_login_url(server, config.aura_mode)
        log.info(f"Navigating to login URL: {login_url}")

        try:
            navigate(page, login_url, wait_time)
        except AutomationError as e:
            if e.kind is not ErrorKind.HTTP_RESPONSE_FAILURE:
                raise
            log.info("URL with startURL failed, trying base URL")
            navigate(page, server, wait_time)

        log.info("Entering credentials")
        wait_visible(page, LOGIN_ACCESSORS["form"], wait_time)
        page.fill(LOGIN_ACCESSORS["username"], config.username)
        page.fill(LOGIN_ACCESSORS["password"], config.password)
        page.click(LOGIN_ACCESSORS["formSubmitBtn"])

        log.info("Waiting for page to load")
        wait_for_condition(page, page_scripts.APP_READY, wait_time)

        dismiss_recording_modal(page, run)
        select_app(page, config.app, wait_time, run)

        log.info("✓ Login completed successfully")
    except Exception as e:
        log.error(f"Login failed: {e}")
        raise
