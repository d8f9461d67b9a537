"""
Call teardown: hang up, close the voice call tab, confirm the dialog.
"""
from __future__ import annotations
from playwright.sync_api import Page

from ccas.browser import click_when_visible, delay
from ccas.config import WorkloadConfig
from ccas.errors import AutomationError
from ccas.run_context import RunContext
from ccas.selectors import ACCESSORS
from ccas.steps.microphone import capture_transcript_screenshots

CONFIRM_DIALOG_TIMEOUT = 4000
CALL_CONTROLS_TIMEOUT = 10000


def _open_panel_and_end(page: Page, timeout: float, run: RunContext, panel: str) -> None:
    click_when_visible(page, ACCESSORS[panel], timeout)
    run.log.info(f"Clicked {panel} button")
    delay(page, 1000)
    run.capture(page, "BeforeEndButton_CallControls")
    click_when_visible(page, ACCESSORS["endCallButton"], timeout)


def click_end_call(page: Page, timeout: float, run: RunContext, panel_first: bool = False) -> str:
    """
    Click the end-call control, with one fallback path.

    Without `panel_first` the end button is tried directly and the fallback
    opens the Omni-Channel (Online) panel first. With `panel_first` the
    primary path opens the Omni-Channel (Online) panel and the fallback uses
    the plain Omni-Channel button, and every wait is capped at
    CALL_CONTROLS_TIMEOUT.

    Returns:
        "primary" or "fallback"

    Raises:
        AutomationError: If the fallback fails as well
    """
    log = run.log
    if panel_first:
        timeout = min(timeout, CALL_CONTROLS_TIMEOUT)

    try:
        if panel_first:
            _open_panel_and_end(page, timeout, run, "omniChannelOnline")
        else:
            click_when_visible(page, ACCESSORS["endCallButton"], timeout)
        log.info("End call button found & clicked")
        return "primary"
    except AutomationError as e:
        log.warning(f"End call button not found or not clickable: {e} - trying fallback")

    delay(page, 500)
    try:
        _open_panel_and_end(page, timeout, run, "omniChannel" if panel_first else "omniChannelOnline")
    except AutomationError as e:
        log.error(f"Fallback also failed: {e}")
        raise

    log.info("End call button found & clicked via fallback")
    return "fallback"


def close_call_tab(page: Page, timeout: float, run: RunContext) -> None:
    """
    Close the most recent voice call tab and confirm the dialog if shown.

    Raises:
        AutomationError: If the tab cannot be closed
    """
    log = run.log

    try:
        click_when_visible(page, ACCESSORS["closeVC"], timeout, nth=-1)
        log.info("Clicked Close VC button (latest)")

        try:
            click_when_visible(page, ACCESSORS["endCallConfirmButton"], CONFIRM_DIALOG_TIMEOUT)
            log.info('Confirmation popup appeared, clicked "End Call" button')
        except AutomationError:
            log.info("No confirmation popup appeared (call ended directly)")

        log.info("Ended the Voice Call")
    except Exception as e:
        log.error(f"Error closing voice call tab: {e}")
        raise


def end_call(
    page: Page,
    config: WorkloadConfig,
    run: RunContext,
    panel_first: bool = False,
    capture_transcripts: bool = False,
    screenshot_name: str = "EndingCallTHB",
) -> None:
    """
    Hold the call for `callWaitTime`, then hang up and close the call tab.

    Args:
        page: Console page
        config: Workload configuration
        run: Run context
        panel_first: Open the Omni-Channel panel before looking for End
        capture_transcripts: Screenshot the transcript before hanging up
        screenshot_name: Name of the final screenshot
    """
    log = run.log
    timeout = config.get_number("ccasTimeout")
    call_wait_time = config.get_number("callWaitTime")

    log.info("Ending call")
    log.info(f"Waiting for {call_wait_time}ms")
    delay(page, call_wait_time)

    if capture_transcripts:
        capture_transcript_screenshots(page, run)

    click_end_call(page, timeout, run, panel_first=panel_first)
    close_call_tab(page, timeout, run)

    run.capture(page, screenshot_name)
    delay(page, config.get_number("defaultTimeout"))
