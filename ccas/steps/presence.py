"""
Omni-Channel presence: open the widget and switch the agent status.
"""
from __future__ import annotations
from playwright.sync_api import Error as PlaywrightError, Page

from ccas.browser import click_when_visible, delay, is_present, poll_until, wait_visible
from ccas.config import WorkloadConfig
from ccas.errors import AutomationError
from ccas.run_context import RunContext
from ccas.selectors import ACCESSORS
from ccas.utils.timing import EptTimer


def open_omni_channel(page: Page, timeout: float, run: RunContext, online_first: bool = True) -> str:
    """
    Click the Omni-Channel utility bar button.

    The button label depends on the current status, so the expected label is
    tried first and the other one once as a fallback.

    Returns:
        Accessor name of the button that was clicked

    Raises:
        AutomationError: If neither button can be clicked
    """
    primary, fallback = ("omniChannelOnline", "omniChannel")
    if not online_first:
        primary, fallback = fallback, primary

    try:
        click_when_visible(page, ACCESSORS[primary], timeout)
        clicked = primary
    except AutomationError as e:
        run.log.warning(f"Could not click {primary}: {e} - trying {fallback}")
        click_when_visible(page, ACCESSORS[fallback], timeout)
        clicked = fallback

    run.log.info(f"Clicked on {'Omni-Channel (Online)' if clicked == 'omniChannelOnline' else 'Omni-Channel'}")
    return clicked


def set_omni_channel_online(page: Page, config: WorkloadConfig, run: RunContext) -> int:
    """
    Set the agent status to Available.

    Returns:
        EPT in ms from entry until Available is selected
    """
    log = run.log
    timeout = config.get_number("ccasTimeout")
    timer = EptTimer()

    try:
        log.info("Setting Omni-Channel to Online")

        click_when_visible(page, ACCESSORS["omniChannel"], timeout)
        log.info("Clicked on Omni-Channel")
        run.capture(page, "OmniChannelSetOnline_clickOmniChannel")

        dropdown = wait_visible(page, ACCESSORS["statusDropDown"], timeout)
        log.info("Able to enter inside Omni-Channel")
        run.capture(page, "OmniChannelSetOnline_viewStatusDropdown")

        dropdown.click()
        log.info("Clicked on Status DropDown")
        run.capture(page, "OmniChannelSetOnline_clickStatusDropDown")

        click_when_visible(page, ACCESSORS["availableForVoice"], timeout)
        log.info("Selected Available For Voice")
        run.capture(page, "InboxImage_OmniChannelSetOnline")

        ept = timer.mark()

        sipp_delay = config.get_number("sippStartDelay")
        delay(page, sipp_delay)
        log.info(f"waited for {sipp_delay} ms to start the SIPP test")

        log.info(f"EPT for OmniChannelSetOnline (Click to Available): {ept}ms")
        run.capture(page, "OmniChannelSetOnline_SelectedAvailableForVoice")
        return ept
    except Exception as e:
        log.error(f"Error in OmniChannelSetOnline after {timer.elapsed_ms}ms: {e}")
        raise


def set_omni_channel_offline(page: Page, config: WorkloadConfig, run: RunContext) -> bool:
    """
    Set the agent status to Offline. Failures are logged, never raised.

    Returns:
        True if Offline was selected
    """
    log = run.log
    timeout = config.get_number("ccasTimeout")

    try:
        log.info("Setting Omni-Channel to Offline")
        open_omni_channel(page, 10000, run)

        click_when_visible(page, ACCESSORS["statusDropDown"], timeout)
        log.info("Clicked on Status DropDown")

        click_when_visible(page, ACCESSORS["offlineStatus"], timeout)
        log.info("Selected Offline status")

        if not poll_until(page, lambda: is_present(page, ACCESSORS["omniChannel"]), timeout):
            log.warning("Omni-Channel status label did not update")
        run.capture(page, "OmniChannel_Offline_Complete")

        log.info("✓ Successfully set Omni-Channel to Offline")
        return True
    except (AutomationError, PlaywrightError) as e:
        log.error(f"Error setting Omni-Channel to Offline: {e}")
        log.warning("Failed to set Omni-Channel to Offline, continuing...")
        return False
