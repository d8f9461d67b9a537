"""
Outbound call: dial a number from the telephony utility tab.
"""
from __future__ import annotations
from playwright.sync_api import Page

from ccas.browser import click_when_visible, is_visible, poll_until, wait_visible
from ccas.config import WorkloadConfig
from ccas.run_context import RunContext
from ccas.selectors import ACCESSORS
from ccas.steps.microphone import hold_microphone
from ccas.utils.diagnostics import log_current_url, log_voice_session_id
from ccas.utils.timing import EptTimer


def make_outbound_call(page: Page, config: WorkloadConfig, run: RunContext) -> int:
    """
    Place a call to the configured phone number.

    The mute control does not always render for outbound calls, so a missing
    connected indicator is only reported.

    Returns:
        EPT in ms from entry until the call is connected (or the wait ends)
    """
    log = run.log
    timeout = config.get_number("ccasTimeout")
    connect_timeout = config.get_number("callConnectTimeout")
    phone_number = config.phone_number
    timer = EptTimer()

    try:
        log.info("Making outbound call")

        log.info("Clicking on Telephony tab")
        click_when_visible(page, ACCESSORS["telephonyTab"], timeout)
        phone_input = wait_visible(page, ACCESSORS["phoneInput"], timeout)
        log.info("Telephony tab opened")
        run.capture(page, "TelephonyTab_Opened")

        hold_microphone(page, run)

        log.info(f"Filling phone number: {phone_number}")
        phone_input.fill(phone_number)
        log.info("Phone number filled")

        call_button = wait_visible(page, ACCESSORS["callButton"], timeout)
        run.capture(page, "PhoneNumber_Filled")

        log.info("Clicking Call button")
        call_button.click()
        log.info("Call button clicked, call initiated")
        run.capture(page, "OutboundCall_Initiated")

        log.info("Waiting for call to establish")
        connected = poll_until(page, lambda: is_visible(page, ACCESSORS["muteButton"]), connect_timeout)
        if run.check(connected, "Mute button not visible yet (call may still be connecting)"):
            log.info("Call connected (Mute button visible)")

        ept = timer.mark()
        log.info(f"EPT for MakeOutboundCall: {ept}ms")
        run.capture(page, "OutboundCall_Connected")
    except Exception as e:
        if run.capture(page, "MakeOutboundCall_Error"):
            log.info("Error screenshot saved: MakeOutboundCall_Error.png")
        log.error(f"Error in MakeOutboundCall after {timer.elapsed_ms}ms: {e}")
        raise

    log_voice_session_id(page, run)
    log_current_url(page, run)
    return ept
