"""
Best-effort diagnostics gathered around call handling.
"""
from __future__ import annotations
from playwright.sync_api import Error as PlaywrightError, Page
from typing import Optional
import json

from ccas import page_scripts
from ccas.run_context import RunContext
from ccas.selectors import ACCESSORS


def log_voice_session_id(page: Page, run: RunContext) -> Optional[str]:
    locator = page.locator(ACCESSORS["voiceSessionId"])
    try:
        session_id = (locator.first.text_content() or "").strip() if locator.count() > 0 else ""
    except PlaywrightError as e:
        run.log.warning(f"Could not get voice session ID: {e}")
        return None

    run.log.info(f'Voice Session ID: "{session_id}"')
    return session_id


def log_current_url(page: Page, run: RunContext) -> str:
    current_url = page.url
    run.log.info(f'Current Page URL: "{current_url}"')
    return current_url


def report_backdrops(page: Page, run: RunContext) -> int:
    """
    Log any modal backdrops that may be intercepting clicks.

    Returns:
        Number of backdrop elements found
    """
    selector = ACCESSORS["backdrop"]
    try:
        backdrop_count = page.locator(selector).count()
        if backdrop_count == 0:
            run.log.info("No backdrop elements found")
            return 0

        details = page.evaluate(page_scripts.BACKDROP_INFO, selector)
        run.log.error(
            f"BACKDROP DETECTED: {backdrop_count} backdrop element(s) found. "
            f"Details: {json.dumps(details, default=str)}"
        )
        return backdrop_count
    except PlaywrightError as e:
        run.log.warning(f"Could not check for backdrop: {e}")
        return 0


def install_webrtc_monitor(page: Page, run: RunContext) -> bool:
    """Wrap RTCPeerConnection.createOffer so offers show up in the console."""
    try:
        installed = page.evaluate(page_scripts.WEBRTC_MONITOR)
    except PlaywrightError as e:
        run.log.warning(f"Could not initialize WebRTC monitoring: {e}")
        return False

    if installed:
        run.log.info("WebRTC monitoring initialized")
    return bool(installed)
