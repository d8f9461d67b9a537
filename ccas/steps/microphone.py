"""
Microphone capture and live transcript checks.
"""
from __future__ import annotations
from playwright.sync_api import Error as PlaywrightError, Page
from typing import Dict, List

from ccas import page_scripts
from ccas.browser import delay, poll_until
from ccas.config import WorkloadConfig
from ccas.run_context import RunContext
from ccas.selectors import ACCESSORS
from ccas.utils.console import ConsoleSampler

MAX_BROWSER_CONSOLE_LOGS = 3
MESSAGE_WAIT_TIMEOUT = 10000

TRANSCRIPT_SIDES = (
    ("customer", "customerFirstMessage", "Customer", "CustomerFirstMessage"),
    ("agent", "agentFirstMessage", "Agent", "AgentFirstMessage"),
)


def hold_microphone(page: Page, run: RunContext) -> bool:
    """Open a getUserMedia stream and keep it alive on window."""
    try:
        result = page.evaluate(page_scripts.HOLD_MICROPHONE)
    except PlaywrightError as e:
        run.log.debug(f"Pre-call microphone request failed: {e}")
        return False

    if result is not True:
        run.log.debug(f"Pre-call microphone request rejected: {result}")
        return False
    delay(page, 500)
    return True


def enable_microphone(page: Page, run: RunContext) -> bool:
    """
    Request getUserMedia so the fake capture file starts playing.

    Returns:
        True if the browser granted a stream
    """
    log = run.log
    log.info("Enabling microphone")

    try:
        result = page.evaluate(page_scripts.REQUEST_MICROPHONE)
    except PlaywrightError as e:
        log.warning(f"Error enabling microphone: {e}")
        return False

    if result is not True:
        log.warning(f"Microphone request rejected: {result}")
        return False

    log.info("Microphone enabled")
    return True


def count_messages(page: Page, accessor: str) -> int:
    return page.locator(ACCESSORS[accessor]).count()


def check_transcripts(page: Page, config: WorkloadConfig, run: RunContext) -> Dict[str, int]:
    """
    Wait for transcript messages from both parties and report their counts.

    Polls until the customer side shows more than one message and the agent
    side at least one, or `transcriptWaitTime` plus the message wait passes.

    Returns:
        Mapping of "customer"/"agent" to message counts
    """
    log = run.log
    wait_time = config.get_number("transcriptWaitTime") + MESSAGE_WAIT_TIMEOUT
    log.info(f"Waiting up to {wait_time}ms for transcript messages")

    counts = {}
    try:
        poll_until(
            page,
            lambda: count_messages(page, "customerFirstMessage") > 1 and count_messages(page, "agentFirstMessage") > 0,
            wait_time,
            interval=1000,
            max_interval=8000,
        )

        for side, accessor, title, shot in TRANSCRIPT_SIDES:
            message_count = count_messages(page, accessor)
            counts[side] = message_count

            if run.check(message_count > 0, f"{title} First Message not found"):
                log.info(f"{title} Messages found: {message_count}")
                if message_count > 1:
                    log.info("Transcript is working (more than 1 message)")

            run.capture(page, f"AcceptingIncomingCallTHB_{shot}")
    except PlaywrightError as e:
        log.warning(f"Error checking messages: {e}")

    return counts


def sample_console_logs(page: Page, config: WorkloadConfig, run: RunContext) -> List[str]:
    """
    Log the next few browser console messages.

    The listener is removed after MAX_BROWSER_CONSOLE_LOGS messages or once
    the `consoleSampleWindow` passes, whichever comes first.
    """
    log = run.log
    window = config.get_number("consoleSampleWindow")

    log.info("Setting up browser console listener (after transcripts)")
    sampler = ConsoleSampler(page, log, MAX_BROWSER_CONSOLE_LOGS)
    sampler.attach()
    log.info("Browser console listener active, waiting for messages...")

    try:
        poll_until(page, lambda: sampler.done, window)
    finally:
        sampler.detach()

    if sampler.count == 0:
        log.info(f"No browser console messages captured (waited {window}ms)")
    else:
        log.info(f"Captured {sampler.count} browser console message(s)")
    return sampler.messages


def capture_transcript_screenshots(page: Page, run: RunContext) -> None:
    """Screenshot the call controls and transcript before hanging up."""
    if not run.screenshots:
        return

    log = run.log
    log.info("Capturing call controls and transcripts screenshots before ending call")

    try:
        run.capture(page, "BeforeEndCall_CallControls")

        for side, accessor, title, _ in TRANSCRIPT_SIDES:
            message_count = count_messages(page, accessor)
            if message_count > 0:
                log.info(f"{title} Messages found: {message_count}")
                run.capture(page, f"BeforeEndCall_{title}Messages")
            else:
                log.warning(f"No {side} messages found for screenshot")

        run.capture(page, "BeforeEndCall_Transcripts")
    except PlaywrightError as e:
        log.warning(f"Error capturing screenshots: {e}")
