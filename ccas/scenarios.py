"""
End-to-end call scenarios.

Each scenario runs its steps in a fixed order against a single page and
stops at the first fatal step error.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from playwright.sync_api import BrowserContext, Page
from typing import Callable, Dict

from ccas.config import WorkloadConfig
from ccas.launch import grant_origin_permissions
from ccas.run_context import RunContext
from ccas.steps.gateway import open_webrtc_gateway
from ccas.steps.inbound import accept_incoming_call
from ccas.steps.login import login
from ccas.steps.microphone import check_transcripts, enable_microphone, sample_console_logs
from ccas.steps.outbound import make_outbound_call
from ccas.steps.presence import set_omni_channel_offline, set_omni_channel_online
from ccas.steps.teardown import end_call
from ccas.utils.console import MEDIA_KEYWORDS, ConsoleSampler

MAX_MEDIA_CONSOLE_LOGS = 2


@dataclass
class ScenarioResult:
    run_id: str
    ept: Dict[str, int] = field(default_factory=dict)
    transcript_counts: Dict[str, int] = field(default_factory=dict)


def _prepare(page: Page, context: BrowserContext, config: WorkloadConfig, run: RunContext) -> ConsoleSampler:
    page.set_default_timeout(config.get_number("loginWaitTimeout"))

    grant_origin_permissions(context, config.server)
    run.log.info("✓ Permissions granted for microphone and camera")

    return ConsoleSampler(page, run.log, MAX_MEDIA_CONSOLE_LOGS, keywords=MEDIA_KEYWORDS).attach()


def run_inbound_call(page: Page, context: BrowserContext, config: WorkloadConfig, run: RunContext) -> ScenarioResult:
    """Login, go online, accept an incoming call, check the transcript, hang up."""
    result = ScenarioResult(run_id=run.run_id)
    run.log.info(f"Starting CCAS Voice Call test (run {run.run_id})")
    monitor = _prepare(page, context, config, run)

    try:
        login(page, config, run)
        open_webrtc_gateway(page, config, run)
        result.ept["OmniChannelSetOnline"] = set_omni_channel_online(page, config, run)
        result.ept["AcceptingIncomingCallTHB"] = accept_incoming_call(page, config, run)
        enable_microphone(page, run)
        result.transcript_counts = check_transcripts(page, config, run)
        sample_console_logs(page, config, run)
        end_call(page, config, run)
        if config.get_flag("setOfflineAfterCall", False):
            set_omni_channel_offline(page, config, run)

        run.log.info("✓ Test completed successfully!")
        return result
    except Exception as e:
        run.log.error(f"CCAS Voice Call Test Failed: {e}")
        raise
    finally:
        monitor.detach()


def run_outbound_call(page: Page, context: BrowserContext, config: WorkloadConfig, run: RunContext) -> ScenarioResult:
    """Login, go online, dial out, hang up, go offline."""
    result = ScenarioResult(run_id=run.run_id)
    run.log.info(f"Starting CCAS Outbound Voice Call test (run {run.run_id})")
    monitor = _prepare(page, context, config, run)

    try:
        login(page, config, run)
        open_webrtc_gateway(page, config, run)
        result.ept["OmniChannelSetOnline"] = set_omni_channel_online(page, config, run)
        result.ept["MakeOutboundCall"] = make_outbound_call(page, config, run)
        if enable_microphone(page, run):
            run.log.info("Microphone enabled, audio will play during call")
        end_call(
            page,
            config,
            run,
            panel_first=True,
            capture_transcripts=True,
            screenshot_name="EndingOutboundCall",
        )
        if config.get_flag("setOfflineAfterCall", True):
            set_omni_channel_offline(page, config, run)

        run.log.info("✓ Test completed successfully!")
        return result
    except Exception as e:
        run.log.error(f"CCAS Outbound Voice Call Test Failed: {e}")
        raise
    finally:
        monitor.detach()


@dataclass(frozen=True)
class ScenarioInfo:
    runner: Callable[[Page, BrowserContext, WorkloadConfig, RunContext], ScenarioResult]
    workload_file: str
    default_audio_file: str
    label: str


SCENARIOS = {
    "inbound": ScenarioInfo(run_inbound_call, "CCASVoiceCall.json", "roleplay_padded_30secSilence.wav", "CCAS"),
    "outbound": ScenarioInfo(run_outbound_call, "CCASOutboundCall.json", "outbound_call_audio.wav", "CCAS Outbound"),
}
