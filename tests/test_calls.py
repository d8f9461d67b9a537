"""
Tests for accepting and placing calls and for the transcript check.
"""
import pytest

from ccas import page_scripts
from ccas.errors import AutomationError, ErrorKind
from ccas.selectors import ACCESSORS
from ccas.steps.inbound import accept_incoming_call, verify_call_connected
from ccas.steps.microphone import check_transcripts, enable_microphone, hold_microphone
from ccas.steps.outbound import make_outbound_call
from ccas.utils.diagnostics import log_voice_session_id
from tests.conftest import FakePage

INBOX = ACCESSORS["inbox"]
ACCEPT = ACCESSORS["acceptIncomingMessage"]
MUTE = ACCESSORS["muteButton"]
ONLINE = ACCESSORS["omniChannelOnline"]
CUSTOMER = ACCESSORS["customerFirstMessage"]
AGENT = ACCESSORS["agentFirstMessage"]


def test_accept_incoming_call(make_config, run_context):
    page = FakePage(
        reveal_after={INBOX: 20000},
        visible={ACCEPT, ONLINE, MUTE},
        evaluate_results={
            page_scripts.HOLD_MICROPHONE: True,
            page_scripts.WEBRTC_MONITOR: True,
        },
    )
    config = make_config(AgentWaitTime=1000, ccasTimeout=1000)

    ept = accept_incoming_call(page, config, run_context)

    assert ept >= 0
    assert page.clicked()[:2] == [INBOX, ACCEPT]
    assert ("wait_for", MUTE, None) in page.calls


def test_accept_incoming_call_timeout_reports_backdrops(make_config, run_context):
    backdrop = ACCESSORS["backdrop"]
    page = FakePage(counts={backdrop: 2}, evaluate_results={page_scripts.BACKDROP_INFO: [{"tag": "DIV"}]})
    config = make_config(AgentWaitTime=10, ccasTimeout=1000)

    with pytest.raises(AutomationError) as excinfo:
        accept_incoming_call(page, config, run_context)

    assert excinfo.value.kind is ErrorKind.TIMEOUT
    assert ("evaluate", page_scripts.BACKDROP_INFO, backdrop) in page.calls


def test_verify_call_connected_lenient(run_context):
    assert verify_call_connected(FakePage(), 1000, run_context) is False


def test_verify_call_connected_lenient_on_locator_error(run_context):
    page = FakePage(visible={ONLINE})
    page.wait_errors[MUTE] = "strict mode violation: locator resolved to 2 elements"

    assert verify_call_connected(page, 1000, run_context) is False
    assert ("wait_for", MUTE, None) in page.calls


def test_verify_call_connected_strict_on_locator_error(run_context):
    page = FakePage(visible={ONLINE})
    page.wait_errors[MUTE] = "strict mode violation: locator resolved to 2 elements"
    run_context.strict = True

    with pytest.raises(AutomationError) as excinfo:
        verify_call_connected(page, 1000, run_context)

    assert excinfo.value.kind is ErrorKind.CHECK_FAILED


def test_verify_call_connected_strict(run_context):
    run_context.strict = True

    with pytest.raises(AutomationError) as excinfo:
        verify_call_connected(FakePage(), 1000, run_context)

    assert excinfo.value.kind is ErrorKind.CHECK_FAILED


def outbound_page(**kwargs):
    telephony = ACCESSORS["telephonyTab"]
    call = ACCESSORS["callButton"]
    return FakePage(
        visible={telephony},
        reveals_on_click={telephony: [ACCESSORS["phoneInput"], call]},
        **kwargs
    )


def test_make_outbound_call(make_config, run_context):
    page = outbound_page(reveal_after={MUTE: 3000})
    config = make_config(phoneNumber="+15550100", ccasTimeout=1000, callConnectTimeout=15000)

    ept = make_outbound_call(page, config, run_context)

    assert ept >= 0
    assert ("fill", ACCESSORS["phoneInput"], "+15550100") in page.calls
    assert page.clicked() == [ACCESSORS["telephonyTab"], ACCESSORS["callButton"]]
    assert page.elapsed < 15000


def test_make_outbound_call_without_mute_button_continues(make_config, run_context):
    page = outbound_page()
    config = make_config(ccasTimeout=1000, callConnectTimeout=2000)

    assert make_outbound_call(page, config, run_context) >= 0
    assert page.elapsed == 2000


def test_make_outbound_call_strict_requires_mute_button(make_config, run_context):
    page = outbound_page()
    run_context.strict = True
    config = make_config(ccasTimeout=1000, callConnectTimeout=2000)

    with pytest.raises(AutomationError) as excinfo:
        make_outbound_call(page, config, run_context)

    assert excinfo.value.kind is ErrorKind.CHECK_FAILED


def test_hold_microphone_rejected(run_context):
    page = FakePage(evaluate_results={page_scripts.HOLD_MICROPHONE: "NotAllowedError"})

    assert hold_microphone(page, run_context) is False
    assert page.elapsed == 0


def test_enable_microphone(run_context):
    page = FakePage(evaluate_results={page_scripts.REQUEST_MICROPHONE: True})

    assert enable_microphone(page, run_context) is True
    assert enable_microphone(FakePage(), run_context) is False


def test_check_transcripts_counts_both_sides(make_config, run_context):
    page = FakePage(counts={CUSTOMER: 3, AGENT: 1})

    counts = check_transcripts(page, make_config(transcriptWaitTime=1000), run_context)

    assert counts == {"customer": 3, "agent": 1}
    assert page.elapsed == 0


def test_check_transcripts_missing_messages_lenient(make_config, run_context):
    page = FakePage()

    counts = check_transcripts(page, make_config(transcriptWaitTime=1000), run_context)

    assert counts == {"customer": 0, "agent": 0}
    assert page.elapsed == 11000


def test_check_transcripts_missing_messages_strict(make_config, run_context):
    run_context.strict = True

    with pytest.raises(AutomationError):
        check_transcripts(FakePage(), make_config(transcriptWaitTime=1000), run_context)


def test_voice_session_id_read_from_record_field(run_context):
    page = FakePage(visible={ACCESSORS["voiceSessionId"]})
    page.texts[ACCESSORS["voiceSessionId"]] = "  a1b2-c3d4\n"

    assert log_voice_session_id(page, run_context) == "a1b2-c3d4"


def test_voice_session_id_missing_field(run_context):
    assert log_voice_session_id(FakePage(), run_context) == ""
