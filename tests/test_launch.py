"""
Tests for browser launch options and the gateway warm-up.
"""
from ccas import page_scripts
from ccas.launch import FAKE_MEDIA_ARGS, chrome_args, context_options, launch_options
from ccas.selectors import GATEWAY_ACCESSORS
from ccas.steps.gateway import bypass_certificate_warning, open_webrtc_gateway
from tests.conftest import FakePage


def test_chrome_args_include_audio_file_once():
    args = chrome_args("/assets/voice.wav", base=FAKE_MEDIA_ARGS)

    assert args.count("--use-fake-device-for-media-stream") == 1
    assert "--use-file-for-fake-audio-capture=/assets/voice.wav" in args


def test_launch_options_defaults(make_config):
    options = launch_options(make_config(), "/assets/voice.wav")

    assert options["headless"] is True
    assert options["channel"] == "chrome"


def test_launch_options_overrides(make_config):
    config = make_config(headless="false", browserChannel="chromium")

    options = launch_options(config, "/assets/voice.wav", base={"channel": "msedge", "slow_mo": 50})

    assert options["headless"] is False
    assert "channel" not in options
    assert options["slow_mo"] == 50


def test_context_options_keep_base_args():
    options = context_options({"ignore_https_errors": True})

    assert options["ignore_https_errors"] is True
    assert options["permissions"] == ["microphone", "camera"]
    assert options["viewport"] == {"width": 1280, "height": 720}


def test_gateway_skipped_without_url(make_config, run_context):
    page = FakePage(url="https://console.example.com")

    open_webrtc_gateway(page, make_config(), run_context)

    assert page.calls == []


def test_gateway_visits_and_returns(make_config, run_context):
    page = FakePage(
        url="https://console.example.com/lightning",
        visible={GATEWAY_ACCESSORS["advancedButton"]},
        reveals_on_click={GATEWAY_ACCESSORS["advancedButton"]: [GATEWAY_ACCESSORS["proceedLink"]]},
    )
    config = make_config(webrtcGatewayUrl="https://gateway.example.com:8443")

    open_webrtc_gateway(page, config, run_context)

    locations = [call[2] for call in page.calls if call[0] == "evaluate" and call[1] == page_scripts.SET_LOCATION]
    assert locations == ["https://gateway.example.com:8443", "https://console.example.com/lightning"]
    assert page.clicked() == [GATEWAY_ACCESSORS["advancedButton"], GATEWAY_ACCESSORS["proceedLink"]]
    assert page.url == "https://console.example.com/lightning"


def test_bypass_uses_text_match_when_link_missing(run_context):
    page = FakePage(evaluate_results={page_scripts.CLICK_PROCEED_BY_TEXT: True})

    assert bypass_certificate_warning(page, 1000, run_context) is True


def test_bypass_without_interstitial(run_context):
    assert bypass_certificate_warning(FakePage(), 1000, run_context) is False
