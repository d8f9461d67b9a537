"""
Fixtures for the CCAS call test plans.

Each test plan module declares SCENARIO ("inbound" or "outbound"); the
browser is launched per module because the fake audio file is a launch
argument.
"""
from pathlib import Path
from dotenv import load_dotenv
import pytest

from ccas.config import load_workload
from ccas.launch import FAKE_MEDIA_ARGS, context_options, launch_options
from ccas.run_context import RunContext
from ccas.scenarios import SCENARIOS
from ccas.utils.audio import resolve_audio_file, verify_audio_file

load_dotenv()

PLANS_DIR = Path(__file__).resolve().parent
ASSET_DIR = PLANS_DIR / "test-asset"
WORKLOAD_DIR = PLANS_DIR.parent / "workload-metadata"
RESULTS_DIR = PLANS_DIR.parent / "results"


@pytest.fixture(scope="session")
def browser_context_args(browser_context_args):
    """Configure browser context with permissions."""
    return context_options(browser_context_args)


@pytest.fixture(scope="session")
def browser_type_launch_args(browser_type_launch_args):
    """Configure browser launch arguments."""
    return {
        **browser_type_launch_args,
        "args": list(browser_type_launch_args.get("args", [])) + FAKE_MEDIA_ARGS,
    }


@pytest.fixture(scope="module")
def scenario(request):
    return SCENARIOS[request.module.SCENARIO]


@pytest.fixture(scope="module")
def workload(scenario):
    """Workload configuration; skips the module when no org is configured."""
    config = load_workload(WORKLOAD_DIR / scenario.workload_file)
    if not config.server or not config.username:
        pytest.skip("No server/username configured for the CCAS test plan")
    return config


@pytest.fixture(scope="module")
def audio_file(scenario, workload):
    path = resolve_audio_file(workload.audio_file, ASSET_DIR, scenario.default_audio_file)
    verify_audio_file(path)
    return path


@pytest.fixture(scope="module")
def call_browser(browser_type, browser_type_launch_args, workload, audio_file):
    """Chrome with the scenario's audio file as the fake microphone."""
    browser = browser_type.launch(**launch_options(workload, audio_file, browser_type_launch_args))
    yield browser
    browser.close()


@pytest.fixture
def call_context(call_browser, browser_context_args):
    context = call_browser.new_context(**browser_context_args)
    yield context
    context.close()


@pytest.fixture
def call_page(call_context):
    """Provide a fresh page for each test."""
    yield call_context.new_page()


@pytest.fixture
def run_context(scenario, workload):
    return RunContext.create(workload, RESULTS_DIR, label=scenario.label)
