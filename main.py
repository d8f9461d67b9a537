"""
CCAS voice call runner - runs a call scenario outside pytest.

Usage:
    python main.py inbound
    python main.py outbound --workload workload-metadata/CCASOutboundCall.json
"""
from __future__ import annotations
from pathlib import Path
from playwright.sync_api import sync_playwright
from typing import List, Optional
from dotenv import load_dotenv
import argparse
import logging
import sys

from ccas.config import load_workload
from ccas.launch import context_options, launch_options
from ccas.logs import LOG_FORMAT
from ccas.run_context import RunContext
from ccas.scenarios import SCENARIOS
from ccas.utils.audio import resolve_audio_file, verify_audio_file

# Configure logging
logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()

ROOT_DIR = Path(__file__).resolve().parent
WORKLOAD_DIR = ROOT_DIR / "workload-metadata"
ASSET_DIR = ROOT_DIR / "test_plans" / "test-asset"
RESULTS_DIR = ROOT_DIR / "results"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a CCAS voice call scenario")
    parser.add_argument("scenario", choices=sorted(SCENARIOS))
    parser.add_argument("--workload", help="Workload metadata JSON (default: per scenario)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    scenario = SCENARIOS[args.scenario]

    config = load_workload(args.workload or WORKLOAD_DIR / scenario.workload_file)
    if not config.server:
        logger.error("No server configured (set `server` in the workload file or environment)")
        return 1

    audio_file = resolve_audio_file(config.audio_file, ASSET_DIR, scenario.default_audio_file)
    verify_audio_file(audio_file)
    logger.info(f"Audio file configured: {audio_file}")

    run = RunContext.create(config, RESULTS_DIR, label=scenario.label)

    with sync_playwright() as playwright:
        browser = playwright.chromium.launch(**launch_options(config, audio_file))
        context = browser.new_context(**context_options())
        page = context.new_page()
        try:
            result = scenario.runner(page, context, config, run)
        except Exception:
            logger.exception(f"Scenario {args.scenario} failed (run {run.run_id})")
            return 1
        finally:
            context.close()
            browser.close()

    for step, ept in result.ept.items():
        logger.info(f"EPT {step}: {ept}ms")
    return 0


if __name__ == "__main__":
    sys.exit(main())
