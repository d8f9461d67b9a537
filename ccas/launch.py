"""
Browser launch and context options for fake audio capture.
"""
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ccas.config import DEFAULT_BROWSER_CHANNEL, WorkloadConfig

FAKE_MEDIA_ARGS = [
    "--use-fake-ui-for-media-stream",  # Auto-allow microphone
    "--use-fake-device-for-media-stream",  # Use fake audio
]

CHROME_ARGS = [
    "--allow-file-access-from-files",
    "--disable-features=IsolateOrigins,site-per-process",
    "--no-sandbox",
    "--disable-web-security",
    "--enable-experimental-web-platform-features",
    "--start-maximized",
]

CONTEXT_PERMISSIONS = ["microphone", "camera"]
ORIGIN_PERMISSIONS = ["microphone", "camera", "notifications"]
VIEWPORT = {"width": 1280, "height": 720}


def chrome_args(audio_file: Union[str, Path], base: Optional[List[str]] = None) -> List[str]:
    """Chromium arguments that replay `audio_file` as the microphone."""
    args = list(base or [])
    for arg in FAKE_MEDIA_ARGS + [f"--use-file-for-fake-audio-capture={audio_file}"] + CHROME_ARGS:
        if arg not in args:
            args.append(arg)
    return args


def launch_options(
    config: WorkloadConfig,
    audio_file: Union[str, Path],
    base: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Build BrowserType.launch() keyword arguments.

    Args:
        config: Workload configuration (headless, browserChannel)
        audio_file: WAV file for fake audio capture
        base: Launch arguments from pytest-playwright, if any

    Returns:
        Keyword arguments for BrowserType.launch()
    """
    base = dict(base or {})
    options = {
        **base,
        "headless": config.get_flag("headless", base.get("headless", True)),
        "args": chrome_args(audio_file, base.get("args")),
    }

    channel = config.get("browserChannel") or base.get("channel") or DEFAULT_BROWSER_CHANNEL
    if channel != "chromium":
        options["channel"] = channel
    else:
        options.pop("channel", None)
    return options


def context_options(base: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return {
        **(base or {}),
        "permissions": CONTEXT_PERMISSIONS,
        "viewport": VIEWPORT,
    }


def grant_origin_permissions(context, server: Optional[str]) -> None:
    """Grant media and notification permissions for the console origin."""
    if server:
        context.grant_permissions(ORIGIN_PERMISSIONS, origin=server)
    else:
        context.grant_permissions(ORIGIN_PERMISSIONS)
