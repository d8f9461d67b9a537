"""
Audio asset resolution for Chrome's fake capture device.
"""
from __future__ import annotations
from pathlib import Path
from pydub import AudioSegment
from typing import Optional, Union
import logging

logger = logging.getLogger(__name__)


def resolve_audio_file(value: Optional[str], asset_dir: Union[str, Path], default_name: str) -> Path:
    """
    Resolve the configured audio file path.

    Args:
        value: Configured audioFile value (may be None)
        asset_dir: test-asset directory next to the test plans
        default_name: File used when nothing is configured

    Returns:
        Absolute values unchanged; anything else anchored under asset_dir
    """
    asset_dir = Path(asset_dir)
    if not value:
        return asset_dir / default_name

    path = Path(value)
    if path.is_absolute():
        return path
    return asset_dir / path


def describe_wav(path: Union[str, Path]) -> Optional[dict]:
    """
    Read basic audio information.

    Args:
        path: Path to audio file

    Returns:
        Dict with channels, sample_rate, sample_width, duration_seconds,
        or None if the file cannot be decoded
    """
    try:
        audio = AudioSegment.from_file(str(path))
    except Exception:
        return None

    return {
        "channels": audio.channels,
        "sample_rate": audio.frame_rate,
        "sample_width": audio.sample_width,
        "duration_seconds": audio.duration_seconds,
    }


def verify_audio_file(path: Union[str, Path]) -> bool:
    """Log whether the fake capture file exists and looks usable."""
    path = Path(path)
    if not path.exists():
        logger.warning(f"Audio file NOT found: {path}")
        logger.warning("This may cause issues with fake audio capture!")
        return False

    info = describe_wav(path)
    if info is None:
        logger.warning(f"Audio file is not a readable WAV: {path}")
        return False

    logger.info(
        f"✓ Audio file found: {path} "
        f"({info['channels']}ch, {info['sample_rate']}Hz, {info['duration_seconds']:.1f}s)"
    )
    return True
