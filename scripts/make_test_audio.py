"""
Generate the fake-microphone WAV files used by the call scenarios.

The browser replays these files as microphone input, so they need speech-band
audio followed by silence long enough to cover the call.

Run this script once before running the test plans:
    python scripts/make_test_audio.py
"""
import sys
import os
import wave

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np

from ccas.scenarios import SCENARIOS
from ccas.utils.audio import describe_wav

SAMPLE_RATE = 48000
TONE_SECONDS = 5.0
SILENCE_SECONDS = 30.0

ASSET_DIR = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "test_plans", "test-asset"
)


def tone(duration, frequencies=(440.0, 660.0, 880.0)):
    """A short cycle of tones, one per segment."""
    segment = int(SAMPLE_RATE * duration / len(frequencies))
    t = np.arange(segment) / SAMPLE_RATE
    chunks = [0.5 * np.sin(2 * np.pi * f * t) for f in frequencies]
    return np.concatenate(chunks)


def write_wav(path, samples):
    # Convert to 16-bit PCM
    audio_data = (np.clip(samples, -1.0, 1.0) * 32767).astype(np.int16)

    with wave.open(path, "w") as wav_file:
        wav_file.setnchannels(1)  # Mono
        wav_file.setsampwidth(2)  # 16-bit
        wav_file.setframerate(SAMPLE_RATE)
        wav_file.writeframes(audio_data.tobytes())


def main():
    os.makedirs(ASSET_DIR, exist_ok=True)
    samples = np.concatenate([tone(TONE_SECONDS), np.zeros(int(SAMPLE_RATE * SILENCE_SECONDS))])

    for name, scenario in sorted(SCENARIOS.items()):
        path = os.path.join(ASSET_DIR, scenario.default_audio_file)
        if os.path.exists(path):
            print(f"✓ {scenario.default_audio_file} already exists, skipping")
            continue

        write_wav(path, samples)
        info = describe_wav(path)
        print(f"✓ Created {path} for {name} ({info})")


if __name__ == "__main__":
    main()
