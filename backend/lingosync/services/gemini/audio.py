"""
Audio helpers for Gemini speech output.

Gemini TTS returns 16-bit signed little-endian PCM. Depending on the
transport the payload arrives base64-encoded (REST JSON) or as raw bytes,
optionally wrapped in a WAV container (LINEAR16 from Cloud TTS).
"""

import base64
import binascii
import io
import logging
import wave
from typing import Union

import numpy as np

from lingosync.config.constants import (
    PCM16_SCALE,
    TTS_BYTES_PER_SAMPLE,
    TTS_CHANNELS,
    TTS_SAMPLE_RATE_HZ,
)

logger = logging.getLogger(__name__)


class AudioDecodeError(ValueError):
    """Raised when a payload cannot be turned into PCM samples."""
    pass


def decode_audio_payload(payload: Union[str, bytes]) -> bytes:
    """
    Return raw PCM bytes from a speech payload.

    Strings are treated as base64; a RIFF/WAV header is stripped.
    """
    if isinstance(payload, str):
        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise AudioDecodeError(f"Invalid base64 audio payload: {e}") from e
    else:
        data = bytes(payload)

    if data[:4] == b"RIFF":
        try:
            with wave.open(io.BytesIO(data), "rb") as wav:
                data = wav.readframes(wav.getnframes())
        except wave.Error as e:
            raise AudioDecodeError(f"Invalid WAV container: {e}") from e

    if not data:
        raise AudioDecodeError("Empty audio payload")
    return data


def pcm16_to_float32(pcm: bytes, channels: int = TTS_CHANNELS) -> np.ndarray:
    """
    Convert interleaved PCM16 bytes to float32 amplitudes in [-1.0, 1.0].

    Returns an array shaped (frames, channels). A trailing partial
    sample or frame is dropped.
    """
    frame_bytes = TTS_BYTES_PER_SAMPLE * channels
    usable = len(pcm) - (len(pcm) % frame_bytes)
    samples = np.frombuffer(pcm[:usable], dtype="<i2")
    return (samples.astype(np.float32) / PCM16_SCALE).reshape(-1, channels)


def play_samples(
    samples: np.ndarray,
    sample_rate: int = TTS_SAMPLE_RATE_HZ,
    channels: int = TTS_CHANNELS,
) -> None:
    """Play float32 samples through the default output device (blocking)."""
    import pyaudio

    p = pyaudio.PyAudio()
    stream = None
    try:
        stream = p.open(
            format=pyaudio.paFloat32,
            channels=channels,
            rate=sample_rate,
            output=True,
        )
        stream.write(np.ascontiguousarray(samples, dtype=np.float32).tobytes())
        stream.stop_stream()
    finally:
        if stream is not None:
            stream.close()
        p.terminate()
    logger.debug(f"[Audio] Played {len(samples) / sample_rate:.2f}s of audio")
