"""Helpers for turning raw synthesizer output into :class:`AudioSegment` values."""

from __future__ import annotations

import base64
import binascii

from pydub import AudioSegment

from easy_korean.errors import SpeechError

PCM_SAMPLE_RATE = 24000
PCM_CHANNELS = 1
PCM_SAMPLE_WIDTH = 2


def decode_base64(payload: str) -> bytes:
    """Decode a base64 audio payload, raising :class:`SpeechError` if invalid."""

    try:
        return base64.b64decode(payload, validate=False)
    except (binascii.Error, ValueError) as exc:
        raise SpeechError("Audio payload is not valid base64") from exc


def decode_pcm16(
    data: bytes,
    *,
    sample_rate: int = PCM_SAMPLE_RATE,
    channels: int = PCM_CHANNELS,
) -> AudioSegment:
    """Wrap raw 16-bit little-endian PCM in an :class:`AudioSegment`.

    A trailing byte that does not complete a sample is dropped.
    """

    if not data:
        raise SpeechError("Audio data is empty")

    frame_width = PCM_SAMPLE_WIDTH * channels
    usable = len(data) - (len(data) % frame_width)
    if usable <= 0:
        raise SpeechError("Audio buffer contains no frames")

    return AudioSegment(
        data=bytes(data[:usable]),
        sample_width=PCM_SAMPLE_WIDTH,
        frame_rate=sample_rate,
        channels=channels,
    )


__all__ = [
    "PCM_CHANNELS",
    "PCM_SAMPLE_RATE",
    "PCM_SAMPLE_WIDTH",
    "decode_base64",
    "decode_pcm16",
]
