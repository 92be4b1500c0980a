"""
Fixed MPEG-4 audio lookup tables (ISO/IEC 14496-3, 1.6.3.4 and 1.6.3.5)
and bounds-checked lookups in both directions.
"""

from typing import Optional, Tuple

SAMPLE_RATE_TABLE: Tuple[int, ...] = (
    96000, 88200, 64000, 48000, 44100, 32000,
    24000, 22050, 16000, 12000, 11025, 8000, 7350,
)

CHANNEL_CONFIG_TABLE: Tuple[int, ...] = (0, 1, 2, 3, 4, 5, 6, 8)


def sample_rate_for_index(index: int) -> Optional[int]:
    """
    Looks up the sample rate in Hz for a sampling frequency index.

    Returns:
        The rate, or None when the index is outside the table (including
        the explicit-rate escape).
    """
    if 0 <= index < len(SAMPLE_RATE_TABLE):
        return SAMPLE_RATE_TABLE[index]
    return None


def index_for_sample_rate(sample_rate: int) -> Optional[int]:
    """Returns the table position holding exactly `sample_rate`, or None."""
    for i, rate in enumerate(SAMPLE_RATE_TABLE):
        if rate == sample_rate:
            return i
    return None


def channel_count_for_config(channel_config: int) -> Optional[int]:
    if 0 <= channel_config < len(CHANNEL_CONFIG_TABLE):
        return CHANNEL_CONFIG_TABLE[channel_config]
    return None


def config_for_channel_count(channel_count: int) -> Optional[int]:
    for i, count in enumerate(CHANNEL_CONFIG_TABLE):
        if count == channel_count:
            return i
    return None
