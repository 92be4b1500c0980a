"""
Reads the configuration fields of an ADTS frame header.

Structure (7 or 9 bytes, without or with CRC):
AAAAAAAA AAAABCCD EEFFFFGH HHIJKLMM MMMMMMMM MMMOOOOO OOOOOOPP (QQQQQQQQ QQQQQQQQ)

The reader is deliberately permissive: sync word and reserved values are
returned as read, and only a short buffer is an error.
"""

from typing import Iterator

from .audio_config import MPEG4AudioConfig
from .bitstream import BitStream
from ..common.debug_logger import log_debug


class AdtsHeader:
    """The subset of ADTS header fields that describe stream configuration."""

    def __init__(
        self,
        object_type: int = 0,
        sample_rate_index: int = 0,
        chan_config: int = 0,
        frame_length: int = 0,
    ):
        self.object_type = object_type
        self.sample_rate_index = sample_rate_index
        self.chan_config = chan_config
        self.frame_length = frame_length

    def audio_config(self) -> MPEG4AudioConfig:
        """Returns the equivalent completed MPEG4AudioConfig."""
        return MPEG4AudioConfig(
            object_type=self.object_type,
            sample_rate_index=self.sample_rate_index,
            channel_config=self.chan_config,
        ).complete()

    def __iter__(self) -> Iterator[int]:
        return iter(
            (self.object_type, self.sample_rate_index, self.chan_config, self.frame_length)
        )

    def __eq__(self, other):
        if not isinstance(other, AdtsHeader):
            return NotImplemented
        return tuple(self) == tuple(other)

    def __repr__(self):
        return (
            f"AdtsHeader(object_type={self.object_type}, "
            f"sample_rate_index={self.sample_rate_index}, "
            f"chan_config={self.chan_config}, frame_length={self.frame_length})"
        )


def read_adts_header(data: bytes) -> AdtsHeader:
    """
    Extracts object type, sampling index, channel config and frame length
    from the first 56 bits of 'data'. A trailing CRC is not read.

    Raises:
        EOFError: If fewer than 7 bytes are supplied.
    """
    stream = BitStream(bytes(data))
    header = AdtsHeader()

    stream.read_bits(12)  # A: syncword 0xFFF
    stream.read_bits(1)  # B: MPEG version
    stream.read_bits(2)  # C: layer
    stream.read_bits(1)  # D: protection absent

    # E: profile, the MPEG-4 audio object type minus 1
    header.object_type = stream.read_bits(2) + 1
    # F: sampling frequency index (15 is forbidden)
    header.sample_rate_index = stream.read_bits(4)
    stream.read_bits(1)  # G: private bit
    # H: channel configuration (0 means an inband PCE)
    header.chan_config = stream.read_bits(3)
    stream.read_bits(1)  # I: originality
    stream.read_bits(1)  # J: home
    stream.read_bits(1)  # K: copyrighted id bit
    stream.read_bits(1)  # L: copyright id start

    # M: frame length, including the 7 or 9 header bytes
    header.frame_length = stream.read_bits(13)
    stream.read_bits(11)  # O: buffer fullness
    stream.read_bits(2)  # P: number of raw data blocks minus 1

    log_debug("ADTS_HEADER", "fields", list(header))
    return header
