"""
Implements the MPEG4AudioConfig bitfield codec (AudioSpecificConfig head,
ISO/IEC 14496-3 1.6.2.1): audio object type, sampling frequency index and
channel configuration, including the escape extensions for the first two.
"""

from typing import Union

from .bitstream import BitStream
from ..common import constants
from ..common.debug_logger import log_debug, log_bitstream
from ..tables.audio_tables import (
    channel_count_for_config,
    config_for_channel_count,
    index_for_sample_rate,
    sample_rate_for_index,
)


class MPEG4AudioConfig:
    """
    Decoded form of an AAC configuration.

    sample_rate_index and channel_config are what goes on the wire.
    sample_rate and channel_count are projections of them and only agree
    after complete() or resolve().
    """

    def __init__(
        self,
        object_type: int = 0,
        sample_rate_index: int = 0,
        channel_config: int = 0,
        sample_rate: int = 0,
        channel_count: int = 0,
    ):
        self.object_type: int = object_type
        self.sample_rate_index: int = sample_rate_index
        self.channel_config: int = channel_config
        self.sample_rate: int = sample_rate
        self.channel_count: int = channel_count

    @property
    def has_explicit_sample_rate(self) -> bool:
        """True when sample_rate_index carries a rate in Hz instead of a table index."""
        return self.sample_rate_index >= constants.SAMPLE_RATE_INDEX_ESCAPE

    def complete(self) -> "MPEG4AudioConfig":
        """
        Returns a copy with sample_rate and channel_count filled in from the
        tables. Fields whose index is outside its table keep their value.
        """
        config = self.copy()
        sample_rate = sample_rate_for_index(config.sample_rate_index)
        if sample_rate is not None:
            config.sample_rate = sample_rate
        channel_count = channel_count_for_config(config.channel_config)
        if channel_count is not None:
            config.channel_count = channel_count
        return config

    def resolve(self) -> "MPEG4AudioConfig":
        """
        Returns a copy with a zero sample_rate_index or channel_config looked
        up from sample_rate / channel_count, as done before encoding.

        A zero index is treated as unset, so an intended index 0 (96000 Hz)
        or channel config 0 is replaced whenever the projection matches a
        different table entry. Set the index explicitly and leave the
        projection at 0 to keep it.
        """
        config = self.copy()
        if config.sample_rate_index == 0:
            index = index_for_sample_rate(config.sample_rate)
            if index is not None:
                config.sample_rate_index = index
        if config.channel_config == 0:
            channel_config = config_for_channel_count(config.channel_count)
            if channel_config is not None:
                config.channel_config = channel_config
        return config

    def copy(self) -> "MPEG4AudioConfig":
        return MPEG4AudioConfig(
            object_type=self.object_type,
            sample_rate_index=self.sample_rate_index,
            channel_config=self.channel_config,
            sample_rate=self.sample_rate,
            channel_count=self.channel_count,
        )

    def pack(self) -> bytes:
        """Encodes the config into its byte-aligned bitstream form."""
        stream = BitStream()
        write_mpeg4_audio_config(stream, self)
        return stream.get_bytes()

    @classmethod
    def unpack(cls, config_bytes: bytes) -> "MPEG4AudioConfig":
        return read_mpeg4_audio_config(config_bytes)

    def __eq__(self, other):
        if not isinstance(other, MPEG4AudioConfig):
            return NotImplemented
        return (
            self.object_type == other.object_type
            and self.sample_rate_index == other.sample_rate_index
            and self.channel_config == other.channel_config
            and self.sample_rate == other.sample_rate
            and self.channel_count == other.channel_count
        )

    def __repr__(self):
        return (
            f"MPEG4AudioConfig(object_type={self.object_type}, "
            f"sample_rate_index={self.sample_rate_index}, "
            f"channel_config={self.channel_config}, "
            f"sample_rate={self.sample_rate}, "
            f"channel_count={self.channel_count})"
        )


def read_object_type(stream: BitStream) -> int:
    object_type = stream.read_bits(constants.BITS_PER_OBJECT_TYPE)
    if object_type == constants.AOT_ESCAPE:
        object_type = 32 + stream.read_bits(constants.BITS_PER_OBJECT_TYPE_EXT)
    return object_type


def write_object_type(stream: BitStream, object_type: int):
    if object_type > constants.MAX_OBJECT_TYPE:
        raise ValueError(
            f"Object type {object_type} exceeds escape range "
            f"(max {constants.MAX_OBJECT_TYPE})"
        )
    if object_type >= 32:
        stream.write_bits(constants.AOT_ESCAPE, constants.BITS_PER_OBJECT_TYPE)
        stream.write_bits(object_type - 32, constants.BITS_PER_OBJECT_TYPE_EXT)
    else:
        stream.write_bits(object_type, constants.BITS_PER_OBJECT_TYPE)


def read_sample_rate_index(stream: BitStream) -> int:
    """
    Reads the 4-bit sampling frequency index. The escape value 0xF is
    followed by a 24-bit rate, which is returned in its place.
    """
    index = stream.read_bits(constants.BITS_PER_SAMPLE_RATE_INDEX)
    if index == constants.SAMPLE_RATE_INDEX_ESCAPE:
        index = stream.read_bits(constants.BITS_PER_EXPLICIT_SAMPLE_RATE)
    return index


def write_sample_rate_index(stream: BitStream, index: int):
    if index >= constants.SAMPLE_RATE_INDEX_ESCAPE:
        stream.write_bits(
            constants.SAMPLE_RATE_INDEX_ESCAPE, constants.BITS_PER_SAMPLE_RATE_INDEX
        )
        stream.write_bits(index, constants.BITS_PER_EXPLICIT_SAMPLE_RATE)
    else:
        stream.write_bits(index, constants.BITS_PER_SAMPLE_RATE_INDEX)


def read_mpeg4_audio_config(source: Union[bytes, bytearray, BitStream]) -> MPEG4AudioConfig:
    """
    Parses an MPEG4AudioConfig from raw bytes or a positioned BitStream.

    Raises:
        EOFError: If the input ends before the channel configuration.
    """
    stream = source if isinstance(source, BitStream) else BitStream(bytes(source))

    config = MPEG4AudioConfig()
    config.object_type = read_object_type(stream)
    config.sample_rate_index = read_sample_rate_index(stream)
    config.channel_config = stream.read_bits(constants.BITS_PER_CHANNEL_CONFIG)

    log_debug(
        "AUDIO_CONFIG_READ", "fields",
        [config.object_type, config.sample_rate_index, config.channel_config],
    )
    return config


def write_mpeg4_audio_config(stream: BitStream, config: MPEG4AudioConfig):
    """
    Writes the config and pads the stream to a byte boundary. A zero
    sample_rate_index or channel_config is first resolved from the
    sample_rate / channel_count projections.
    """
    config = config.resolve()

    write_object_type(stream, config.object_type)
    write_sample_rate_index(stream, config.sample_rate_index)
    stream.write_bits(config.channel_config, constants.BITS_PER_CHANNEL_CONFIG)
    stream.pad_to_byte_boundary()

    log_debug(
        "AUDIO_CONFIG_WRITE", "fields",
        [config.object_type, config.sample_rate_index, config.channel_config],
    )
    log_bitstream("AUDIO_CONFIG_BYTES", stream.get_bytes())
