"""
Implements the ISO/IEC 14496-1 descriptor codec used by MP4 'esds' boxes:
generic tag-length-value records with a base-128 size field, and the fixed
ES_Descriptor -> DecoderConfigDescriptor -> DecoderSpecificInfo nesting that
carries an AAC MPEG4AudioConfig.
"""

import io
from typing import BinaryIO, Optional, Tuple, Union

from .audio_config import MPEG4AudioConfig, read_mpeg4_audio_config
from .bytestream import read_exact, read_uint_be, skip_bytes, write_uint_be
from ..common import constants
from ..common.debug_logger import log_bitstream


class DescriptorError(Exception):
    """Base exception for malformed descriptor structures."""

    pass


class DescriptorTagNotFoundError(DescriptorError):
    """Raised when a descriptor does not carry the tag required at its level."""

    def __init__(self, expected_tag: int, found_tag: Optional[int] = None):
        self.expected_tag = expected_tag
        self.found_tag = found_tag
        name = constants.DESCRIPTOR_TAG_NAMES.get(expected_tag, f"tag {expected_tag}")
        message = f"{name} not found"
        if found_tag is not None:
            message += f" (got tag {found_tag})"
        super().__init__(message)


def _as_stream(source: Union[bytes, bytearray, BinaryIO]) -> BinaryIO:
    if isinstance(source, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(source))
    return source


def encode_desc_length(length: int) -> bytes:
    """
    Encodes a descriptor length as minimal big-endian base-128, with the
    continuation bit set on every byte but the last. A length of 0 encodes
    to no bytes at all.
    """
    if length < 0 or length > constants.MAX_DESC_LENGTH:
        raise ValueError(
            f"Descriptor length {length} does not fit in "
            f"{constants.MAX_DESC_LENGTH_BYTES} size bytes"
        )
    groups = []
    while length > 0:
        groups.append(length & 0x7F)
        length >>= 7
    groups.reverse()
    return bytes(
        [group | 0x80 for group in groups[:-1]] + groups[-1:]
    )


def read_desc(stream: BinaryIO) -> Tuple[int, bytes]:
    """
    Reads one descriptor.

    Returns:
        (tag, data) where data holds exactly the declared number of bytes.

    Raises:
        EOFError: If the stream ends inside the tag, size or payload.
    """
    tag = read_uint_be(stream, 8)
    length = 0
    for _ in range(constants.MAX_DESC_LENGTH_BYTES):
        c = read_uint_be(stream, 8)
        length = (length << 7) | (c & 0x7F)
        if c & 0x80 == 0:
            break
    data = read_exact(stream, length)
    log_bitstream("DESC_READ", data, tag=tag, length=length)
    return tag, data


def write_desc(stream: BinaryIO, tag: int, data: bytes):
    """Writes tag, size bytes and payload. Nothing is written if the size does not fit."""
    length_bytes = encode_desc_length(len(data))
    write_uint_be(stream, tag, 8)
    stream.write(length_bytes)
    stream.write(data)
    log_bitstream("DESC_WRITE", data, tag=tag, length=len(data))


def _read_tagged_desc(stream: BinaryIO, expected_tag: int) -> bytes:
    tag, data = read_desc(stream)
    if tag != expected_tag:
        raise DescriptorTagNotFoundError(expected_tag, tag)
    return data


def read_es_desc(stream: BinaryIO):
    """Consumes the ES_Descriptor fields that precede its sub-descriptors."""
    read_uint_be(stream, 16)  # ES_ID
    flags = read_uint_be(stream, 8)
    if flags & constants.ES_FLAG_STREAM_DEPENDENCE:
        read_uint_be(stream, 16)  # dependsOn_ES_ID
    if flags & constants.ES_FLAG_URL:
        url_length = read_uint_be(stream, 8)
        skip_bytes(stream, url_length)
    if flags & constants.ES_FLAG_OCR_STREAM:
        read_uint_be(stream, 16)  # OCR_ES_Id


def write_es_desc(stream: BinaryIO):
    write_uint_be(stream, 0, 16)  # ES_ID
    write_uint_be(stream, 0, 8)  # flags


def read_dec_config_desc(stream: BinaryIO) -> bytes:
    """
    Consumes the DecoderConfigDescriptor fields and returns the payload of
    the DecoderSpecificInfo that follows them.
    """
    read_uint_be(stream, 8)  # objectTypeIndication
    read_uint_be(stream, 8)  # streamType
    read_uint_be(stream, 24)  # bufferSizeDB
    read_uint_be(stream, 32)  # maxBitrate
    read_uint_be(stream, 32)  # avgBitrate
    return _read_tagged_desc(stream, constants.MP4_DEC_SPECIFIC_DESCR_TAG)


def write_dec_config_desc(
    stream: BinaryIO, object_id: int, stream_type: int, dec_config: bytes
):
    write_uint_be(stream, object_id, 8)
    write_uint_be(stream, stream_type, 8)
    write_uint_be(stream, 0, 24)  # bufferSizeDB
    write_uint_be(stream, 0, 32)  # maxBitrate
    write_uint_be(stream, 0, 32)  # avgBitrate
    write_desc(stream, constants.MP4_DEC_SPECIFIC_DESCR_TAG, dec_config)


def read_elem_stream_desc(source: Union[bytes, BinaryIO]) -> bytes:
    """
    Unwraps ES_Descriptor, DecoderConfigDescriptor and DecoderSpecificInfo
    in turn and returns the decoder specific payload.

    Raises:
        DescriptorTagNotFoundError: If a level carries the wrong tag.
        EOFError: If any level is truncated.
    """
    stream = _as_stream(source)

    es_data = _read_tagged_desc(stream, constants.MP4_ES_DESCR_TAG)
    es_stream = io.BytesIO(es_data)
    read_es_desc(es_stream)

    dec_config_data = _read_tagged_desc(es_stream, constants.MP4_DEC_CONFIG_DESCR_TAG)
    return read_dec_config_desc(io.BytesIO(dec_config_data))


def read_elem_stream_desc_aac(source: Union[bytes, BinaryIO]) -> MPEG4AudioConfig:
    return read_mpeg4_audio_config(read_elem_stream_desc(source))


def write_elem_stream_desc_aac(stream: BinaryIO, config: MPEG4AudioConfig):
    """
    Writes MP4ESDescrTag(ESDesc MP4DecConfigDescrTag(objectId streamType
    bufSize maxBitrate avgBitrate MP4DecSpecificDescrTag(config))).
    """
    dec_config = config.pack()

    buf = io.BytesIO()
    write_dec_config_desc(
        buf,
        constants.OBJECT_TYPE_INDICATION_AAC,
        constants.STREAM_TYPE_AUDIO,
        dec_config,
    )
    data = buf.getvalue()

    buf = io.BytesIO()
    write_es_desc(buf)
    write_desc(buf, constants.MP4_DEC_CONFIG_DESCR_TAG, data)
    data = buf.getvalue()

    write_desc(stream, constants.MP4_ES_DESCR_TAG, data)


def build_elem_stream_desc_aac(config: MPEG4AudioConfig) -> bytes:
    """Returns the complete ES_Descriptor bytes for an AAC config."""
    buf = io.BytesIO()
    write_elem_stream_desc_aac(buf, config)
    return buf.getvalue()
