"""
Big-endian byte-level primitives over binary streams, used by the
descriptor codec for its fixed-width fields and payload copies.
"""

from typing import BinaryIO

VALID_UINT_WIDTHS = (8, 16, 24, 32)


def _check_width(num_bits: int):
    if num_bits not in VALID_UINT_WIDTHS:
        raise ValueError(f"Unsupported integer width: {num_bits} bits")


def read_exact(stream: BinaryIO, num_bytes: int) -> bytes:
    """
    Reads exactly 'num_bytes' from the stream.

    Raises:
        EOFError: If the stream ends first.
    """
    data = stream.read(num_bytes)
    if len(data) != num_bytes:
        raise EOFError(f"Expected {num_bytes} bytes, got {len(data)}")
    return data


def skip_bytes(stream: BinaryIO, num_bytes: int):
    """Consumes and discards 'num_bytes', failing on a short stream."""
    read_exact(stream, num_bytes)


def read_uint_be(stream: BinaryIO, num_bits: int) -> int:
    """Reads an unsigned big-endian integer of 8, 16, 24 or 32 bits."""
    _check_width(num_bits)
    return int.from_bytes(read_exact(stream, num_bits // 8), "big")


def write_uint_be(stream: BinaryIO, value: int, num_bits: int):
    """Writes an unsigned big-endian integer of 8, 16, 24 or 32 bits."""
    _check_width(num_bits)
    if value < 0 or value >> num_bits:
        raise ValueError(f"Value {value} does not fit in {num_bits} bits")
    stream.write(value.to_bytes(num_bits // 8, "big"))
