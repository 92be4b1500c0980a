"""
Implements the MSB-first bit reader/writer used by the MPEG-4 audio
configuration and ADTS header codecs.
"""

from typing import Optional


class BitStream:
    """
    Sequential bit access over a byte buffer, most significant bit first.
    """

    def __init__(self, stream_bytes: Optional[bytes] = None):
        """
        Initializes the bitstream.

        Args:
            stream_bytes: Bytes to initialize the stream for reading.
                          If None, initializes an empty stream for writing.
        """
        self.buffer: bytearray = (
            bytearray(stream_bytes) if stream_bytes is not None else bytearray()
        )
        self.bit_position: int = 0
        self.byte_position: int = 0

    def _bit_offset(self) -> int:
        return self.byte_position * 8 + self.bit_position

    def _move_to(self, bit_offset: int):
        self.byte_position, self.bit_position = divmod(bit_offset, 8)

    def bits_remaining(self) -> int:
        return len(self.buffer) * 8 - self._bit_offset()

    def write_bits(self, value: int, num_bits: int):
        """
        Writes the low 'num_bits' of 'value' to the bitstream, MSB first.

        The field is copied a byte-aligned chunk at a time; the buffer grows
        with zero bytes as needed.
        """
        if num_bits < 0 or num_bits > 32:
            raise ValueError("Number of bits must be between 0 and 32")
        if num_bits == 0:
            return
        if value < 0 or value >> num_bits:
            raise ValueError(f"Value {value} does not fit in {num_bits} bits")

        offset = self._bit_offset()
        end_byte = (offset + num_bits + 7) // 8
        if end_byte > len(self.buffer):
            self.buffer.extend(bytes(end_byte - len(self.buffer)))

        left = num_bits
        while left:
            index, shift = divmod(offset, 8)
            width = min(8 - shift, left)
            left -= width
            chunk = (value >> left) & ((1 << width) - 1)
            self.buffer[index] |= chunk << (8 - shift - width)
            offset += width
        self._move_to(offset)

    def read_bits(self, num_bits: int) -> int:
        """
        Reads 'num_bits' from the bitstream as an unsigned integer.
        Bits are read MSB first from the stream.
        """
        if num_bits < 0 or num_bits > 32:
            raise ValueError("Number of bits must be between 0 and 32")
        if num_bits == 0:
            return 0
        if self.bits_remaining() < num_bits:
            raise EOFError("Not enough bits in stream to read")

        offset = self._bit_offset()
        value = 0
        left = num_bits
        while left:
            index, shift = divmod(offset, 8)
            width = min(8 - shift, left)
            chunk = (self.buffer[index] >> (8 - shift - width)) & ((1 << width) - 1)
            value = (value << width) | chunk
            left -= width
            offset += width
        self._move_to(offset)
        return value

    def get_bytes(self) -> bytes:
        """Returns the current buffer content as bytes."""
        return bytes(self.buffer)

    def pad_to_byte_boundary(self):
        """Pads with zero bits until the next byte boundary if not already aligned."""
        if self.bit_position != 0:
            bits_to_pad = 8 - self.bit_position
            self.write_bits(0, bits_to_pad)
