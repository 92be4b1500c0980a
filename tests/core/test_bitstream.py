"""
Tests for the bitstream module.
"""

import pytest
from pyisom.core.bitstream import BitStream


class TestBitStream:
    """Test cases for BitStream class."""

    def test_init_empty(self):
        """Test initialization with no bytes."""
        bs = BitStream()
        assert bs.buffer == bytearray()
        assert bs.byte_position == 0
        assert bs.bit_position == 0

    def test_init_with_bytes(self):
        """Test initialization with byte data."""
        test_bytes = b'\x00\xFF\x55'
        bs = BitStream(test_bytes)
        assert bs.buffer == bytearray(test_bytes)
        assert bs.bits_remaining() == 24

    def test_write_bits_invalid_num_bits_negative(self):
        bs = BitStream()
        with pytest.raises(ValueError, match="Number of bits must be between 0 and 32"):
            bs.write_bits(42, -1)

    def test_write_bits_invalid_num_bits_too_large(self):
        bs = BitStream()
        with pytest.raises(ValueError, match="Number of bits must be between 0 and 32"):
            bs.write_bits(42, 33)

    def test_write_bits_value_too_wide(self):
        """Test that a value wider than the field is rejected rather than truncated."""
        bs = BitStream()
        with pytest.raises(ValueError, match="does not fit in 5 bits"):
            bs.write_bits(32, 5)

    def test_write_bits_zero_bits(self):
        bs = BitStream()
        bs.write_bits(0, 0)
        assert bs.buffer == bytearray()

    def test_read_bits_invalid_num_bits_too_large(self):
        bs = BitStream(b'\xFF' * 8)
        with pytest.raises(ValueError, match="Number of bits must be between 0 and 32"):
            bs.read_bits(33)

    def test_read_bits_zero_bits(self):
        bs = BitStream(b'\xFF')
        assert bs.read_bits(0) == 0

    def test_read_bits_eof(self):
        """Test reading when not enough bits available."""
        bs = BitStream(b'\xFF')
        with pytest.raises(EOFError, match="Not enough bits in stream to read"):
            bs.read_bits(16)

    def test_read_bits_msb_first(self):
        bs = BitStream(b'\xA5\x0F')
        assert bs.read_bits(1) == 1
        assert bs.read_bits(3) == 0b010
        assert bs.read_bits(8) == 0x50
        assert bs.read_bits(4) == 0xF
        assert bs.bits_remaining() == 0

    def test_read_32_bits(self):
        bs = BitStream(b'\xDE\xAD\xBE\xEF')
        assert bs.read_bits(32) == 0xDEADBEEF

    def test_write_read_round_trip_multiple_bits(self):
        """Test writing and reading multiple bits."""
        bs = BitStream()
        bs.write_bits(0b1010, 4)
        bs.write_bits(0b110011, 6)
        bs.write_bits(0xABCDEF, 24)

        reader = BitStream(bs.get_bytes())
        assert reader.read_bits(4) == 0b1010
        assert reader.read_bits(6) == 0b110011
        assert reader.read_bits(24) == 0xABCDEF

    def test_write_bits_cross_byte_boundary(self):
        bs = BitStream()
        bs.write_bits(0b101010101010, 12)
        assert bs.get_bytes() == b'\xAA\xA0'

    def test_write_unaligned_field_spanning_three_bytes(self):
        """Test a 13-bit field written at bit offset 5 touches three bytes."""
        bs = BitStream()
        bs.write_bits(0b11111, 5)
        bs.write_bits(0x1ABC, 13)
        bs.write_bits(0b1, 1)
        assert bs.get_bytes() == b'\xFE\xAF\x20'
        assert (bs.byte_position, bs.bit_position) == (2, 3)

    def test_read_unaligned_field_spanning_three_bytes(self):
        bs = BitStream(b'\xFE\xAF\x20')
        assert bs.read_bits(5) == 0b11111
        assert bs.read_bits(13) == 0x1ABC
        assert bs.read_bits(1) == 1
        assert bs.bits_remaining() == 5

    def test_get_bytes_empty(self):
        bs = BitStream()
        assert bs.get_bytes() == b''

    def test_pad_to_byte_boundary(self):
        """Test padding to byte boundary."""
        bs = BitStream()
        bs.write_bits(0b101, 3)
        bs.pad_to_byte_boundary()
        assert bs.bit_position == 0
        assert bs.byte_position == 1
        assert bs.get_bytes() == b'\xA0'

    def test_pad_to_byte_boundary_already_aligned(self):
        bs = BitStream()
        bs.write_bits(0xFF, 8)
        bs.pad_to_byte_boundary()
        assert bs.get_bytes() == b'\xFF'
