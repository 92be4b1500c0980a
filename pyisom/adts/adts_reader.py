"""
Handles reading of raw ADTS streams (.aac files), splitting them into frames
using the frame length carried by each header.
"""

from typing import BinaryIO, Iterator, Optional, Tuple, Type
from types import TracebackType

from ..common.constants import ADTS_HEADER_SIZE, ADTS_HEADER_SIZE_CRC, ADTS_SYNC_WORD
from ..core.adts import AdtsHeader, read_adts_header
from ..core.audio_config import MPEG4AudioConfig


class AdtsReaderError(Exception):
    """Custom exception for ADTS reader errors."""

    pass


class AdtsReader:
    """
    Iterates the frames of an ADTS stream and validates their framing.
    """

    def __init__(self, filepath_or_stream: str | BinaryIO):
        """
        Initializes the ADTS reader.

        Args:
            filepath_or_stream: Path to the ADTS file or an already open binary stream.
        """
        if isinstance(filepath_or_stream, str):
            try:
                self.stream: BinaryIO = open(filepath_or_stream, "rb")
            except IOError as e:
                raise AdtsReaderError(
                    f"Failed to open ADTS file: {filepath_or_stream}"
                ) from e
            self._close_on_exit = True
        else:
            self.stream: BinaryIO = filepath_or_stream
            self._close_on_exit = False

        self._start_offset: int = self.stream.tell()

    def frames(self) -> Iterator[Tuple[AdtsHeader, bytes]]:
        """
        Yields (header, frame_bytes) for each frame, frame_bytes including
        the header itself.
        """
        self.stream.seek(self._start_offset)
        frame_index = 0

        while True:
            offset = self.stream.tell()
            header_bytes = self.stream.read(ADTS_HEADER_SIZE)
            if not header_bytes:
                return
            if len(header_bytes) != ADTS_HEADER_SIZE:
                raise AdtsReaderError(
                    f"Truncated ADTS header at offset {offset}: "
                    f"got {len(header_bytes)} of {ADTS_HEADER_SIZE} bytes"
                )

            sync_word = (header_bytes[0] << 4) | (header_bytes[1] >> 4)
            if sync_word != ADTS_SYNC_WORD:
                raise AdtsReaderError(
                    f"Bad ADTS sync word 0x{sync_word:03x} at offset {offset}"
                )

            try:
                header = read_adts_header(header_bytes)
            except EOFError as e:
                raise AdtsReaderError(f"Failed to parse ADTS header at offset {offset}") from e

            # protection_absent == 0: a 16-bit CRC follows the fixed header
            header_size = ADTS_HEADER_SIZE if header_bytes[1] & 0x01 else ADTS_HEADER_SIZE_CRC
            if header.frame_length < header_size:
                raise AdtsReaderError(
                    f"Frame {frame_index} declares length {header.frame_length}, "
                    f"shorter than the {header_size}-byte header"
                )

            body = self.stream.read(header.frame_length - ADTS_HEADER_SIZE)
            if len(body) != header.frame_length - ADTS_HEADER_SIZE:
                raise AdtsReaderError(
                    f"Failed to read full ADTS frame {frame_index}. Expected "
                    f"{header.frame_length} bytes, got {ADTS_HEADER_SIZE + len(body)}. "
                    f"File might be truncated."
                )

            yield header, header_bytes + body
            frame_index += 1

    def get_audio_config(self) -> MPEG4AudioConfig:
        """Returns the completed configuration of the first frame."""
        for header, _ in self.frames():
            return header.audio_config()
        raise AdtsReaderError("ADTS stream contains no frames.")

    def close(self):
        """Closes the stream if it was opened by this reader."""
        if self._close_on_exit and self.stream:
            if not self.stream.closed:
                self.stream.close()

    def __enter__(self):
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> Optional[bool]:
        self.close()
        return False  # Do not suppress exceptions
