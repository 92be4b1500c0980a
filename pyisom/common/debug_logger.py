"""
Debug logging for the pyisom codecs.
Writes one line per codec stage with source location and value statistics,
so descriptor and bitfield traffic can be compared against other muxers.
"""

import time
import inspect
import numpy as np
from typing import List, Union, Any
import os


class IsomDebugLogger:
    """
    Debug logger for descriptor and bitfield codec stages.
    Logs with full metadata including source location, data statistics, and context.
    """

    def __init__(self, log_file: str = "pyisom_debug.log", enabled: bool = True):
        self.log_file = log_file
        self.enabled = enabled
        if enabled:
            with open(log_file, 'w') as f:
                f.write(f"# pyisom Debug Log - {time.strftime('%Y-%m-%d %H:%M:%S')}\n")
                f.write("# Format: [TIMESTAMP][PYISOM][FILE:LINE][FUNC] STAGE: data_type=values |META: ... |SRC: ...\n")
                f.write("#\n")

    @staticmethod
    def _caller():
        # First frame outside this module
        frame_info = inspect.currentframe()
        while frame_info.f_back is not None and frame_info.f_code.co_filename == __file__:
            frame_info = frame_info.f_back
        return (
            os.path.basename(frame_info.f_code.co_filename),
            frame_info.f_lineno,
            frame_info.f_code.co_name,
        )

    @staticmethod
    def _timestamp() -> str:
        return time.strftime('%Y-%m-%dT%H:%M:%S.') + f"{int(time.time() * 1000000) % 1000000:06d}"

    @staticmethod
    def _context_str(context) -> str:
        return " ".join(f"{key}={value}" for key, value in context.items())

    def _write(self, log_entry: str):
        with open(self.log_file, 'a') as f:
            f.write(log_entry)

    def log_stage(self, stage: str, data_type: str, values: Union[List, np.ndarray, int],
                  **context) -> None:
        """
        Log a codec stage with metadata.

        Args:
            stage: Stage name (e.g., 'AUDIO_CONFIG_READ', 'ADTS_HEADER')
            data_type: Type of data being logged (e.g., 'fields')
            values: The field values
            **context: Additional context (tag, object_type, ...)
        """
        if not self.enabled:
            return

        filename, line_no, func_name = self._caller()

        if isinstance(values, (int, float)):
            values_array = np.array([values], dtype=np.int64)
        else:
            values_array = np.asarray(values, dtype=np.int64)
        size = int(values_array.size)

        if size > 0:
            min_val = int(np.min(values_array))
            max_val = int(np.max(values_array))
            sum_val = int(np.sum(values_array))
            mean_val = float(np.mean(values_array))
            nonzero_count = int(np.count_nonzero(values_array))
        else:
            min_val = max_val = sum_val = 0
            mean_val = 0.0
            nonzero_count = 0

        if size <= 10:
            values_str = f"[{','.join(str(v) for v in values_array)}]"
        else:
            first_5 = ','.join(str(v) for v in values_array[:5])
            last_5 = ','.join(str(v) for v in values_array[-5:])
            values_str = f"[{first_5}...{last_5}]"

        self._write(
            f"[{self._timestamp()}][PYISOM][{filename}:{line_no}][{func_name}] {stage}: "
            f"{data_type}={values_str} "
            f"|META: size={size} range=[{min_val},{max_val}] "
            f"sum={sum_val} mean={mean_val:.3f} nonzero={nonzero_count} "
            f"|SRC: {self._context_str(context)}\n"
        )

    def log_bitstream(self, stage: str, bitstream_bytes: bytes, **context) -> None:
        """
        Special logging for raw descriptor or config bytes in hex format.
        """
        if not self.enabled:
            return

        filename, line_no, func_name = self._caller()
        byte_values = np.frombuffer(bytes(bitstream_bytes), dtype=np.uint8)

        self._write(
            f"[{self._timestamp()}][PYISOM][{filename}:{line_no}][{func_name}] {stage}: "
            f"hex={bytes(bitstream_bytes).hex()} "
            f"|META: size={byte_values.size} bytes "
            f"nonzero={int(np.count_nonzero(byte_values))} "
            f"|SRC: {self._context_str(context)}\n"
        )

    def enable(self):
        """Enable logging."""
        self.enabled = True

    def disable(self):
        """Disable logging."""
        self.enabled = False


# Global logger instance, off until enable_debug_logging() is called
debug_logger = IsomDebugLogger(enabled=False)


def log_debug(stage: str, data_type: str, values: Any, **kwargs) -> None:
    """
    Convenience function for logging with global logger instance.

    Usage:
        log_debug("ADTS_HEADER", "fields", [2, 4, 2, 15], frame_length=15)
    """
    debug_logger.log_stage(stage, data_type, values, **kwargs)


def log_bitstream(stage: str, bitstream_bytes: bytes, **kwargs) -> None:
    """
    Convenience function for bitstream logging.
    """
    debug_logger.log_bitstream(stage, bitstream_bytes, **kwargs)


def enable_debug_logging(log_file: str = "pyisom_debug.log") -> None:
    """
    Enable debug logging with specified log file.
    """
    global debug_logger
    debug_logger = IsomDebugLogger(log_file, enabled=True)


def disable_debug_logging() -> None:
    """
    Disable debug logging.
    """
    debug_logger.disable()
