import argparse
import os
import sys

from pyisom.adts.adts_reader import AdtsReader, AdtsReaderError
from pyisom.core.audio_config import MPEG4AudioConfig
from pyisom.core.descriptor import (
    DescriptorError,
    build_elem_stream_desc_aac,
    read_elem_stream_desc_aac,
)
from pyisom.common.debug_logger import enable_debug_logging

DEFAULT_SAMPLE_RATE = 44100
DEFAULT_CHANNELS = 2


def describe_config(config: MPEG4AudioConfig) -> str:
    config = config.complete()
    if config.has_explicit_sample_rate:
        rate_str = f"explicit {config.sample_rate_index} Hz"
    else:
        rate_str = f"index {config.sample_rate_index} ({config.sample_rate} Hz)"
    return (
        f"Object type: {config.object_type}, Sample rate: {rate_str}, "
        f"Channel config: {config.channel_config} ({config.channel_count} channels)"
    )


def run_esds_decode(args) -> int:
    if args.hex:
        try:
            data = bytes.fromhex(args.hex)
        except ValueError as e:
            print(f"Error: invalid hex string: {e}")
            return 1
    elif args.input:
        if not os.path.exists(args.input):
            print(f"Error: input file not found: {args.input}")
            return 1
        with open(args.input, "rb") as f_in:
            data = f_in.read()
    else:
        print("Error: esds-decode needs --input or --hex")
        return 1

    try:
        config = read_elem_stream_desc_aac(data)
    except (DescriptorError, EOFError) as e:
        print(f"Error: unsupported or corrupt stream configuration: {e}")
        return 1

    print(describe_config(config))
    return 0


def run_esds_encode(args) -> int:
    # An explicit index/config wins; its projection is zeroed so that
    # index 0 and config 0 survive resolve() instead of being looked up.
    if args.sample_rate_index is not None:
        sample_rate_index, sample_rate = args.sample_rate_index, 0
    else:
        sample_rate_index = 0
        sample_rate = args.sample_rate if args.sample_rate is not None else DEFAULT_SAMPLE_RATE
    if args.channel_config is not None:
        channel_config, channel_count = args.channel_config, 0
    else:
        channel_config = 0
        channel_count = args.channels if args.channels is not None else DEFAULT_CHANNELS

    config = MPEG4AudioConfig(
        object_type=args.object_type,
        sample_rate_index=sample_rate_index,
        channel_config=channel_config,
        sample_rate=sample_rate,
        channel_count=channel_count,
    )
    try:
        data = build_elem_stream_desc_aac(config)
    except ValueError as e:
        print(f"Error: cannot encode configuration: {e}")
        return 1

    if args.output:
        with open(args.output, "wb") as f_out:
            f_out.write(data)
        print(f"Wrote {len(data)} bytes to: {args.output}")
    else:
        print(data.hex())
    return 0


def run_adts(args) -> int:
    if not args.input:
        print("Error: adts mode needs --input")
        return 1

    frame_count = 0
    total_bytes = 0
    first_config = None
    try:
        with AdtsReader(args.input) as reader:
            for header, frame in reader.frames():
                if first_config is None:
                    first_config = header.audio_config()
                if args.verbose:
                    print(
                        f"Frame {frame_count}: object_type={header.object_type} "
                        f"sample_rate_index={header.sample_rate_index} "
                        f"chan_config={header.chan_config} frame_length={header.frame_length}"
                    )
                frame_count += 1
                total_bytes += len(frame)
    except AdtsReaderError as e:
        print(f"Error reading ADTS stream: {e}")
        return 1

    if first_config is None:
        print("No ADTS frames found.")
        return 1
    print(describe_config(first_config))
    print(f"Frames: {frame_count}, Bytes: {total_bytes}")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="MPEG-4 audio config / esds descriptor inspection tool"
    )
    parser.add_argument(
        "-m",
        "--mode",
        type=str,
        choices=["esds-decode", "esds-encode", "adts"],
        required=True,
        help="'esds-decode' to parse an ES descriptor, 'esds-encode' to build one, "
        "'adts' to scan a raw ADTS stream",
    )
    parser.add_argument(
        "-i",
        "--input",
        type=str,
        help="Input file (raw esds descriptor bytes, or an ADTS .aac stream)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        help="Output file for esds-encode (prints hex if omitted)",
    )
    parser.add_argument(
        "--hex",
        type=str,
        help="ES descriptor bytes as a hex string for esds-decode",
    )
    parser.add_argument(
        "--object-type",
        type=int,
        default=2,
        help="Audio object type for esds-encode (default: 2, AAC LC)",
    )
    parser.add_argument(
        "--sample-rate",
        type=int,
        help="Sample rate in Hz for esds-encode (default: 44100)",
    )
    parser.add_argument(
        "--channels",
        type=int,
        help="Channel count for esds-encode (default: 2)",
    )
    parser.add_argument(
        "--sample-rate-index",
        type=int,
        help="Explicit sampling frequency index for esds-encode (0-14, or a rate in Hz "
        "above 14 for the 24-bit escape); replaces --sample-rate",
    )
    parser.add_argument(
        "--channel-config",
        type=int,
        help="Explicit channel configuration for esds-encode (0-7); replaces --channels",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print every frame in adts mode",
    )
    parser.add_argument(
        "--debug-log",
        type=str,
        help="Enable debug logging to specified file (e.g., --debug-log pyisom_debug.log)",
    )

    args = parser.parse_args(argv)

    if args.debug_log:
        enable_debug_logging(args.debug_log)
        print(f"Debug logging enabled to: {args.debug_log}")

    if args.mode == "esds-decode":
        return run_esds_decode(args)
    elif args.mode == "esds-encode":
        return run_esds_encode(args)
    return run_adts(args)


if __name__ == "__main__":
    sys.exit(main())
