#!/usr/bin/env python3
"""
HTTP/2 Frame Tool - Main Entry Point

Decode captured frame bytes or build single frames from the command line.

Usage:
    python main.py decode <hex> [<hex> ...]
    python main.py decode -f capture.bin
    python main.py encode --type <frame type> [options]

Examples:
    # DATA frame on stream 1 with END_STREAM
    python main.py encode --type data --stream 1 --flag end_stream --payload abc

    # SETTINGS frame
    python main.py encode --type settings --setting settings_max_concurrent_streams=100

    # Decode it back
    python main.py decode 000300010000000161 6263
"""

import argparse
import logging
import sys

from h2frame import (
    FRAME_CLASSES, NEED_MORE_DATA, FramingError, ReceiveBuffer,
    decode_frame, describe_frame, encode_frame
)


def parse_setting(text: str) -> tuple:
    """Parse NAME=VALUE; numeric names are kept as integer ids."""
    name, sep, value = text.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {text!r}")
    key = int(name, 0) if name[:1].isdigit() else name
    return key, int(value, 0)


def parse_error(text: str):
    return int(text, 0) if text[:1].isdigit() else text


def cmd_decode(args) -> int:
    if args.file:
        with open(args.file, "rb") as f:
            data = f.read()
    else:
        try:
            data = bytes.fromhex("".join(args.hex))
        except ValueError as e:
            print(f"Error: invalid hex input: {e}")
            return 1

    # Decode frame by frame so everything before a bad frame is still shown
    buffer = ReceiveBuffer(data)
    count = 0
    while True:
        try:
            frame = decode_frame(buffer)
        except FramingError as e:
            print(f"Error: {e}")
            return 1
        if frame is NEED_MORE_DATA:
            break
        print(describe_frame(frame))
        count += 1

    remaining = bytes(buffer)
    print(f"\n{count} frame(s), {len(data) - len(remaining)} bytes")
    if remaining:
        print(f"Incomplete frame: {len(remaining)} trailing bytes ({remaining.hex()})")
    return 0


def cmd_encode(args) -> int:
    fields = {"stream": args.stream, "flags": args.flag}

    if args.hex is not None:
        try:
            payload = bytes.fromhex(args.hex)
        except ValueError as e:
            print(f"Error: invalid hex payload: {e}")
            return 1
    elif args.payload is not None:
        payload = args.payload.encode("utf-8")
    else:
        payload = None

    if args.type == "settings":
        fields["payload"] = args.setting
    elif payload is not None:
        fields["payload"] = payload

    if args.priority is not None:
        fields["priority"] = args.priority
    if args.error is not None:
        fields["error"] = args.error
    if args.increment is not None:
        fields["increment"] = args.increment
    if args.last_stream is not None:
        fields["last_stream"] = args.last_stream
    if args.promise_stream is not None:
        fields["promise_stream"] = args.promise_stream

    try:
        frame = FRAME_CLASSES[args.type](**fields)
        data = encode_frame(frame)
    except (FramingError, TypeError) as e:
        print(f"Error: {e}")
        return 1

    print(describe_frame(frame))
    print(data.hex())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="HTTP/2 Frame Tool - encode and decode draft-04 frames",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Examples:", 1)[1],
    )
    parser.add_argument(
        "-d", "--debug",
        action="store_true",
        help="Enable codec debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    decode = subparsers.add_parser("decode", help="Decode frames from hex or a file")
    decode.add_argument("hex", nargs="*", help="Frame bytes as hex (chunks are joined)")
    decode.add_argument("-f", "--file", help="Read raw frame bytes from a file")
    decode.set_defaults(func=cmd_decode)

    encode = subparsers.add_parser("encode", help="Encode a single frame")
    encode.add_argument("-t", "--type", required=True, choices=sorted(FRAME_CLASSES))
    encode.add_argument("-s", "--stream", type=int, default=0)
    encode.add_argument("--flag", action="append", default=[], help="Flag name (repeatable)")
    encode.add_argument("--payload", help="Payload as UTF-8 text")
    encode.add_argument("--hex", help="Payload as hex")
    encode.add_argument("--priority", type=int)
    encode.add_argument("--error", type=parse_error, help="Error name or numeric code")
    encode.add_argument("--increment", type=int)
    encode.add_argument("--last-stream", type=int)
    encode.add_argument("--promise-stream", type=int)
    encode.add_argument(
        "--setting",
        type=parse_setting,
        action="append",
        default=[],
        help="Setting as NAME=VALUE (repeatable)"
    )
    encode.set_defaults(func=cmd_encode)

    return parser


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
