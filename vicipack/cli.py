"""
Command-line tool for inspecting and producing VICI messages.

Usage:
    echo '{"key1": "value1"}' | python -m vicipack encode --hex
    python -m vicipack decode --input message.bin --redact
    python -m vicipack version
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, List, Optional

from vicipack import __version__
from vicipack.config import get_settings
from vicipack.domain.value import Section
from vicipack.errors import ViciError
from vicipack.logging import create_logger, redact
from vicipack.mapping import to_python, to_section
from vicipack.wire import decode, encode

HEX_KEY = "$hex"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vicipack", description="Encode and decode VICI messages.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log codec events to stderr.")
    sub = parser.add_subparsers(dest="command")

    enc = sub.add_parser("encode", help="Encode a JSON document into a VICI message.")
    enc.add_argument("--input", "-i", metavar="FILE", help="Read JSON from FILE instead of stdin.")
    enc.add_argument("--output", "-o", metavar="FILE", help="Write the message to FILE instead of stdout.")
    enc.add_argument("--hex", action="store_true", help="Write the message as hex text.")

    dec = sub.add_parser("decode", help="Decode a VICI message into JSON.")
    dec.add_argument("--input", "-i", metavar="FILE", help="Read the message from FILE instead of stdin.")
    dec.add_argument("--hex", action="store_true", help="Input is hex text rather than raw bytes.")
    dec.add_argument("--redact", action="store_true", help="Mask secrets and passwords in the output.")

    sub.add_parser("version", help="Print version and exit.")
    return parser


def _read_input(filepath: Optional[str]) -> bytes:
    if filepath:
        with open(filepath, "rb") as f:
            return f.read()
    return sys.stdin.buffer.read()


def from_json(value: Any) -> Any:
    if isinstance(value, dict):
        if set(value) == {HEX_KEY}:
            return bytes.fromhex(value[HEX_KEY])
        return {key: from_json(item) for key, item in value.items()}
    if isinstance(value, list):
        return [from_json(item) for item in value]
    return value


def to_json(value: Any) -> Any:
    if isinstance(value, bytes):
        return {HEX_KEY: value.hex()}
    if isinstance(value, dict):
        return {key: to_json(item) for key, item in value.items()}
    if isinstance(value, list):
        return [to_json(item) for item in value]
    return value


def _cmd_encode(args: argparse.Namespace) -> None:
    document = json.loads(_read_input(args.input))
    if not isinstance(document, dict):
        raise ValueError("top-level JSON value must be an object")
    message = encode(to_section(from_json(document)))
    payload = message.hex().encode("ascii") + b"\n" if args.hex else message
    if args.output:
        with open(args.output, "wb") as f:
            f.write(payload)
    else:
        sys.stdout.buffer.write(payload)
        sys.stdout.buffer.flush()


def _cmd_decode(args: argparse.Namespace) -> None:
    raw = _read_input(args.input)
    if args.hex:
        raw = bytes.fromhex(raw.decode("ascii"))
    section: Section = decode(raw)
    if args.redact:
        section = redact(section)
    print(json.dumps(to_json(to_python(section)), indent=2))


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "version":
        print(f"vicipack {__version__}")
        return 0

    try:
        level = logging.DEBUG if args.verbose else get_settings().log_level.upper()
        create_logger("vicipack", level)
        if args.command == "encode":
            _cmd_encode(args)
        else:
            _cmd_decode(args)
    except ViciError as e:
        print(f"vicipack: error [{e.code}]: {e}", file=sys.stderr)
        return 2
    except json.JSONDecodeError as e:
        print(f"vicipack: JSON parse error: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"vicipack: I/O error: {e}", file=sys.stderr)
        return 2
    except (TypeError, ValueError) as e:
        print(f"vicipack: invalid input: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
