import argparse
import logging
import os
import sys
from typing import List, Optional, Union

from .bank import available_banks
from .checksum import CHECKSUMS
from .config import CodecConfig, build_codec, load_codec_config, save_codec_config

logger = logging.getLogger(__name__)


def setup_logger(verbose: bool = False) -> logging.Logger:
    root = logging.getLogger("wordcodec")
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
    return root


def _read_input(path: str, binary: bool = False) -> Union[bytes, str]:
    """Read a payload file or phrase file; ``-`` means stdin."""
    if path == "-":
        return sys.stdin.buffer.read() if binary else sys.stdin.read()
    if binary:
        with open(path, "rb") as f:
            return f.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _write_output(path: str, content: Union[bytes, str]) -> None:
    """Write decoded bytes or an encoded phrase; ``-`` means stdout."""
    binary = isinstance(content, bytes)
    if path == "-":
        stream = sys.stdout.buffer if binary else sys.stdout
        stream.write(content)
        stream.flush()
        return
    with open(path, "wb" if binary else "w", encoding=None if binary else "utf-8") as f:
        f.write(content)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Encode bytes as checksummed words from a 2048-word bank"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--bank", help="Name of a built-in word bank (see 'banks')")
    common.add_argument("--bank-file", help="Text file with one word per line")
    common.add_argument("--checksum", choices=CHECKSUMS)
    common.add_argument("--separator", help="Word separator for encoded text")
    common.add_argument(
        "--config",
        help="Path to a JSON codec config (loads existing values and writes updates)",
    )
    common.add_argument("--verbose", "-v", action="store_true")

    enc = subparsers.add_parser("encode", parents=[common])
    enc.add_argument("--input-bytes", required=True)
    enc.add_argument("--output-text", required=True)

    dec = subparsers.add_parser("decode", parents=[common])
    dec.add_argument("--input-text", required=True)
    dec.add_argument("--output-bytes", required=True)

    subparsers.add_parser("banks", help="List the built-in word banks")

    return parser


def resolve_config(args) -> CodecConfig:
    """Merge command-line options over the config file, if one exists."""
    if args.config and os.path.exists(args.config):
        config = load_codec_config(args.config)
        logger.debug("Loaded codec config from %s", args.config)
    else:
        config = CodecConfig()

    if args.bank is not None:
        config.bank = args.bank
        config.bank_file = None
    if args.bank_file is not None:
        config.bank_file = args.bank_file
    if args.checksum is not None:
        config.checksum = args.checksum
    if args.separator is not None:
        config.separator = args.separator

    if args.config:
        save_codec_config(config, args.config)
    return config


def run_encode(args) -> None:
    config = resolve_config(args)
    codec = build_codec(config)
    payload = _read_input(args.input_bytes, binary=True)
    words = codec.encode(payload)
    logger.info(
        "Encoded %d bytes as %d words (%s)", len(payload), len(words), config.checksum
    )
    _write_output(args.output_text, config.separator.join(words) + "\n")


def run_decode(args) -> None:
    config = resolve_config(args)
    codec = build_codec(config)
    encoded_text = _read_input(args.input_text)
    separator = None if config.separator.isspace() else config.separator
    data = codec.decode_phrase(encoded_text, separator=separator)
    logger.info("Decoded %d bytes", len(data))
    _write_output(args.output_bytes, data)


def run_banks(args) -> None:
    _write_output("-", "\n".join(available_banks()) + "\n")


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    setup_logger(getattr(args, "verbose", False))

    try:
        if args.command == "encode":
            run_encode(args)
        elif args.command == "decode":
            run_decode(args)
        elif args.command == "banks":
            run_banks(args)
        else:
            parser.error("Unknown command")
    except ValueError as exc:
        parser.error(str(exc))


__all__ = ["build_arg_parser", "resolve_config", "run_encode", "run_decode", "main"]
