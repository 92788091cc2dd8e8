# src/jsonscan_lib/cli.py
"""
Extract JSON objects from a streamed array / concatenated-object file.

Usage:
  jsonscan INPUT [--prefix P] [--chunk-size N] [--format jsonl|csv]
                 [--output PATH] [--config PATH] [--stats] [--log-level LEVEL]

INPUT is a file path, or ``-`` for stdin. JSONL goes to stdout unless
``--output`` is given; CSV always needs ``--output``.

Exit codes: 0 ok, 1 bad input or config, 2 malformed object in the stream.
Objects read before a malformed one are still written.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config import ConfigError, get_setting, load_config_or_default
from .decoder import MalformedObjectError
from .models import DecoderConfig
from .export import write_csv, write_jsonl
from .logging_utils import setup_logging
from .stream import JsonObjectStream, read_chunks


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="jsonscan", description=__doc__.strip().splitlines()[0])
    ap.add_argument("input", help="Input file, or '-' for stdin")
    ap.add_argument("--prefix", default=None, help="Skip everything up to and including this marker")
    ap.add_argument("--chunk-size", type=int, default=None, help="Characters read per chunk")
    ap.add_argument("--format", choices=("jsonl", "csv"), default=None, help="Output format")
    ap.add_argument("-o", "--output", default=None, help="Output file (default: stdout for jsonl)")
    ap.add_argument("--config", default=None, help="YAML config file")
    ap.add_argument("--stats", action="store_true", help="Log decoder counters when done")
    ap.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    return ap


def _decode(stream: JsonObjectStream, f, chunk_size: int):
    # Stops quietly on a malformed object; main() reports stream.error.
    with stream:
        for chunk in read_chunks(f, chunk_size):
            try:
                values = stream.feed(chunk)
            except MalformedObjectError:
                return
            yield from values
            if stream.error is not None or stream.completed:
                return


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        cfg = load_config_or_default(args.config)
    except (ConfigError, FileNotFoundError) as e:
        setup_logging(args.log_level)
        logger.error("%s", e)
        return 1

    setup_logging(args.log_level or get_setting(cfg, "logging", "level"))

    decoder_cfg = DecoderConfig.from_mapping(cfg.get("decoder"))
    if args.prefix is not None:
        decoder_cfg.prefix = args.prefix or None
    chunk_size = args.chunk_size
    if chunk_size is None:
        chunk_size = get_setting(cfg, "reader", "chunk_size")
    encoding = get_setting(cfg, "reader", "encoding", "utf-8")
    fmt = args.format or get_setting(cfg, "output", "format", "jsonl")

    if chunk_size <= 0:
        logger.error("--chunk-size must be positive")
        return 1
    if fmt == "csv" and not args.output:
        logger.error("--format csv requires --output")
        return 1

    stream = JsonObjectStream.from_config(decoder_cfg)
    try:
        if args.input == "-":
            f = sys.stdin
        else:
            f = open(args.input, "r", encoding=encoding)
    except OSError as e:
        logger.error("Cannot open input: %s", e)
        return 1

    try:
        records = _decode(stream, f, chunk_size)
        if fmt == "csv":
            n = write_csv(records, args.output)
        else:
            n = write_jsonl(records, args.output or sys.stdout)
    except UnicodeDecodeError as e:
        logger.error("Cannot decode input as %s: %s", encoding, e)
        return 1
    except OSError as e:
        logger.error("I/O error: %s", e)
        return 1
    finally:
        if f is not sys.stdin:
            f.close()

    if stream.error is not None:
        logger.error("%s", stream.error)
        logger.error("Stopped after %d object(s)", n)
        return 2
    logger.info("Wrote %d object(s)%s", n, f" to {args.output}" if args.output else "")
    if args.stats:
        logger.info("Decoder stats: %s", stream.stats.as_dict())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
