"""CLI main module with subcommands for validate, inspect, and chain.

Usage:
    python -m framegraph.cli validate --config robot.yaml
    python -m framegraph.cli inspect --config robot.yaml
    python -m framegraph.cli chain --config robot.yaml --from body --to laser
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml

from ..core.config import build_configuration, load_configuration, load_document
from ..core.errors import FrameGraphError
from ..core.logging import get_logger, setup_logging
from ..core.manager import TransformationManager

logger = get_logger(__name__)


def parse_producer(text: str) -> tuple[tuple[str, str], str]:
    """Parse a FROM:TO=PRODUCER override."""
    frames, sep, producer = text.partition("=")
    from_frame, colon, to_frame = frames.partition(":")
    if not sep or not colon or not producer:
        raise argparse.ArgumentTypeError(f"expected FROM:TO=PRODUCER, got {text!r}")
    return (from_frame, to_frame), producer


def cmd_validate(args: argparse.Namespace) -> int:
    """Load a frame graph file and report whether it is valid."""
    try:
        conf = load_configuration(args.config)
    except (OSError, ValueError, yaml.YAMLError, FrameGraphError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"{args.config}: OK ({len(conf.frames())} frames, {len(conf)} transformations)")
    return 0


def cmd_inspect(args: argparse.Namespace) -> int:
    """Print the frames and transformations declared in a file."""
    try:
        document = load_document(args.config)
        conf = build_configuration(document)
    except (OSError, ValueError, yaml.YAMLError, FrameGraphError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("Inspecting:", args.config)
    print("-" * 40)
    print(conf.describe())
    print("-" * 40)
    print(f"  Max seek depth: {document.max_seek_depth}")
    return 0


def cmd_chain(args: argparse.Namespace) -> int:
    """Resolve and print the chain between two frames."""
    try:
        document = load_document(args.config)
        conf = build_configuration(document)
        manager = TransformationManager(
            conf,
            max_seek_depth=(
                args.max_depth if args.max_depth is not None else document.max_seek_depth
            ),
        )
        chain = manager.transformation_chain(
            args.from_frame, args.to_frame, dict(args.producers or [])
        )
    except (OSError, ValueError, yaml.YAMLError, FrameGraphError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(chain)
    producers = chain.producers()
    if producers:
        print("Producers needed:", ", ".join(str(p) for p in producers))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="framegraph",
        description="Frame graph configuration and transformation chain resolution",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Write JSON lines logs to this file",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # Validate subcommand
    parser_validate = subparsers.add_parser(
        "validate",
        help="Check that a frame graph file is valid",
    )
    parser_validate.add_argument(
        "--config",
        "-c",
        type=Path,
        required=True,
        help="Path to YAML/JSON frame graph file",
    )
    parser_validate.set_defaults(func=cmd_validate)

    # Inspect subcommand
    parser_inspect = subparsers.add_parser(
        "inspect",
        help="Print frames and transformations of a frame graph file",
    )
    parser_inspect.add_argument(
        "--config",
        "-c",
        type=Path,
        required=True,
        help="Path to YAML/JSON frame graph file",
    )
    parser_inspect.set_defaults(func=cmd_inspect)

    # Chain subcommand
    parser_chain = subparsers.add_parser(
        "chain",
        help="Resolve the transformation chain between two frames",
    )
    parser_chain.add_argument(
        "--config",
        "-c",
        type=Path,
        required=True,
        help="Path to YAML/JSON frame graph file",
    )
    parser_chain.add_argument("--from", dest="from_frame", required=True, help="Source frame")
    parser_chain.add_argument("--to", dest="to_frame", required=True, help="Target frame")
    parser_chain.add_argument(
        "--producer",
        dest="producers",
        type=parse_producer,
        action="append",
        metavar="FROM:TO=PRODUCER",
        help="Additional producer, takes priority over the file (repeatable)",
    )
    parser_chain.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Maximum chain length (default: from the file)",
    )
    parser_chain.set_defaults(func=cmd_chain)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_file, logging.DEBUG if args.verbose else logging.WARNING)
    logger.debug("running command", {"command": args.command})
    return int(args.func(args) or 0)


if __name__ == "__main__":
    sys.exit(main())
