"""pretty-json-log — render JSON log lines as readable text."""

import logging
import sys
from argparse import ArgumentParser, ArgumentTypeError
from itertools import islice

from prettyjsonlog.config import Config
from prettyjsonlog.formatter import OUTPUT_FORMATS, get_formatter, render_line
from prettyjsonlog.levels import Level, level_from_name
from prettyjsonlog.reader import STDIN, expand_paths, read_sources, tail_file
from prettyjsonlog.record import parse_log_line

logger = logging.getLogger(__name__)


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise ArgumentTypeError(f"invalid int value: {text!r}")
    if value < 1:
        raise ArgumentTypeError(f"must be at least 1: {value}")
    return value


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="pretty-json-log",
        description="Extract timestamp, level, message and stack trace from JSON log lines.",
    )
    parser.add_argument(
        "files",
        nargs="*",
        help="Log file path(s) or glob pattern(s); '-' or none reads stdin",
    )
    parser.add_argument(
        "--level",
        help="Only show records at or above this level (e.g. WARN)",
    )
    parser.add_argument(
        "--output",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format (default: from config, else text)",
    )
    parser.add_argument(
        "--color",
        action="store_true",
        default=None,
        help="Colorize the level (ANSI)",
    )
    parser.add_argument(
        "--tail",
        action="store_true",
        help="Follow a single log file for new lines (like tail -F)",
    )
    parser.add_argument(
        "--lines",
        type=_positive_int,
        help="Limit output to N lines",
    )
    parser.add_argument(
        "--max-depth",
        type=_positive_int,
        default=None,
        help="Maximum JSON nesting depth before a line is treated as plain text",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="YAML config file (default: $PRETTY_JSON_LOG_CONFIG)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Diagnostic log level on stderr (default: WARNING)",
    )
    return parser


def _configure_logging(level_name: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        stream=sys.stderr,
    )


def _open_lines(args):
    paths = expand_paths(args.files or [STDIN])
    if not args.tail:
        return read_sources(paths)
    if len(paths) != 1 or paths[0] == STDIN:
        raise ValueError("--tail requires exactly one file")
    return tail_file(paths[0])


def run_pipeline(args, config: Config) -> int:
    """Assemble and execute the line -> record -> text pipeline."""
    min_level: Level | None = None
    if args.level:
        min_level = level_from_name(args.level)
        if min_level is None:
            print(f"Error: unknown level {args.level!r}", file=sys.stderr)
            return 1

    output = config["output"]
    formatter = get_formatter(
        output_format=args.output or output["format"],
        color=args.color if args.color is not None else output["color"],
        show_rest=output["show_rest"],
        colors=config["colors"],
    )
    max_depth = args.max_depth if args.max_depth is not None else config["parser"]["max_depth"]

    try:
        lines = _open_lines(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    rendered = (_render(line, max_depth, min_level, formatter) for line, _ in lines)
    rendered = (text for text in rendered if text is not None)

    if args.lines:
        rendered = islice(rendered, args.lines)

    for text in rendered:
        print(text)
    return 0


def _render(line: str, max_depth: int, min_level: Level | None, formatter) -> str | None:
    record = parse_log_line(line, max_depth=max_depth)
    if min_level is not None:
        if record is None or record.level is None or record.level < min_level:
            return None
    return render_line(line, record, formatter)


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = Config(args.config) if args.config else Config.from_env()
    _configure_logging(args.log_level or config["logging"]["level"])
    logger.debug("Output options: %s", config["output"])

    try:
        return run_pipeline(args, config)
    except (KeyboardInterrupt, BrokenPipeError):
        return 0
