"""
Command line interface.

    python -m ansi_markup render [FILE] [--ansi | --no-ansi] [--xterm] [--mxp]
    python -m ansi_markup encode [FILE]
    python -m ansi_markup strip [FILE]
    python -m ansi_markup legacy TEXT CODES

Tagged text is read from FILE, or stdin when FILE is omitted.
"""
import argparse
import logging
import sys

from ansi_markup.config import get_default_capabilities, get_log_level
from ansi_markup.errors import MarkupError
from ansi_markup.legacy import from_codes
from ansi_markup.parser import from_markup, parse

logger = logging.getLogger(__name__)


def _read_source(path):
    if path is None or path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as handle:
        return handle.read()


def build_parser() -> argparse.ArgumentParser:
    defaults = get_default_capabilities()

    parser = argparse.ArgumentParser(prog="ansi_markup", description="Render tagged MUD text for telnet clients")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Render command
    render_parser = subparsers.add_parser("render", help="Render tagged text")
    render_parser.add_argument("file", nargs="?", help="Tagged text file (default: stdin)")
    render_parser.add_argument("--ansi", dest="ansi", action="store_true", default=defaults["ansi"],
                               help="Emit ANSI color codes")
    render_parser.add_argument("--no-ansi", dest="ansi", action="store_false", help="Disable ANSI color codes")
    render_parser.add_argument("--xterm", action="store_true", default=defaults["xterm"],
                               help="Use 256-color codes")
    render_parser.add_argument("--mxp", action="store_true", default=defaults["mxp"], help="Emit MXP tags")

    # Encode command
    encode_parser = subparsers.add_parser("encode", help="Re-encode tagged text canonically")
    encode_parser.add_argument("file", nargs="?", help="Tagged text file (default: stdin)")

    # Strip command
    strip_parser = subparsers.add_parser("strip", help="Print the plain text only")
    strip_parser.add_argument("file", nargs="?", help="Tagged text file (default: stdin)")

    # Legacy command
    legacy_parser = subparsers.add_parser("legacy", help="Convert text plus a legacy code stream to tagged text")
    legacy_parser.add_argument("text", help="Plain text")
    legacy_parser.add_argument("codes", help="One code character per text character")

    return parser


def main(argv=None) -> int:
    logging.basicConfig(
        level=get_log_level(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )

    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == "render":
            document = from_markup(_read_source(args.file))
            output = document.render(args.ansi, args.xterm, args.mxp)
        elif args.command == "encode":
            output = from_markup(_read_source(args.file)).encode()
        elif args.command == "strip":
            output = parse(_read_source(args.file)).plain_text
        elif args.command == "legacy":
            output = from_codes(args.text, args.codes).encode()
        else:
            parser.print_help()
            return 1
    except MarkupError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
