import argparse
import logging
import sys
from typing import Optional, TextIO

from .lexer import Lexer, reconstruct
from .highlighter import (
    set_lexer_log_level, format_token_list, format_token_table, highlight_code,
)

log = logging.getLogger(__name__)

DEFAULT_SENTINEL = "END"
PROMPT = "Enter code on Python (enter '{sentinel}' to end the entering code):"

FORMATS = ('list', 'table', 'highlight')


def read_source(stream: TextIO, sentinel: str = DEFAULT_SENTINEL) -> str:
    """Accumulate lines from stream until the sentinel line or end of stream.

    Every accepted line gets a trailing newline, whether or not the
    stream supplied one. The sentinel line itself is dropped.
    """
    lines = []
    for raw_line in stream:
        line = raw_line.rstrip('\r\n')
        if line == sentinel:
            log.debug(f"Sentinel {sentinel!r} reached after {len(lines)} lines")
            break
        lines.append(line + '\n')
    return ''.join(lines)


def render(tokens, source_code: str, output_format: str, use_color: bool = True) -> str:
    if output_format == 'list':
        return format_token_list(tokens)
    if output_format == 'table':
        return format_token_table(tokens)
    if output_format == 'highlight':
        return highlight_code(source_code, tokens, use_color=use_color)
    raise ValueError(f"Unknown output format: {output_format}")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Split Python-like source into classified tokens.")
    parser.add_argument("filename", nargs='?',
                        help="Path to the source file (default: read stdin until the sentinel line).")
    parser.add_argument("-f", "--format", choices=FORMATS, default='list',
                        help="How to print the tokens (default: list)")
    parser.add_argument("--sentinel", default=DEFAULT_SENTINEL,
                        help=f"Line that ends stdin input (default: {DEFAULT_SENTINEL})")
    parser.add_argument("--expand-calls", action='store_true',
                        help="Scan the arguments of plain function calls instead of keeping each call as one token.")
    parser.add_argument("--no-color", action='store_true',
                        help="Disable ANSI colours in highlight output.")
    parser.add_argument("--check", action='store_true',
                        help="Fail if the tokens do not reproduce the input exactly.")
    parser.add_argument(
        "--lexer-log-level",
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        default='WARNING',
        help="Set the logging level for the lexer module."
    )
    return parser


def main(argv: Optional[list] = None, stdin: Optional[TextIO] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    stdin = stdin if stdin is not None else sys.stdin

    logging.basicConfig(level=logging.INFO, format='%(levelname)s:%(name)s:%(message)s')
    set_lexer_log_level(getattr(logging, args.lexer_log_level))

    try:
        if args.filename:
            with open(args.filename, 'r', encoding='utf-8') as f:
                source_code = f.read()
            log.info(f"Scanning file: {args.filename}")
        else:
            print(PROMPT.format(sentinel=args.sentinel), file=sys.stderr)
            source_code = read_source(stdin, args.sentinel)

        tokens = Lexer(source_code, expand_calls=args.expand_calls).tokenize()

        if args.check and reconstruct(tokens) != source_code:
            log.error("Tokens do not reproduce the input")
            return 1

        sys.stdout.write(render(tokens, source_code, args.format, use_color=not args.no_color))
    except FileNotFoundError:
        log.error(f"Error: File not found: {args.filename}")
        return 1
    except OSError as e:
        log.error(f"Error reading {args.filename}: {e}")
        return 1
    except Exception as e:
        log.critical(f"An unexpected error occurred: {e}", exc_info=True)
        return 1
    return 0


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
