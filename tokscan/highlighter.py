# tokscan/highlighter.py

import logging
from typing import List, Optional

from .lexer import Lexer
from .tokens import (
    Token, TT_KEYWORD, TT_IDENTIFIER, TT_NUMBER, TT_STRING_LITERAL,
    TT_CHAR_LITERAL, TT_COMMENT, TT_OPERATOR, TT_DELIMITER,
    TT_FUNCTION_CALL, TT_WHITESPACE, TT_UNKNOWN,
)

log = logging.getLogger(__name__)

# --- Function to control lexer logging ---
def set_lexer_log_level(level):
    """Sets the logging level for the lexer's logger."""
    lexer_log = logging.getLogger('tokscan.lexer')
    lexer_log.setLevel(level)
    log.debug(f"Set tokscan.lexer log level to {logging.getLevelName(level)}")

# --- ANSI Color Codes ---
COLOR_RESET = "\033[0m"
COLOR_RED = "\033[31m"
COLOR_GREEN = "\033[32m"
COLOR_YELLOW = "\033[33m"
COLOR_BLUE = "\033[34m"
COLOR_MAGENTA = "\033[35m"
COLOR_CYAN = "\033[36m"
COLOR_WHITE = "\033[37m"
COLOR_BRIGHT_BLACK = "\033[90m" # Grey, for comments
COLOR_BRIGHT_RED = "\033[91m"
COLOR_BRIGHT_YELLOW = "\033[93m"
COLOR_BRIGHT_BLUE = "\033[94m"
COLOR_BRIGHT_MAGENTA = "\033[95m"
COLOR_BRIGHT_CYAN = "\033[96m"
COLOR_BRIGHT_WHITE = "\033[97m"
BOLD = "\033[1m"

# Nested parentheses cycle through these
RAINBOW_COLORS = (
    COLOR_RED,
    COLOR_YELLOW,
    COLOR_GREEN,
    COLOR_CYAN,
    COLOR_BLUE,
    COLOR_MAGENTA,
)

TOKEN_COLOR_MAP = {
    TT_KEYWORD: BOLD + COLOR_BRIGHT_BLUE,
    TT_IDENTIFIER: COLOR_WHITE,
    TT_NUMBER: COLOR_BRIGHT_YELLOW,
    TT_STRING_LITERAL: COLOR_GREEN,
    TT_CHAR_LITERAL: COLOR_GREEN,
    TT_COMMENT: COLOR_BRIGHT_BLACK,
    TT_OPERATOR: COLOR_BRIGHT_MAGENTA,
    TT_DELIMITER: COLOR_BRIGHT_WHITE,
    TT_FUNCTION_CALL: COLOR_BRIGHT_CYAN,
    TT_WHITESPACE: None, # Printed as-is
    TT_UNKNOWN: BOLD + COLOR_BRIGHT_RED,
}

WHITESPACE_PLACEHOLDER = "<[space]>"
TABLE_HEADERS = ("Lexeme", "Kind")


def format_token_list(tokens: List[Token]) -> str:
    """One 'Token: <lexeme> (<KIND>)' line per token."""
    return ''.join(f"Token: {token.lexeme} ({token.kind})\n" for token in tokens)


def format_token_table(tokens: List[Token]) -> str:
    """Two fixed-width columns. Whitespace lexemes are shown as a
    placeholder, every other lexeme is wrapped in angle brackets.
    """
    rows = []
    for token in tokens:
        if token.kind == TT_WHITESPACE:
            cell = WHITESPACE_PLACEHOLDER
        else:
            cell = f"<{token.lexeme}>"
        rows.append((cell, token.kind))

    lexeme_width = max([len(TABLE_HEADERS[0])] + [len(cell) for cell, _ in rows])
    kind_width = max([len(TABLE_HEADERS[1])] + [len(kind) for _, kind in rows])

    lines = [f"{TABLE_HEADERS[0]:<{lexeme_width}} | {TABLE_HEADERS[1]}"]
    lines.append(f"{'-' * lexeme_width}-+-{'-' * kind_width}")
    for cell, kind in rows:
        lines.append(f"{cell:<{lexeme_width}} | {kind}")
    return '\n'.join(lines) + '\n'


def highlight_code(source_code: str, tokens: Optional[List[Token]] = None, use_color: bool = True) -> str:
    """Re-print the source with a line-number gutter and ANSI colours.

    The tokens must reconstruct source_code; when none are given the
    source is scanned here.
    """
    if tokens is None:
        tokens = Lexer(source_code).tokenize()
    if not source_code:
        return ''

    lines = source_code.count('\n') + 1
    line_num_padding = len(str(lines))

    out = []
    current_line_num = 1
    line_started = False
    paren_depth = 0

    def start_line():
        nonlocal line_started
        line_num_str = f"{current_line_num:>{line_num_padding}} | "
        if use_color and current_line_num % 5 == 0:
            out.append(f"{COLOR_GREEN}{line_num_str}{COLOR_RESET}")
        else:
            out.append(line_num_str)
        line_started = True

    def write(text, color):
        nonlocal current_line_num, line_started
        for j, part in enumerate(text.split('\n')):
            if j > 0:
                # Blank lines still get a gutter
                if not line_started:
                    start_line()
                out.append('\n')
                current_line_num += 1
                line_started = False
            if part:
                if not line_started:
                    start_line()
                if color and use_color:
                    out.append(f"{color}{part}{COLOR_RESET}")
                else:
                    out.append(part)

    for token in tokens:
        color = TOKEN_COLOR_MAP.get(token.kind)
        if token.kind == TT_DELIMITER and token.lexeme == '(':
            color = RAINBOW_COLORS[paren_depth % len(RAINBOW_COLORS)]
            paren_depth += 1
        elif token.kind == TT_DELIMITER and token.lexeme == ')':
            paren_depth -= 1
            if paren_depth < 0:
                paren_depth = 0
                color = COLOR_BRIGHT_RED
            else:
                color = RAINBOW_COLORS[paren_depth % len(RAINBOW_COLORS)]
        write(token.lexeme, color)

    # Add a final newline ONLY if the source didn't end with one.
    if not source_code.endswith('\n'):
        out.append('\n')
    return ''.join(out)
