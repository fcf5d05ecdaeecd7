import logging
from typing import List, Optional

from .tokens import (
    Token, TT_KEYWORD, TT_IDENTIFIER, TT_NUMBER, TT_STRING_LITERAL,
    TT_CHAR_LITERAL, TT_COMMENT, TT_OPERATOR, TT_DELIMITER,
    TT_FUNCTION_CALL, TT_WHITESPACE, TT_UNKNOWN,
    KEYWORDS, OPERATORS, DELIMITERS,
    WHITESPACE_CHARS, WORD_START_CHARS, WORD_CHARS, DIGIT_CHARS,
    HEX_DIGIT_CHARS, PUNCTUATION_CHARS,
)

log = logging.getLogger(__name__)

# --- Sub-scans ---
# Each takes the buffer and the index where its lexeme starts and returns
# the index just past the lexeme. None of them look at Lexer state.

def scan_word(text: str, start: int) -> int:
    end = start
    while end < len(text) and text[end] in WORD_CHARS:
        end += 1
    return end


def scan_number(text: str, start: int) -> int:
    """Hex literals take any run of hex digits after the prefix, decimal
    ones any run of digits and dots. Nothing is validated, so '1.2.3' and
    a bare '0x' are single numbers.
    """
    end = start
    if text.startswith(('0x', '0X'), start):
        end += 2
        while end < len(text) and text[end] in HEX_DIGIT_CHARS:
            end += 1
        return end
    while end < len(text) and (text[end] in DIGIT_CHARS or text[end] == '.'):
        end += 1
    return end


def scan_quoted(text: str, start: int) -> int:
    """Scan a '...' or "..." literal. Escapes are kept verbatim; an
    unterminated literal runs to the end of the buffer.
    """
    quote = text[start]
    end = start + 1
    while end < len(text):
        char = text[end]
        if char == '\\':
            end += 2 # Backslash plus whatever follows it
            continue
        end += 1
        if char == quote:
            return end
    return len(text)


def scan_comment(text: str, start: int) -> int:
    # The newline is left for the main loop
    end = text.find('\n', start)
    return len(text) if end == -1 else end


def scan_operator(text: str, start: int) -> int:
    pair = text[start:start + 2]
    if len(pair) == 2 and pair in OPERATORS:
        return start + 2
    return start + 1


def find_closing_paren(text: str, open_index: int) -> Optional[int]:
    """Return the index of the ')' matching the '(' at open_index, or None
    if the buffer ends first. Every parenthesis counts, including ones
    inside literals and comments.
    """
    depth = 1
    for index in range(open_index + 1, len(text)):
        char = text[index]
        if char == '(':
            depth += 1
        elif char == ')':
            depth -= 1
            if depth == 0:
                return index
    return None


class Lexer:
    def __init__(self, text: str, expand_calls: bool = False, depth: int = 0):
        self.text = text
        self.pos = 0
        self.tokens: List[Token] = []
        # When set, plain identifier calls recurse into their arguments the
        # same way keyword calls do instead of becoming one opaque token.
        self.expand_calls = expand_calls
        self.depth = depth # Nesting level of call-argument recursion
        log.debug(f"Lexer initialized with text of length {len(text)} (depth {depth})")

    def _peek(self, lookahead=0):
        """Return the character at pos + lookahead without consuming it, or None if at the end."""
        peek_pos = self.pos + lookahead
        if peek_pos < len(self.text):
            return self.text[peek_pos]
        return None

    def _emit(self, kind: str, end: int):
        """Append a token for text[pos:end] and move the cursor to end."""
        token = Token(kind, self.text[self.pos:end])
        log.debug(f"Found {kind}: {token.lexeme!r} at {self.pos} (depth {self.depth})")
        self.tokens.append(token)
        self.pos = end

    def _scan_call_arguments(self):
        """Emit '(' then the recursively scanned interior then ')'.

        The cursor must be on the opening parenthesis. With no matching
        ')' the interior runs to the end of the buffer and no closing
        delimiter is emitted.
        """
        open_index = self.pos
        close_index = find_closing_paren(self.text, open_index)
        self._emit(TT_DELIMITER, open_index + 1)

        interior_end = len(self.text) if close_index is None else close_index
        interior = self.text[open_index + 1:interior_end]
        log.debug(f"Scanning call arguments {interior!r} (depth {self.depth + 1})")
        sub_lexer = Lexer(interior, expand_calls=self.expand_calls, depth=self.depth + 1)
        self.tokens.extend(sub_lexer.tokenize())
        self.pos = interior_end

        if close_index is None:
            log.debug(f"Unbalanced '(' at {open_index}; arguments run to end of input")
        else:
            self._emit(TT_DELIMITER, close_index + 1)

    def _scan_word(self):
        end = scan_word(self.text, self.pos)
        word = self.text[self.pos:end]

        if word in KEYWORDS:
            self._emit(TT_KEYWORD, end)
            # Keywords may be separated from their arguments by whitespace
            while self._peek() is not None and self._peek() in WHITESPACE_CHARS:
                self._emit(TT_WHITESPACE, self.pos + 1)
            if self._peek() == '(':
                self._scan_call_arguments()
        elif word in OPERATORS:
            self._emit(TT_OPERATOR, end)
        elif end < len(self.text) and self.text[end] == '(':
            if self.expand_calls:
                self._emit(TT_FUNCTION_CALL, end)
                self._scan_call_arguments()
            else:
                close_index = find_closing_paren(self.text, end)
                call_end = len(self.text) if close_index is None else close_index + 1
                self._emit(TT_FUNCTION_CALL, call_end)
        else:
            self._emit(TT_IDENTIFIER, end)

    def _scan_punctuation(self):
        end = scan_operator(self.text, self.pos)
        lexeme = self.text[self.pos:end]
        if lexeme in OPERATORS:
            self._emit(TT_OPERATOR, end)
        elif lexeme in DELIMITERS:
            self._emit(TT_DELIMITER, end)
        else:
            self._emit(TT_UNKNOWN, end)

    def tokenize(self) -> List[Token]:
        log.debug("Starting tokenization...")
        while self.pos < len(self.text):
            char = self.text[self.pos]

            if char in WHITESPACE_CHARS:
                self._emit(TT_WHITESPACE, self.pos + 1)
            elif char in WORD_START_CHARS:
                self._scan_word()
            elif char in DIGIT_CHARS:
                self._emit(TT_NUMBER, scan_number(self.text, self.pos))
            elif char == '"':
                self._emit(TT_STRING_LITERAL, scan_quoted(self.text, self.pos))
            elif char == "'":
                self._emit(TT_CHAR_LITERAL, scan_quoted(self.text, self.pos))
            elif char == '#':
                self._emit(TT_COMMENT, scan_comment(self.text, self.pos))
            elif char in PUNCTUATION_CHARS:
                self._scan_punctuation()
            else:
                # Non-ASCII and control characters
                self._emit(TT_UNKNOWN, self.pos + 1)

        log.debug(f"Tokenization finished with {len(self.tokens)} tokens (depth {self.depth}).")
        return self.tokens


def tokenize(text: str, expand_calls: bool = False) -> List[Token]:
    return Lexer(text, expand_calls=expand_calls).tokenize()


def reconstruct(tokens) -> str:
    """Join lexemes back into the text they were scanned from."""
    return ''.join(token.lexeme for token in tokens)
