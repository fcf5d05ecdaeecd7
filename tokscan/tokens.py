import string
from dataclasses import dataclass


@dataclass(frozen=True)
class Token:
    kind: str
    lexeme: str  # Exact slice of the input, quotes and call spans included

    def __repr__(self):
        return f"{self.kind}({self.lexeme!r})"


# Token Kinds
TT_KEYWORD = "KEYWORD"
TT_IDENTIFIER = "IDENTIFIER"
TT_NUMBER = "NUMBER"
TT_STRING_LITERAL = "STRING_LITERAL"
TT_CHAR_LITERAL = "CHAR_LITERAL"    # '...' of any length
TT_COMMENT = "COMMENT"              # #...
TT_OPERATOR = "OPERATOR"
TT_DELIMITER = "DELIMITER"
TT_FUNCTION_CALL = "FUNCTION_CALL"  # name(...)
TT_WHITESPACE = "WHITESPACE"        # Always a single character
TT_UNKNOWN = "UNKNOWN"              # Unclassified character

TOKEN_KINDS = frozenset({
    TT_KEYWORD, TT_IDENTIFIER, TT_NUMBER,
    TT_STRING_LITERAL, TT_CHAR_LITERAL, TT_COMMENT,
    TT_OPERATOR, TT_DELIMITER, TT_FUNCTION_CALL,
    TT_WHITESPACE, TT_UNKNOWN,
})

# Reserved words. Word operators live in OPERATORS instead.
KEYWORDS = frozenset({
    'False', 'None', 'True',
    'if', 'elif', 'else', 'while', 'for', 'break', 'continue', 'pass',
    'def', 'return', 'lambda', 'yield', 'class',
    'import', 'from', 'as', 'global', 'nonlocal', 'del',
    'try', 'except', 'finally', 'raise', 'assert', 'with',
    'async', 'await',
    # Built-ins scanned as call-like keywords
    'print', 'input', 'len', 'range',
})

OPERATORS = frozenset({
    # Arithmetic
    '+', '-', '*', '/', '%', '**', '//', '@',
    # Comparison
    '==', '!=', '<', '>', '<=', '>=',
    # Assignment
    '=', '+=', '-=', '*=', '/=', '%=', '&=', '|=', '^=', ':=',
    # Bitwise
    '&', '|', '^', '~', '<<', '>>',
    # Annotations
    '->',
    # Word operators
    'and', 'or', 'not', 'is', 'in',
})

DELIMITERS = frozenset({'(', ')', '[', ']', '{', '}', ',', ':', ';', '.'})

# ASCII-only character classes; anything outside them is UNKNOWN
WHITESPACE_CHARS = frozenset(string.whitespace)
WORD_START_CHARS = frozenset(string.ascii_letters + '_')
WORD_CHARS = frozenset(string.ascii_letters + string.digits + '_')
DIGIT_CHARS = frozenset(string.digits)
HEX_DIGIT_CHARS = frozenset(string.hexdigits)
PUNCTUATION_CHARS = frozenset(string.punctuation)
