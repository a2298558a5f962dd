import math
import re
from typing import List, Tuple

from .ast import Span
from .errors import LexError, attach_snippet

Token = Tuple[str, str, int, int]  # (type, value, line, col)

SYMBOLS = {
    '(': 'LPAREN',
    ')': 'RPAREN',
}

COMMENT = ';'

_num_re = re.compile(r'[+-]?\d+(?:\.\d+)?')
_num_prefix_re = re.compile(r'[+-]?\.?\d')
_word_re = re.compile(r'[^\s();]+')


def tokenize_line(s: str, line_no: int) -> List[Token]:
    tokens: List[Token] = []
    i = 0
    n = len(s)
    while i < n:
        ch = s[i]
        col = i + 1
        if ch == COMMENT:
            break
        if ch.isspace():
            i += 1
            continue
        if ch in SYMBOLS:
            tokens.append((SYMBOLS[ch], ch, line_no, col))
            i += 1
            continue
        m = _word_re.match(s, i)
        if not m:
            raise LexError(f'unexpected character: {ch!r}', span=Span(line_no, col))
        word = m.group(0)
        if _num_re.fullmatch(word):
            if not math.isfinite(float(word)):
                raise LexError(f'numeric literal {word[:12]}... is out of range', span=Span(line_no, col))
            tokens.append(('NUMBER', word, line_no, col))
        elif _num_prefix_re.match(word):
            raise LexError(f'invalid numeric literal {word!r}', span=Span(line_no, col))
        else:
            tokens.append(('ID', word, line_no, col))
        i = m.end()
    return tokens


def tokenize(text: str) -> List[Token]:
    tokens: List[Token] = []
    for line_no, raw in enumerate(text.splitlines(), start=1):
        try:
            tokens.extend(tokenize_line(raw, line_no))
        except LexError as err:
            raise attach_snippet(err, text)
    return tokens


def number_value(literal: str):
    """Convert a NUMBER token to ``int`` or ``float``."""
    if '.' in literal:
        return float(literal)
    return int(literal)
