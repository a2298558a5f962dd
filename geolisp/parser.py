from typing import List, Optional, Tuple

from .ast import Atom, Expr, Program, SList, Span
from .errors import GeoLispError, ParseError, attach_snippet
from .lexer import Token, number_value, tokenize

SETQ = 'setq'


class Cursor:
    def __init__(self, tokens: List[Token]):
        self.toks = tokens
        self.i = 0

    def peek(self) -> Optional[Token]:
        return self.toks[self.i] if self.i < len(self.toks) else None

    def next(self) -> Token:
        t = self.toks[self.i]
        self.i += 1
        return t

    def at_end(self) -> bool:
        return self.i >= len(self.toks)


def _span(tok: Token) -> Span:
    return Span(tok[2], tok[3])


def _atom(tok: Token) -> Atom:
    if tok[0] == 'NUMBER':
        return Atom('NUMBER', number_value(tok[1]), _span(tok))
    return Atom('ID', tok[1], _span(tok))


def _check_list(lst: SList, top_level: bool) -> None:
    if not lst.items:
        raise ParseError('empty form', span=lst.span)
    head = lst.items[0]
    if not (isinstance(head, Atom) and head.is_identifier):
        raise ParseError('form must start with a procedure name', span=head.span)
    if head.value != SETQ:
        return
    if not top_level:
        raise ParseError('setq is only allowed at top level', span=lst.span)
    if len(lst.items) != 3:
        raise ParseError(
            f'setq expects a name and a value, got {len(lst.items) - 1} operand(s)', span=lst.span
        )
    name = lst.items[1]
    if not (isinstance(name, Atom) and name.is_identifier):
        raise ParseError('setq target must be an identifier', span=name.span)
    if name.value == SETQ:
        raise ParseError('cannot bind the name setq', span=name.span)


def parse_form(cur: Cursor) -> Expr:
    """Read one expression starting at the cursor.

    Nesting is tracked with an explicit stack so deep programs do not hit the
    interpreter recursion limit.
    """

    tok = cur.next()
    if tok[0] == 'RPAREN':
        raise ParseError("unmatched ')'", span=_span(tok))
    if tok[0] != 'LPAREN':
        return _atom(tok)

    stack: List[Tuple[SList, int]] = [(SList([], _span(tok)), 0)]
    while True:
        t = cur.peek()
        if t is None:
            raise ParseError("unexpected end of input: missing ')'", span=stack[-1][0].span)
        cur.next()
        if t[0] == 'LPAREN':
            stack.append((SList([], _span(t)), len(stack)))
            continue
        if t[0] == 'RPAREN':
            done, depth = stack.pop()
            _check_list(done, top_level=depth == 0)
            if not stack:
                return done
            stack[-1][0].items.append(done)
            continue
        stack[-1][0].items.append(_atom(t))


def parse_tokens(tokens: List[Token]) -> Program:
    prog = Program()
    cur = Cursor(tokens)
    while not cur.at_end():
        prog.forms.append(parse_form(cur))
    return prog


def parse_program(text: str) -> Program:
    tokens = tokenize(text)
    try:
        return parse_tokens(tokens)
    except GeoLispError as err:
        raise attach_snippet(err, text)
