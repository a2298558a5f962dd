from typing import Optional, Sequence

from .ast import Span


class GeoLispError(Exception):
    """Base class for every error raised by the geolisp pipeline."""

    def __init__(self, message: str, *, span: Optional[Span] = None, operation: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.span = span
        self.operation = operation
        self.snippet: Optional[str] = None

    def __str__(self) -> str:
        prefix = ''
        if self.span is not None:
            prefix = f'[line {self.span.line}, col {self.span.col}] '
        body = self.message
        if self.operation:
            body = f'{self.operation}: {body}'
        if self.snippet:
            return f'{prefix}{body}\n{self.snippet}'
        return f'{prefix}{body}'


def attach_snippet(err: GeoLispError, text: str) -> GeoLispError:
    """Point at the error column inside ``text`` with a caret line."""

    if err.span is None or err.snippet is not None:
        return err
    lines = text.splitlines()
    if not 1 <= err.span.line <= len(lines):
        return err
    line_text = lines[err.span.line - 1].rstrip()
    caret_line = ' ' * (max(err.span.col, 1) - 1) + '^'
    err.snippet = f'    {line_text}\n    {caret_line}'
    return err


class LexError(GeoLispError):
    """Raised for malformed tokens such as ``12abc``."""


class ParseError(GeoLispError):
    """Raised for unbalanced parentheses and malformed forms."""


class UnboundVariableError(GeoLispError):
    def __init__(self, name: str, **kwargs):
        super().__init__(f'unbound variable {name!r}', **kwargs)
        self.name = name


class NoMatchingOverloadError(GeoLispError):
    """Raised when no declared signature of a built-in accepts the arguments."""

    def __init__(
        self,
        function: str,
        received: Sequence[str],
        candidates: Sequence[str] = (),
        *,
        message: Optional[str] = None,
        **kwargs,
    ):
        if message is None:
            message = f"no overload of {function!r} accepts ({', '.join(received)})"
            if candidates:
                message += '; expected one of: ' + ' | '.join(candidates)
        super().__init__(message, **kwargs)
        self.function = function
        self.received = tuple(received)
        self.candidates = tuple(candidates)


class UnknownFunctionError(NoMatchingOverloadError):
    def __init__(self, function: str, received: Sequence[str] = (), **kwargs):
        super().__init__(function, received, message=f'unknown function {function!r}', **kwargs)


class InvalidGeometryError(GeoLispError):
    """Raised for degenerate input: collinear vertices, negative radius, zero-length directions."""


class NoIntersectionError(GeoLispError):
    """Raised when the requested intersection does not exist."""


class GeometryGenerationError(GeoLispError):
    """Raised when a randomized construction exhausts its retry budget."""
