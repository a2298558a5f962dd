import pytest

from geolisp.ast import Atom, SList
from geolisp.errors import ParseError
from geolisp.parser import parse_program


def test_program_with_bindings_and_bare_atom():
    prog = parse_program("(setq A (point 0 0))\nA\n")
    assert len(prog.forms) == 2
    setq, bare = prog.forms
    assert isinstance(setq, SList) and setq.is_setq
    assert setq.head == 'setq'
    assert isinstance(setq.args[1], SList) and setq.args[1].head == 'point'
    assert isinstance(bare, Atom) and bare.is_identifier and bare.value == 'A'
    assert prog.visible_forms == [bare]


def test_numbers_are_converted():
    prog = parse_program("(point -1 2.5)")
    call = prog.forms[0]
    assert [arg.value for arg in call.args] == [-1, 2.5]
    assert isinstance(call.args[0].value, int)


def test_multiple_forms_on_one_line():
    prog = parse_program("(circle) (circle (point 1 1) 2) 7")
    assert [type(form).__name__ for form in prog.forms] == ['SList', 'SList', 'Atom']


def test_spans_point_at_open_paren():
    prog = parse_program("\n  (lineseg (point 0 0) (point 1 1))")
    call = prog.forms[0]
    assert (call.span.line, call.span.col) == (2, 3)
    assert (call.args[1].span.line, call.args[1].span.col) == (2, 24)


def test_deep_nesting_does_not_recurse():
    depth = 5000
    text = "(f " * depth + "1" + ")" * depth
    prog = parse_program(text)
    node = prog.forms[0]
    for _ in range(depth - 1):
        node = node.args[0]
    assert node.args[0].value == 1


@pytest.mark.parametrize(
    "text, fragment",
    [
        ("(point 1 2", "missing ')'"),
        ("(point (point 1 2) 3", "missing ')'"),
        (")", "unmatched ')'"),
        ("(circle))", "unmatched ')'"),
        ("()", "empty form"),
        ("(1 2)", "procedure name"),
        ("((point 1 2))", "procedure name"),
        ("(setq A)", "setq expects a name and a value"),
        ("(setq A (point 0 0) 3)", "setq expects a name and a value"),
        ("(setq 1 (point 0 0))", "setq target must be an identifier"),
        ("(setq (point 0 0) 1)", "setq target must be an identifier"),
        ("(point (setq A 1) 2)", "only allowed at top level"),
    ],
)
def test_parse_errors(text, fragment):
    with pytest.raises(ParseError) as excinfo:
        parse_program(text)
    assert fragment in str(excinfo.value)


def test_parse_error_reports_column_pointer():
    text = "(circle)\n(circle (point 0 0) 5))"
    with pytest.raises(ParseError) as excinfo:
        parse_program(text)
    lines = str(excinfo.value).splitlines()
    assert lines[0].startswith("[line 2, col 23]")
    assert lines[-1] == "    " + " " * 22 + "^"
