from typing import Union

from .ast import Atom, Expr, Program, SList
from .values import Angle, Circle, Lineseg, Point, Triangle, is_number


def format_number(value: Union[int, float]) -> str:
    if isinstance(value, int):
        return str(value)
    if float(value).is_integer():
        return f"{value:.1f}"
    return f"{value:.6g}"


def format_expr(expr: Expr) -> str:
    if isinstance(expr, Atom):
        if expr.kind == 'NUMBER':
            return format_number(expr.value)
        return str(expr.value)
    if isinstance(expr, SList):
        return "(" + " ".join(format_expr(item) for item in expr.items) + ")"
    raise ValueError(f"invalid expression {expr!r}")


def print_program(prog: Program) -> str:
    return "\n".join(format_expr(form) for form in prog.forms)


def _pt(p: Point) -> str:
    return f"({format_number(p.x)}, {format_number(p.y)})"


def format_value(value: object) -> str:
    if is_number(value):
        return format_number(value)
    if isinstance(value, Point):
        return f"Point{_pt(value)}"
    if isinstance(value, Lineseg):
        return f"Lineseg[{_pt(value.start)} -> {_pt(value.end)}]"
    if isinstance(value, Circle):
        return f"Circle[center={_pt(value.center)}, r={format_number(value.radius)}]"
    if isinstance(value, Angle):
        return (
            f"Angle[{_pt(value.start)}, vertex={_pt(value.vertex)}, {_pt(value.end)}; "
            f"{value.measure:.4g} deg]"
        )
    if isinstance(value, Triangle):
        return f"Triangle[{_pt(value.a)}, {_pt(value.b)}, {_pt(value.c)}]"
    raise ValueError(f"invalid value {value!r}")
