"""Evaluation of parsed geolisp programs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

import numpy as np

from .ast import Atom, Expr, Program, SList
from .builtins import CallContext, call_builtin, make_context
from .config import GeometryConfig
from .errors import GeoLispError, UnboundVariableError, attach_snippet
from .parser import parse_program
from .printer import format_value
from .values import Point, Value

logger = logging.getLogger(__name__)


class Environment:
    """Name -> value bindings for one program run."""

    def __init__(self) -> None:
        self._vars: Dict[str, Value] = {}

    def bind(self, name: str, value: Value) -> None:
        if name in self._vars:
            logger.debug("rebinding %s", name)
        self._vars[name] = value

    def lookup(self, name: str) -> Value:
        try:
            return self._vars[name]
        except KeyError:
            raise UnboundVariableError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._vars

    def __iter__(self) -> Iterator[str]:
        return iter(self._vars)

    def __len__(self) -> int:
        return len(self._vars)

    def items(self):
        return self._vars.items()

    def point_names(self) -> Dict[Point, str]:
        """Map every bound point to the first name (in binding order) that holds it."""
        names: Dict[Point, str] = {}
        for name, value in self._vars.items():
            if isinstance(value, Point) and value not in names:
                names[value] = name
        return names


@dataclass
class EvaluationResult:
    values: List[Value] = field(default_factory=list)
    names: Dict[Point, str] = field(default_factory=dict)


class Interpreter:
    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        config: Optional[GeometryConfig] = None,
    ) -> None:
        self.ctx: CallContext = make_context(rng, config)

    def eval_expr(self, expr: Expr, env: Environment) -> Value:
        if isinstance(expr, Atom):
            if expr.kind == 'NUMBER':
                return expr.value
            try:
                return env.lookup(expr.value)
            except GeoLispError as err:
                err.span = err.span or expr.span
                raise
        args = [self.eval_expr(arg, env) for arg in expr.args]
        try:
            return call_builtin(expr.head, args, self.ctx)
        except GeoLispError as err:
            if err.span is None:
                err.span = expr.span
                err.operation = err.operation or expr.head
            raise

    def run(self, program: Program) -> EvaluationResult:
        env = Environment()
        visible: List[Value] = []
        for form in program.forms:
            if isinstance(form, SList) and form.is_setq:
                name_atom, value_expr = form.args
                value = self.eval_expr(value_expr, env)
                env.bind(name_atom.value, value)
                logger.debug("setq %s = %s", name_atom.value, format_value(value))
                continue
            value = self.eval_expr(form, env)
            logger.debug("visible value #%d: %s", len(visible), format_value(value))
            visible.append(value)
        logger.info(
            "Evaluated %d form(s): %d visible value(s), %d binding(s)",
            len(program.forms),
            len(visible),
            len(env),
        )
        return EvaluationResult(values=visible, names=env.point_names())


def evaluate_program(
    program: Program,
    rng: Optional[np.random.Generator] = None,
    config: Optional[GeometryConfig] = None,
) -> EvaluationResult:
    return Interpreter(rng=rng, config=config).run(program)


def evaluate_source(
    text: str,
    rng: Optional[np.random.Generator] = None,
    config: Optional[GeometryConfig] = None,
) -> EvaluationResult:
    """Parse and evaluate ``text``; errors carry a caret snippet of the offending line."""

    program = parse_program(text)
    try:
        return evaluate_program(program, rng=rng, config=config)
    except GeoLispError as err:
        raise attach_snippet(err, text)
