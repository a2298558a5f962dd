from .lexer import tokenize
from .parser import parse_program
from .ast import Program, Atom, SList, Span
from .errors import (
    GeoLispError,
    LexError,
    ParseError,
    UnboundVariableError,
    NoMatchingOverloadError,
    UnknownFunctionError,
    InvalidGeometryError,
    NoIntersectionError,
    GeometryGenerationError,
)
from .values import Point, Lineseg, Circle, Angle, Triangle
from .config import GeometryConfig, get_geometry_config, set_geometry_config
from .interpreter import Environment, Interpreter, EvaluationResult, evaluate_program, evaluate_source
from .renderer import Diagram, RenderOptions, LinePrimitive, CirclePrimitive, TextPrimitive, render_values
from .svg import render_svg
from .printer import print_program, format_expr, format_value
from .tikz_codegen import generate_tikz_code, generate_tikz_document

__all__ = [
    'tokenize',
    'parse_program',
    'Program',
    'Atom',
    'SList',
    'Span',
    'GeoLispError',
    'LexError',
    'ParseError',
    'UnboundVariableError',
    'NoMatchingOverloadError',
    'UnknownFunctionError',
    'InvalidGeometryError',
    'NoIntersectionError',
    'GeometryGenerationError',
    'Point',
    'Lineseg',
    'Circle',
    'Angle',
    'Triangle',
    'GeometryConfig',
    'get_geometry_config',
    'set_geometry_config',
    'Environment',
    'Interpreter',
    'EvaluationResult',
    'evaluate_program',
    'evaluate_source',
    'Diagram',
    'RenderOptions',
    'LinePrimitive',
    'CirclePrimitive',
    'TextPrimitive',
    'render_values',
    'render_svg',
    'print_program',
    'format_expr',
    'format_value',
    'generate_tikz_code',
    'generate_tikz_document',
]
