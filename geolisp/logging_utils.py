"""DEBUG call tracing for the geometry engine.

A traced call logs one line on return, e.g.::

    DEBUG:geolisp.geometry:circumcenter(Triangle[(0.0, 0.0), ...]) -> Point(2.0, 1.5)

and one line when it raises.  Arguments are shown with
:func:`geolisp.printer.format_value` where possible.
"""

from __future__ import annotations

import inspect
import logging
import reprlib
from functools import wraps
from typing import Any, Callable, Iterable, Mapping, MutableMapping, Optional, Sequence, TypeVar, cast

import numpy as np

F = TypeVar("F", bound=Callable[..., Any])

_TRACED_ATTR = "_geolisp_traced"

_repr = reprlib.Repr()
_repr.maxother = 120
_repr.maxlist = 6
_repr.maxtuple = 6


def describe(value: Any, *, max_items: int = 4, max_length: int = 300) -> str:
    """Short human readable rendering of an argument or a result."""

    from .printer import format_value
    from .values import Angle, Circle, Lineseg, Point, Triangle

    if isinstance(value, (Point, Lineseg, Circle, Angle, Triangle)):
        text = format_value(value)
    elif isinstance(value, np.ndarray):
        if value.size <= max_items:
            text = "array(" + ", ".join(f"{v:g}" for v in value.ravel().tolist()) + ")"
        else:
            text = f"array<{'x'.join(str(n) for n in value.shape)}, {value.dtype}>"
    elif isinstance(value, tuple) and value:
        shown = [describe(item) for item in value[:max_items]]
        if len(value) > max_items:
            shown.append("...")
        text = "(" + ", ".join(shown) + ")"
    elif hasattr(value, "uniform") and hasattr(value, "bit_generator"):
        text = "<rng>"
    else:
        text = _repr.repr(value)
    if len(text) > max_length:
        text = text[:max_length] + "..."
    return text


def _call_signature(name: str, args: Sequence[Any], kwargs: Mapping[str, Any]) -> str:
    rendered = [describe(arg) for arg in args]
    rendered += [f"{key}={describe(value)}" for key, value in kwargs.items() if value is not None]
    return f"{name}({', '.join(rendered)})"


def debug_log_call(
    logger: logging.Logger, *, name: Optional[str] = None, log_result: bool = True
) -> Callable[[F], F]:
    """Decorator tracing each call of the wrapped function at DEBUG level."""

    def decorator(func: F) -> F:
        if getattr(func, _TRACED_ATTR, False):
            return func
        label = name or func.__name__

        @wraps(func)
        def traced(*args: Any, **kwargs: Any):
            if not logger.isEnabledFor(logging.DEBUG):
                return func(*args, **kwargs)
            call = _call_signature(label, args, kwargs)
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                logger.debug("%s raised %s: %s", call, type(exc).__name__, exc)
                raise
            logger.debug("%s -> %s", call, describe(result) if log_result else "done")
            return result

        setattr(traced, _TRACED_ATTR, True)
        return cast(F, traced)

    return decorator


def apply_debug_logging(
    namespace: MutableMapping[str, Any],
    *,
    logger: Optional[logging.Logger] = None,
    skip: Optional[Iterable[str]] = None,
) -> None:
    """Trace every public function defined in the module owning ``namespace``."""

    module_name = namespace["__name__"]
    logger = logger or logging.getLogger(module_name)
    skipped = set(skip or ())
    public = [
        name
        for name, value in namespace.items()
        if not name.startswith("_")
        and name not in skipped
        and inspect.isfunction(value)
        and value.__module__ == module_name
    ]
    for name in public:
        namespace[name] = debug_log_call(logger, name=name)(namespace[name])
