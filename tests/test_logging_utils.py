import logging

import numpy as np
import pytest

from geolisp import geometry
from geolisp.errors import NoIntersectionError
from geolisp.logging_utils import apply_debug_logging, debug_log_call, describe
from geolisp.values import Lineseg, Point, Triangle


def test_geometry_functions_are_traced(caplog):
    tri = Triangle(Point(0, 0), Point(0, 3), Point(4, 0))
    with caplog.at_level(logging.DEBUG, logger="geolisp.geometry"):
        geometry.circumcenter(tri)
    messages = [r.getMessage() for r in caplog.records if r.name == "geolisp.geometry"]
    assert messages == [
        "circumcenter(Triangle[(0.0, 0.0), (0.0, 3.0), (4.0, 0.0)]) -> Point(2.0, 1.5)",
    ]


def test_traced_errors_are_logged_and_reraised(caplog):
    first = Lineseg(Point(0, 0), Point(1, 0))
    second = Lineseg(Point(0, 1), Point(1, 1))
    with caplog.at_level(logging.DEBUG, logger="geolisp.geometry"):
        with pytest.raises(NoIntersectionError):
            geometry.intersect_lines(first, second)
    assert "raised NoIntersectionError" in caplog.records[-1].getMessage()


def test_tracing_is_silent_above_debug(caplog):
    with caplog.at_level(logging.INFO, logger="geolisp.geometry"):
        geometry.midpoint(Point(0, 0), Point(2, 2))
    assert not [r for r in caplog.records if r.name == "geolisp.geometry"]


def test_describe():
    assert describe(Point(1, 2)) == "Point(1.0, 2.0)"
    assert describe(np.array([1.0, 2.5])) == "array(1, 2.5)"
    assert describe(np.zeros((3, 3))) == "array<3x3, float64>"
    assert describe((1, 2, 3, 4, 5)) == "(1, 2, 3, 4, ...)"
    assert describe(np.random.default_rng(0)) == "<rng>"


def test_apply_debug_logging_wraps_public_functions_once():
    logger = logging.getLogger("test.tracing")

    def visible(x):
        return x + 1

    def _hidden(x):
        return x

    visible.__module__ = "fake_module"
    _hidden.__module__ = "fake_module"
    namespace = {"__name__": "fake_module", "visible": visible, "_hidden": _hidden}
    apply_debug_logging(namespace, logger=logger)
    wrapped = namespace["visible"]
    assert wrapped is not visible and wrapped(1) == 2
    assert namespace["_hidden"] is _hidden
    assert debug_log_call(logger)(wrapped) is wrapped
