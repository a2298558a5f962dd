from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Optional

import numpy as np
import pytest

import geolisp.errors
from geolisp import GeoLispError, RenderOptions, evaluate_source, render_svg, render_values

DATA_DIR = Path(__file__).resolve().parent / "scenes"


@dataclass
class SceneCase:
    case_id: str
    source: str
    seed: int = 0
    label: bool = False
    point_markers: bool = False
    expected_counts: Optional[Dict[str, int]] = None
    expect_error: Optional[str] = None


def _load_case_overrides(path: Path) -> Dict[str, object]:
    overrides_path = path.with_suffix(".json")
    if overrides_path.exists():
        with overrides_path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
            if not isinstance(data, dict):
                raise ValueError(f"Overrides for {path.name} must be a JSON object")
            return data
    return {}


def _iter_cases() -> Iterable[SceneCase]:
    for scene_path in sorted(DATA_DIR.glob("*.gl")):
        overrides = _load_case_overrides(scene_path)
        counts = {key: int(overrides[key]) for key in ("lines", "circles", "texts") if key in overrides}
        yield SceneCase(
            case_id=scene_path.stem,
            source=scene_path.read_text(encoding="utf-8"),
            seed=int(overrides.get("seed", 0)),
            label=bool(overrides.get("label", False)),
            point_markers=bool(overrides.get("point_markers", False)),
            expected_counts=counts or None,
            expect_error=overrides.get("expect_error"),
        )


@pytest.mark.parametrize("case", list(_iter_cases()), ids=lambda case: case.case_id)
def test_scene_renders(case: SceneCase, tmp_path: Path) -> None:
    rng = np.random.default_rng(case.seed)

    if case.expect_error is not None:
        error_type = getattr(geolisp.errors, case.expect_error)
        with pytest.raises(error_type) as excinfo:
            evaluate_source(case.source, rng=rng)
        assert isinstance(excinfo.value, GeoLispError)
        assert excinfo.value.snippet, f"{case.case_id} error has no source pointer"
        return

    result = evaluate_source(case.source, rng=rng)
    options = RenderOptions(label=case.label, point_markers=case.point_markers)
    diagram = render_values(result.values, options, result.names)

    counts = {
        "lines": len(diagram.lines),
        "circles": len(diagram.circles),
        "texts": len(diagram.texts),
    }
    for key, expected in (case.expected_counts or {}).items():
        assert counts[key] == expected, f"{case.case_id}: expected {expected} {key}, got {counts[key]}"

    svg = render_svg(diagram, options)
    assert svg.count("<line ") == counts["lines"]
    assert svg.count("<circle ") == counts["circles"]
    assert svg.count("<text ") == counts["texts"]
    (tmp_path / f"{case.case_id}.svg").write_text(svg, encoding="utf-8")
