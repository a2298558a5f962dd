"""Example pipeline: an inscribed angle and its triangle centres, written as TikZ."""

import numpy as np

from geolisp import RenderOptions, evaluate_source, generate_tikz_document, render_values

TEXT = """
(setq K (circle (point 0 0) 4))
(setq X (iangle K 50))
(setq T (triangle X))
K
X
(setq O (circumcenter T))
O
(circle (incenter T) (inradius T))
(triangle K)
"""


def main() -> None:
    result = evaluate_source(TEXT, rng=np.random.default_rng(123))
    diagram = render_values(result.values, RenderOptions(label=True, point_markers=True), result.names)
    print(generate_tikz_document(diagram, title="Inscribed angle"))


if __name__ == "__main__":
    main()
