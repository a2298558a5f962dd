"""Example pipeline: evaluate a geolisp program and render it as SVG."""

from geolisp import RenderOptions, evaluate_source, format_value, render_svg, render_values

TEXT = """
(setq A (point 0 0))
(setq B (point 0 3))
(setq C (point 4 0))
(triangle A B C)
"""


def main() -> None:
    result = evaluate_source(TEXT)
    for value in result.values:
        print(format_value(value))
    options = RenderOptions(label=True)
    print(render_svg(render_values(result.values, options, result.names), options), end="")


if __name__ == "__main__":
    main()
