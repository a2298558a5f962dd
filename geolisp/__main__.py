import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import numpy as np

from geolisp import (
    GeoLispError,
    RenderOptions,
    evaluate_program,
    format_value,
    generate_tikz_document,
    parse_program,
    render_svg,
    render_values,
)
from geolisp.errors import attach_snippet

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = {
    "svg": "output.svg",
    "tikz": "output.tex",
}


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render geolisp construction programs")
    parser.add_argument("path", help="Path to the geolisp source file")
    parser.add_argument(
        "--label",
        action="store_true",
        help="Label points, triangle vertices and angle measures",
    )
    parser.add_argument(
        "--point-markers",
        action="store_true",
        help="Draw a dot under every labelled point",
    )
    parser.add_argument(
        "--format",
        choices=sorted(DEFAULT_OUTPUT),
        default="svg",
        help="Output format (default: svg)",
    )
    parser.add_argument(
        "--output",
        help="Output file (default: output.svg, or output.tex for --format tikz)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for randomized constructions such as (triangle circle)",
    )
    parser.add_argument(
        "--scale",
        type=float,
        default=20.0,
        help="Canvas units per geometric unit for SVG output (default: 20)",
    )
    parser.add_argument(
        "--preview-png",
        help="Also write a matplotlib PNG preview to the given path",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.log_level)

    try:
        with open(args.path, encoding="utf-8") as fin:
            text = fin.read()
    except (OSError, UnicodeDecodeError) as err:
        logger.error("Cannot read program %s: %s", args.path, err)
        return 1

    options = RenderOptions(label=args.label, point_markers=args.point_markers, scale=args.scale)
    rng = np.random.default_rng(args.seed)

    logger.info("Parsing program from %s", args.path)
    try:
        program = parse_program(text)
        result = evaluate_program(program, rng=rng)
    except GeoLispError as err:
        attach_snippet(err, text)
        logger.error("%s: %s", type(err).__name__, err)
        return 1

    for idx, value in enumerate(result.values):
        logger.info("Visible value %d: %s", idx, format_value(value))

    diagram = render_values(result.values, options, result.names)
    if args.format == "tikz":
        output = generate_tikz_document(diagram, title=Path(args.path).name)
    else:
        output = render_svg(diagram, options)

    print(output, end="")
    output_path = Path(args.output or DEFAULT_OUTPUT[args.format])
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(output, encoding="utf-8")
    logger.info("Wrote %s output to %s", args.format, output_path)

    if args.preview_png:
        from geolisp.preview import render_preview

        render_preview(diagram, args.preview_png, options, title=Path(args.path).name)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
