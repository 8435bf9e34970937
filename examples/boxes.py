from __future__ import annotations

import argparse
import logging
from pathlib import Path

from plotpipe import Figure, boxes, resolve_backend_config


def build_figures() -> tuple[Figure, Figure]:
    config = resolve_backend_config()

    xdata = [0, 1, 2, 3, 4]
    ydata = [5.0, 6.5, 7.8, 6.0, 7.0]
    x2data = [3, 4, 5, 7, 8]
    y2data = [3.0, 6.5, 9.8, 10.0, 2.0]

    fig = Figure("Boxes", config=config)
    fig.add(boxes(ydata, x=xdata, label="boxes1"))
    fig.add(boxes(y2data, x=x2data, label="boxes2", relative_box_width=False))

    fig2 = Figure("Boxes with text", config=config)
    fig2.set_xtics(["house", "bottel", "basket", "number", "apple"])
    fig2.add(boxes(ydata, label="boxes with names"))
    return fig, fig2


def main() -> None:
    parser = argparse.ArgumentParser(prog="boxes")
    parser.add_argument("--out-dir", default=".", help="directory for the generated scripts")
    parser.add_argument("--show", action="store_true", help="also open the figures in gnuplot")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    fig, fig2 = build_figures()
    with fig, fig2:
        fig.save(str(out_dir / "script.gp"))
        fig2.save(str(out_dir / "script_with_text.gp"))
        if args.show:
            fig.show()
            fig2.show()


if __name__ == "__main__":
    main()
