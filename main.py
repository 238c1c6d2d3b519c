from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence as SequenceType

from gnuexplore import Data, Distribution, PlotDataError, Process, Sequence, SequenceBin, Series
from gnuexplore.render import launch
from gnuexplore.settings import resolve_settings, settings_from_env


def main(argv: SequenceType[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="gnuexplore")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="WARNING")
    parser.add_argument("--root", type=Path, default=None, help="Output root holding data/ and plots/.")
    parser.add_argument("--gnuplot", default=None, help="gnuplot executable. Default: $GNUEXPLORE_GNUPLOT or gnuplot.")
    sub = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("sequence", "Plot whitespace separated values against their index."),
        ("process", "Plot two columns per line as (x, y) pairs."),
        ("distribution", "Plot a normalized histogram of whitespace separated values."),
        ("bins", "Plot one violin per input line."),
        ("data", "Plot one record per input line; a second column is drawn as error."),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("input", type=Path)
        cmd.add_argument("--id", dest="identifier", required=True)
        cmd.add_argument("--title", default=None)
        cmd.add_argument("--labelx", default=None)
        cmd.add_argument("--labely", default=None)
        cmd.add_argument("--logx", type=float, default=None)
        cmd.add_argument("--logy", type=float, default=None)
        cmd.add_argument("--style", default=None)
        cmd.add_argument("--later", action="store_true", help="Write data and script without launching gnuplot.")

    render = sub.add_parser("render", help="Launch gnuplot on an existing script.")
    render.add_argument("script", type=Path)
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    env_settings = settings_from_env()
    settings = resolve_settings(
        {
            "root": args.root if args.root is not None else env_settings.root,
            "data_dir": env_settings.data_dir,
            "plots_dir": env_settings.plots_dir,
            "executable": args.gnuplot if args.gnuplot is not None else env_settings.executable,
        }
    )

    if args.command == "render":
        launch(args.script, settings=settings)
        return

    series = _read_series(args.command, args.input)
    _apply_options(series, args)
    if args.later:
        script_path = series.plot_later(args.identifier, settings=settings)
        print(f"wrote {script_path}")
        return
    series.plot(args.identifier, settings=settings)


def _read_series(command: str, path: Path) -> Series:
    rows = [line.split() for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]
    if command == "sequence":
        return Sequence([value for row in rows for value in row])
    if command == "distribution":
        return Distribution([value for row in rows for value in row])
    if command == "process":
        if any(len(row) != 2 for row in rows):
            raise PlotDataError("process input needs exactly two columns per line")
        return Process([row[0] for row in rows], [row[1] for row in rows])
    if command == "bins":
        return SequenceBin(rows)
    if command == "data":
        widths = {len(row) for row in rows}
        if len(widths) != 1:
            raise PlotDataError("data input needs the same number of columns on every line")
        return Data([value for row in rows for value in row], dim=widths.pop())
    raise RuntimeError(f"unsupported command: {command}")


def _apply_options(series: Series, args: argparse.Namespace) -> None:
    if args.title is not None:
        series.set_title(args.title)
    if args.labelx is not None:
        series.set_labelx(args.labelx)
    if args.labely is not None:
        series.set_labely(args.labely)
    if args.logx is not None:
        series.set_logx(args.logx)
    if args.logy is not None:
        series.set_logy(args.logy)
    if args.style is not None:
        series.set_style(args.style)


if __name__ == "__main__":
    main()
