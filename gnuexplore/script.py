from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Union

from gnuexplore.configuration import Configuration, Style
from gnuexplore.errors import PlotDataError
from gnuexplore.kinds import SeriesKind
from gnuexplore.persistence import child_identifier, data_reference, format_number
from gnuexplore.settings import OutputSettings, settings_from_env
from gnuexplore.stats import KDENSITY_WIDENING, group_offsets, histogram_stats

if TYPE_CHECKING:
    from gnuexplore.comparison import Comparison
    from gnuexplore.series import Series

    Plotable = Union[Series, Comparison]

LOGGER = logging.getLogger(__name__)

SCRIPT_SUFFIX = ".gnu"
PAUSE_LINE = "pause -1"
DEFAULT_STYLE = Style.LINES
ERROR_STYLES = (Style.YERROR_BARS, Style.YERROR_LINES)
VIOLIN_TABLE_SUFFIX = "_partial_%d"


@dataclass(frozen=True)
class PlotEntry:
    """One series as it appears in a script: where its data lives and how it is labelled."""

    series: "Series"
    identifier: str
    data_ref: str
    position: int

    @property
    def legend(self) -> str:
        title = self.series.configuration.title
        return title if title is not None else str(self.position)


def script_path(identifier: Any, settings: OutputSettings | None = None) -> Path:
    cfg = settings or settings_from_env()
    return cfg.plots_root / f"{identifier}{SCRIPT_SUFFIX}"


def render(target: "Plotable", identifier: Any, *, settings: OutputSettings | None = None) -> str:
    """Gnuplot script for a series or a comparison; pure and deterministic."""
    cfg = settings or settings_from_env()
    frame, entries = _collect_entries(target, identifier, cfg)
    kind = entries[0].series.kind

    lines = preamble(frame)
    if kind in (SeriesKind.SEQUENCE, SeriesKind.PROCESS, SeriesKind.DATA):
        clauses = [_line_clause(entry, frame) for entry in entries]
        lines.append("plot " + ", ".join(clauses))
    elif kind is SeriesKind.DISTRIBUTION:
        clauses = []
        for entry in entries:
            lines.extend(_histogram_definitions(entry))
            clauses.append(_histogram_clause(entry))
        lines.append("plot " + ", ".join(clauses))
    elif kind is SeriesKind.SEQUENCE_BIN:
        lines.extend(_violin_lines(entries, standalone=not _is_comparison(target)))
    else:
        raise ValueError(f"unsupported series kind: {kind!r}")
    lines.append(PAUSE_LINE)
    return "\n".join(lines) + "\n"


def write_script(target: "Plotable", identifier: Any, *, settings: OutputSettings | None = None) -> Path:
    cfg = settings or settings_from_env()
    text = render(target, identifier, settings=cfg)
    path = script_path(identifier, cfg)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    LOGGER.debug("wrote gnuplot script for %s to %s", identifier, path)
    return path


def preamble(configuration: Configuration) -> list[str]:
    lines = ["set key"]
    if configuration.title is not None:
        lines.append(f"set title {quote(configuration.title)}")
    if configuration.labelx is not None:
        lines.append(f"set xlabel {quote(configuration.labelx)}")
    if configuration.labely is not None:
        lines.append(f"set ylabel {quote(configuration.labely)}")
    for axis, base in (("x", configuration.logx), ("y", configuration.logy)):
        if base is None:
            continue
        if base <= 0.0:
            lines.append(f"set logscale {axis}")
        else:
            # NaN fails the comparison above and is passed on for gnuplot to reject.
            lines.append(f"set logscale {axis} {format_number(base)}")
    return lines


def quote(text: str) -> str:
    escaped = str(text).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _is_comparison(target: "Plotable") -> bool:
    from gnuexplore.comparison import Comparison

    return isinstance(target, Comparison)


def _collect_entries(
    target: "Plotable",
    identifier: Any,
    settings: OutputSettings,
) -> tuple[Configuration, list[PlotEntry]]:
    if not _is_comparison(target):
        name = str(identifier)
        entry = PlotEntry(series=target, identifier=name, data_ref=data_reference(name, settings), position=0)
        return target.configuration, [entry]

    if not target.children:
        raise PlotDataError("cannot render an empty comparison")
    entries = []
    for position, child in enumerate(target.children):
        name = child_identifier(identifier, position)
        entries.append(
            PlotEntry(series=child, identifier=name, data_ref=data_reference(name, settings), position=position)
        )
    return target.configuration, entries


def _line_clause(entry: PlotEntry, frame: Configuration) -> str:
    own = entry.series.configuration
    style = own.style or frame.style or _default_style(entry.series)
    dashtype = own.dashtype if own.dashtype is not None else frame.dashtype

    clause = f"{quote(entry.data_ref)} using {_columns(entry.series, style)} with {style.value}"
    if dashtype is not None:
        clause += f" dashtype {dashtype}"
    return clause + f" title {quote(entry.legend)}"


def _default_style(series: "Series") -> Style:
    if series.kind is SeriesKind.DATA and series.dim >= 2:
        return Style.YERROR_LINES
    return DEFAULT_STYLE


def _columns(series: "Series", style: Style) -> str:
    if series.kind is not SeriesKind.DATA:
        return "1:2"
    # Records are plotted against their row number (gnuplot column 0);
    # the second column is the error of the first one.
    if style in ERROR_STYLES and series.dim >= 2:
        return "0:1:2"
    return "0:1"


def _histogram_definitions(entry: PlotEntry) -> list[str]:
    stats = histogram_stats(entry.series.realizations)
    i = entry.position
    return [
        f"nbins_{i} = {stats.bins}.0 #number of bins",
        f"max_{i} = {float(stats.maximum)!r} #max value",
        f"min_{i} = {float(stats.minimum)!r} #min value",
        f"len_{i} = {stats.count}.0 #number of values",
        f"width_{i} = {float(stats.width)!r} #width",
        "",
        "#function used to map a value to the intervals",
        f"hist_{i}(x) = width_{i} * floor(x/width_{i}) + width_{i} / 2.0",
        "",
    ]


def _histogram_clause(entry: PlotEntry) -> str:
    i = entry.position
    return (
        f"{quote(entry.data_ref)} using (hist_{i}($1)):(1.0/len_{i}) "
        f"smooth frequency with steps title {quote(entry.legend)}"
    )


def _violin_table(entry: PlotEntry) -> str:
    # Format string for sprintf(); one table per group next to the series data.
    # Data files always end in ".txt", so these names never collide with them.
    return entry.data_ref + VIOLIN_TABLE_SUFFIX


def _violin_lines(entries: list[PlotEntry], *, standalone: bool) -> list[str]:
    offsets = group_offsets([len(entry.series) for entry in entries])

    lines = ["renormalize = 2"]
    for entry in entries:
        data = quote(entry.data_ref)
        lines.extend(
            [
                f"do for [i=0:{len(entry.series) - 1}] {{",
                "    # First pass: natural range, only to find the peak density",
                "    set table $kdensity_scratch",
                f"    plot {data} index i using 2:(1) smooth kdensity",
                "    unset table",
                "    renormalize = (renormalize < 2 * GPVAL_Y_MAX) ? 2 * GPVAL_Y_MAX : renormalize",
                "    # Second pass: widened range, kept for the final plot",
                f"    x_min = GPVAL_X_MIN - {KDENSITY_WIDENING} * GPVAL_KDENSITY_BANDWIDTH",
                f"    x_max = GPVAL_X_MAX + {KDENSITY_WIDENING} * GPVAL_KDENSITY_BANDWIDTH",
                f"    set table sprintf({quote(_violin_table(entry))}, i)",
                "    set xrange [x_min:x_max]",
                f"    plot {data} index i using 2:(1) smooth kdensity",
                "    unset table",
                "    unset xrange",
                "    unset yrange",
                "}",
            ]
        )
    lines.append("")

    right: list[str] = []
    left: list[str] = []
    for entry, offset in zip(entries, offsets):
        last = offset + len(entry.series) - 1
        group = "i" if offset == 0 else f"i - {offset}"
        table = f"sprintf({quote(_violin_table(entry))}, {group})"
        if standalone:
            color = "i"
            title = "notitle"
        else:
            color = str(entry.position + 1)
            title = f"title (i == {offset} ? {quote(entry.legend)} : \"\")"
        right.append(
            f"for [i={offset}:{last}] {table} using (i + $2/renormalize):1 "
            f"with filledcurve x=i linecolor {color} {title}"
        )
        left.append(
            f"for [i={offset}:{last}] {table} using (i - $2/renormalize):1 "
            f"with filledcurve x=i linecolor {color} notitle"
        )
    lines.append("# Right half of every violin")
    lines.append("plot " + ", ".join(right))
    lines.append("# Left half of every violin")
    lines.append("replot " + ", ".join(left))
    return lines
