from __future__ import annotations

import logging
import math
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Any

from gnuexplore.kinds import SeriesKind
from gnuexplore.settings import OutputSettings, settings_from_env

if TYPE_CHECKING:
    from gnuexplore.series import Series

LOGGER = logging.getLogger(__name__)

DATA_SUFFIX = ".txt"
# gnuplot treats two consecutive blank lines as the end of an `index` block.
BLOCK_SEPARATOR = "\n\n"


def format_number(value: float) -> str:
    value = float(value)
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    return repr(value)


def child_identifier(identifier: Any, index: int) -> str:
    return f"{identifier}_{index}"


def data_reference(identifier: Any, settings: OutputSettings | None = None) -> str:
    """Path of a data file as written inside a script, relative to the output root."""
    cfg = settings or settings_from_env()
    return str(PurePosixPath(cfg.data_dir) / f"{identifier}{DATA_SUFFIX}")


def data_path(identifier: Any, settings: OutputSettings | None = None) -> Path:
    cfg = settings or settings_from_env()
    return cfg.root / data_reference(identifier, cfg)


def data_text(series: "Series") -> str:
    lines: list[str] = []
    if series.kind is SeriesKind.SEQUENCE:
        for index, value in enumerate(series.values.tolist()):
            lines.append(f"{index}\t{format_number(value)}\n")
    elif series.kind is SeriesKind.PROCESS:
        for x, y in zip(series.times.tolist(), series.values.tolist()):
            lines.append(f"{format_number(x)}\t{format_number(y)}\n")
    elif series.kind is SeriesKind.DISTRIBUTION:
        for value in series.realizations.tolist():
            lines.append(f"{format_number(value)}\n")
    elif series.kind is SeriesKind.SEQUENCE_BIN:
        for group_index, group in enumerate(series.groups):
            for value in group.tolist():
                lines.append(f"{group_index}\t{format_number(value)}\n")
            lines.append(BLOCK_SEPARATOR)
    elif series.kind is SeriesKind.DATA:
        for record in series.records.tolist():
            lines.append("\t".join(format_number(value) for value in record) + "\n")
    else:
        raise ValueError(f"unsupported series kind: {series.kind!r}")
    return "".join(lines)


def write_data(series: "Series", identifier: Any, *, settings: OutputSettings | None = None) -> Path:
    cfg = settings or settings_from_env()
    path = data_path(identifier, cfg)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(data_text(series), encoding="utf-8")
    LOGGER.debug("wrote %s data for %s to %s", series.kind.value, identifier, path)
    return path
