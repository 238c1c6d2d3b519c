from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
import subprocess
from typing import TYPE_CHECKING, Any, ClassVar, Iterable

import numpy as np

from gnuexplore import persistence, render, script
from gnuexplore.adapters import normalize_groups, normalize_pair, normalize_records, normalize_values
from gnuexplore.configuration import Configurable, Configuration
from gnuexplore.kinds import SeriesKind
from gnuexplore.settings import OutputSettings, settings_from_env

if TYPE_CHECKING:
    from gnuexplore.comparison import Comparison


class Series(Configurable, ABC):
    """One self-contained unit of numeric data plus its display options."""

    kind: ClassVar[SeriesKind]

    def __init__(self) -> None:
        self.configuration = Configuration()

    @abstractmethod
    def __len__(self) -> int:
        raise NotImplementedError

    def compare_with(self, others: Iterable["Series"]) -> "Comparison":
        from gnuexplore.comparison import Comparison

        return Comparison([self, *others])

    def render(self, identifier: Any, *, settings: OutputSettings | None = None) -> str:
        return script.render(self, identifier, settings=settings)

    def save(self, identifier: Any, *, settings: OutputSettings | None = None) -> Path:
        """Write only the data file under ``data/``."""
        return persistence.write_data(self, identifier, settings=settings)

    def write_plot_script(self, identifier: Any, *, settings: OutputSettings | None = None) -> Path:
        return script.write_script(self, identifier, settings=settings)

    def plot_later(self, identifier: Any, *, settings: OutputSettings | None = None) -> Path:
        """Write script and data without launching gnuplot; returns the script path."""
        cfg = settings or settings_from_env()
        script_path = self.write_plot_script(identifier, settings=cfg)
        self.save(identifier, settings=cfg)
        return script_path

    def plot(self, identifier: Any, *, settings: OutputSettings | None = None) -> subprocess.Popen[bytes]:
        cfg = settings or settings_from_env()
        script_path = self.plot_later(identifier, settings=cfg)
        return render.launch(script_path, settings=cfg)


class Sequence(Series):
    kind = SeriesKind.SEQUENCE

    def __init__(self, values: Any) -> None:
        super().__init__()
        self.values = normalize_values(values, label="sequence")

    def __len__(self) -> int:
        return int(self.values.size)


class Process(Series):
    """Values observed at explicit times (or any paired x coordinate)."""

    kind = SeriesKind.PROCESS

    def __init__(self, times: Any, values: Any) -> None:
        super().__init__()
        self.times, self.values = normalize_pair(times, values)

    def __len__(self) -> int:
        return int(self.values.size)


class Distribution(Series):
    kind = SeriesKind.DISTRIBUTION

    def __init__(self, realizations: Any) -> None:
        super().__init__()
        self.realizations = normalize_values(realizations, label="distribution")

    def __len__(self) -> int:
        return int(self.realizations.size)


class SequenceBin(Series):
    """Ordered groups of values, drawn as one violin per group."""

    kind = SeriesKind.SEQUENCE_BIN

    def __init__(self, groups: Any) -> None:
        super().__init__()
        self.groups: tuple[np.ndarray, ...] = normalize_groups(groups)

    def __len__(self) -> int:
        return len(self.groups)


class Data(Series):
    """Multi-column records read from a flat stream, ``dim`` values per record.

    With two or more columns the second one is drawn as the error of the
    first (``yerrorlines``) unless another style is set.
    """

    kind = SeriesKind.DATA

    def __init__(self, values: Any, dim: int) -> None:
        super().__init__()
        self.records = normalize_records(values, dim)

    @property
    def dim(self) -> int:
        return int(self.records.shape[1])

    def __len__(self) -> int:
        return int(self.records.shape[0])
