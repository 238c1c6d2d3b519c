from __future__ import annotations

from pathlib import Path
import subprocess
from typing import Any, Generic, Iterable, TypeVar

from gnuexplore import persistence, render, script
from gnuexplore.configuration import Configurable, Configuration
from gnuexplore.errors import PlotDataError
from gnuexplore.kinds import SeriesKind
from gnuexplore.series import Series
from gnuexplore.settings import OutputSettings, settings_from_env

S = TypeVar("S", bound=Series)


class Comparison(Configurable, Generic[S]):
    """Same-kind series sharing one plot frame.

    The comparison's own options drive the frame (title, log scales, labels) and
    fill in style/dashtype for children that leave them unset; each child's
    title is only used as its legend entry.
    """

    def __init__(self, children: Iterable[S] = ()) -> None:
        self.configuration = Configuration()
        self.children: list[S] = []
        self.add(children)

    def __len__(self) -> int:
        return len(self.children)

    @property
    def kind(self) -> SeriesKind | None:
        return self.children[0].kind if self.children else None

    def add(self, children: Iterable[S]) -> "Comparison[S]":
        incoming = list(children)
        kind = self.kind
        for child in incoming:
            if not isinstance(child, Series):
                raise PlotDataError(f"comparison children must be series, got {type(child)!r}")
            if kind is None:
                kind = child.kind
            elif child.kind is not kind:
                raise PlotDataError(f"cannot compare {child.kind.value} with {kind.value}")
        self.children.extend(incoming)
        return self

    def render(self, identifier: Any, *, settings: OutputSettings | None = None) -> str:
        return script.render(self, identifier, settings=settings)

    def save(self, identifier: Any, *, settings: OutputSettings | None = None) -> list[Path]:
        """Write every child's data file as ``{identifier}_{index}`` in insertion order."""
        cfg = settings or settings_from_env()
        return [
            persistence.write_data(child, persistence.child_identifier(identifier, index), settings=cfg)
            for index, child in enumerate(self.children)
        ]

    def write_plot_script(self, identifier: Any, *, settings: OutputSettings | None = None) -> Path:
        return script.write_script(self, identifier, settings=settings)

    def plot_later(self, identifier: Any, *, settings: OutputSettings | None = None) -> Path:
        cfg = settings or settings_from_env()
        script_path = self.write_plot_script(identifier, settings=cfg)
        self.save(identifier, settings=cfg)
        return script_path

    def plot(self, identifier: Any, *, settings: OutputSettings | None = None) -> subprocess.Popen[bytes]:
        cfg = settings or settings_from_env()
        script_path = self.plot_later(identifier, settings=cfg)
        return render.launch(script_path, settings=cfg)
