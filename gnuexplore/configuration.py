from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar


class Style(Enum):
    LINES = "lines"
    POINTS = "points"
    LINES_POINTS = "linespoints"
    STEPS = "steps"
    IMPULSES = "impulses"
    DOTS = "dots"
    YERROR_BARS = "yerrorbars"
    YERROR_LINES = "yerrorlines"

    @classmethod
    def parse(cls, tag: "Style | str") -> "Style":
        if isinstance(tag, Style):
            return tag
        key = str(tag).strip().lower().replace("_", "").replace("-", "").replace(" ", "")
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(f"unsupported style: {tag!r}")


@dataclass
class Configuration:
    """Display options; ``None`` leaves the gnuplot default in place."""

    title: str | None = None
    logx: float | None = None
    logy: float | None = None
    style: Style | None = None
    dashtype: int | None = None
    labelx: str | None = None
    labely: str | None = None


C = TypeVar("C", bound="Configurable")


class Configurable:
    configuration: Configuration

    def set_title(self: C, title: Any) -> C:
        self.configuration.title = str(title)
        return self

    def set_logx(self: C, logx: float) -> C:
        self.configuration.logx = float(logx)
        return self

    def set_logy(self: C, logy: float) -> C:
        self.configuration.logy = float(logy)
        return self

    def set_style(self: C, style: Style | str) -> C:
        self.configuration.style = Style.parse(style)
        return self

    def set_dashtype(self: C, dashtype: int) -> C:
        self.configuration.dashtype = int(dashtype)
        return self

    def set_labelx(self: C, label: Any) -> C:
        self.configuration.labelx = str(label)
        return self

    def set_labely(self: C, label: Any) -> C:
        self.configuration.labely = str(label)
        return self
